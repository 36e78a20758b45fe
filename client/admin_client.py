"""관리자 대시보드 클라이언트.

관리자 화면의 상태(목록 캐시, 로딩/오류, 검색·정렬·필터, 수정 모달)를
보관하고 REST API 와 동기화한다. 브라우저 confirm/alert 대신 호출자가
넘겨준 콜백을 사용한다.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable

import requests

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5
DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this enquiry?"

EMPTY_FORM = {
    "uname": "",
    "email": "",
    "mobile": "",
    "contacted": False,
    "followup_date": "",
    "notes": "",
    "status": "new",
    "submission_datetime": "",
}


class EnquiryAdminClient:
    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        confirm: Callable[[str], bool] | None = None,
        alert: Callable[[str], None] | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.confirm = confirm
        self.alert = alert or (lambda message: logger.warning("%s", message))
        self.debounce_seconds = debounce_seconds

        self.enquiries: list[dict[str, Any]] = []
        # 첫 조회가 끝날 때까지 로딩 상태
        self.loading = True
        self.error: str | None = None

        self.search_term = ""
        self.sort_field = "created_at"
        self.sort_direction = "desc"
        self.filter_status = "all"

        self.is_modal_open = False
        self.current_enquiry: dict[str, Any] | None = None
        self.form_data: dict[str, Any] = dict(EMPTY_FORM)

        self._search_timer: threading.Timer | None = None
        self._timer_lock = threading.Lock()
        # 디바운스 타이머 스레드와 호출 스레드가 함께 쓰는 목록 상태 보호
        self._state_lock = threading.Lock()
        self._fetch_seq = 0

    # ── HTTP ──

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """성공 시 JSON 본문, 실패 시 RuntimeError"""
        try:
            resp = self.session.request(method, self._url(path), **kwargs)
        except requests.RequestException as exc:
            raise RuntimeError(str(exc)) from exc
        if not resp.ok:
            raise RuntimeError(f"{method} {path} failed with status {resp.status_code}")
        return resp.json()

    def _item_path(self, enquiry_id: int) -> str:
        return f"/api/admin/enquiries/{enquiry_id}"

    # ── 목록 조회 ──

    def query_params(self) -> dict[str, str]:
        params = {}
        if self.sort_field:
            params["sort"] = self.sort_field
        if self.sort_direction:
            params["direction"] = self.sort_direction
        if self.filter_status != "all":
            params["status"] = self.filter_status
        if self.search_term:
            params["search"] = self.search_term
        return params

    def fetch_enquiries(self) -> list[dict[str, Any]]:
        """목록 재조회. 더 최근에 시작된 조회가 있으면 이 응답은 버린다"""
        with self._state_lock:
            self._fetch_seq += 1
            seq = self._fetch_seq
            self.loading = True
            params = self.query_params()

        enquiries, error = None, None
        try:
            enquiries = self._request("GET", "/api/admin/enquiries", params=params)
        except (RuntimeError, ValueError) as exc:
            error = "Failed to fetch enquiries"
            logger.error("Error fetching enquiries: %s", exc)

        with self._state_lock:
            if seq != self._fetch_seq:
                logger.debug("Discarding stale enquiry list for %s", params)
                return self.enquiries
            if error is None:
                self.enquiries = enquiries
            self.error = error
            self.loading = False
            return self.enquiries

    def get_enquiry(self, enquiry_id: int) -> dict[str, Any]:
        """단건 조회 (실패 시 RuntimeError)"""
        return self._request("GET", self._item_path(enquiry_id))

    def set_sort_field(self, field: str) -> None:
        self.sort_field = field
        self.fetch_enquiries()

    def set_sort_direction(self, direction: str) -> None:
        self.sort_direction = direction
        self.fetch_enquiries()

    def set_filter_status(self, status: str) -> None:
        self.filter_status = status
        self.fetch_enquiries()

    def handle_sort(self, field: str) -> None:
        """같은 컬럼이면 방향 토글, 다른 컬럼이면 오름차순으로 전환"""
        if self.sort_field == field:
            self.sort_direction = "desc" if self.sort_direction == "asc" else "asc"
        else:
            self.sort_field = field
            self.sort_direction = "asc"
        self.fetch_enquiries()

    # ── 검색 (디바운스) ──

    def set_search_term(self, term: str) -> None:
        self.search_term = term
        with self._timer_lock:
            if self._search_timer is not None:
                self._search_timer.cancel()
            self._search_timer = threading.Timer(self.debounce_seconds, self.fetch_enquiries)
            self._search_timer.daemon = True
            self._search_timer.start()

    def wait_for_search(self, timeout: float | None = None) -> None:
        """대기 중인 검색 조회가 끝날 때까지 블록"""
        with self._timer_lock:
            timer = self._search_timer
        if timer is not None:
            timer.join(timeout)

    def cancel_pending_search(self) -> None:
        with self._timer_lock:
            if self._search_timer is not None:
                self._search_timer.cancel()
                self._search_timer = None

    # ── 부분 수정 (체크박스/상태 토글) ──

    def update_field(self, enquiry_id: int, field: str, value: Any) -> bool:
        try:
            updated = self._request("PATCH", self._item_path(enquiry_id), json={field: value})
        except (RuntimeError, ValueError) as exc:
            logger.error("Error updating status: %s", exc)
            self.alert("Failed to update status. Please try again.")
            return False

        with self._state_lock:
            self.enquiries = [
                {**item, field: updated.get(field, value)} if item.get("id") == enquiry_id else item
                for item in self.enquiries
            ]
        return True

    def toggle_contacted(self, enquiry_id: int, contacted: bool) -> bool:
        return self.update_field(enquiry_id, "contacted", contacted)

    def set_status(self, enquiry_id: int, status: str) -> bool:
        return self.update_field(enquiry_id, "status", status)

    # ── 수정 모달 ──

    def open_edit_modal(self, enquiry: dict[str, Any]) -> None:
        self.current_enquiry = enquiry
        self.form_data = {
            "uname": enquiry.get("uname"),
            "email": enquiry.get("email"),
            "mobile": enquiry.get("mobile"),
            "contacted": enquiry.get("contacted") or False,
            "followup_date": enquiry.get("followup_date") or "",
            "notes": enquiry.get("notes") or "",
            "status": enquiry.get("status") or "new",
            "submission_datetime": enquiry.get("submission_datetime") or "",
        }
        self.is_modal_open = True

    def set_form_value(self, name: str, value: Any) -> None:
        self.form_data = {**self.form_data, name: value}

    def close_edit_modal(self) -> None:
        self.is_modal_open = False

    def submit_edit(self) -> bool:
        if self.current_enquiry is None:
            return False
        enquiry_id = self.current_enquiry["id"]
        try:
            updated = self._request("PUT", self._item_path(enquiry_id), json=self.form_data)
        except (RuntimeError, ValueError) as exc:
            logger.error("Error updating enquiry: %s", exc)
            self.alert("Failed to update enquiry. Please try again.")
            return False

        with self._state_lock:
            self.enquiries = [
                updated if item.get("id") == enquiry_id else item for item in self.enquiries
            ]
        self.is_modal_open = False
        return True

    # ── 삭제 ──

    def delete_enquiry(self, enquiry_id: int) -> bool:
        if self.confirm is None or not self.confirm(DELETE_CONFIRM_MESSAGE):
            return False

        try:
            self._request("DELETE", self._item_path(enquiry_id))
        except (RuntimeError, ValueError) as exc:
            logger.error("Error deleting enquiry: %s", exc)
            self.alert("Failed to delete enquiry. Please try again.")
            return False

        with self._state_lock:
            self.enquiries = [item for item in self.enquiries if item.get("id") != enquiry_id]
        return True

    # ── 공개 접수 ──

    def create_enquiry(self, uname: str, email: str, mobile: str) -> dict[str, Any]:
        """공개 폼 제출 (실패 시 RuntimeError)"""
        return self._request(
            "POST", "/api/enquire", json={"uname": uname, "email": email, "mobile": mobile}
        )
