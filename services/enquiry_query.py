"""문의 목록/수정 쿼리 빌더.

요청 파라미터(정렬/필터/검색/수정 필드)를 파라미터 바인딩된 SQLAlchemy
문장으로 변환한다. 식별자(컬럼/정렬 방향)는 허용 목록에 있는 것만 쓰고,
사용자 입력 값은 모두 바인드 파라미터로 전달된다.
"""
from datetime import date, datetime

from sqlalchemy import bindparam, delete, or_, select, update

from models.enquiry import DEFAULT_STATUS, ENQUIRY_STATUSES, Enquiry
from services.errors import ValidationError

SORTABLE_FIELDS = ("uname", "email", "mobile", "created_at", "status", "submission_datetime")
SORT_DIRECTIONS = ("asc", "desc")
DEFAULT_SORT_FIELD = "created_at"
DEFAULT_SORT_DIRECTION = "desc"

REQUIRED_FIELDS = ("uname", "email", "mobile")
UPDATABLE_FIELDS = REQUIRED_FIELDS + ("contacted", "followup_date", "notes", "status")

REQUIRED_FIELDS_MESSAGE = "Name, email, and mobile are required fields"
EMPTY_UPDATE_MESSAGE = "No fields provided for update"

TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
LIKE_ESCAPE = "/"


def resolve_sort(sort, direction):
    """허용 목록 밖의 값은 created_at / desc 로 대체"""
    field = sort if sort in SORTABLE_FIELDS else DEFAULT_SORT_FIELD
    direction = direction if direction in SORT_DIRECTIONS else DEFAULT_SORT_DIRECTION
    return field, direction


def _escape_like(term):
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_list_query(sort=None, direction=None, status=None, search=None):
    stmt = select(Enquiry)

    if status and status != "all":
        stmt = stmt.where(Enquiry.status == status)

    if search:
        # 하나의 파라미터를 세 컬럼 비교에 재사용
        pattern = bindparam("search", f"%{_escape_like(search)}%")
        stmt = stmt.where(
            or_(
                Enquiry.uname.ilike(pattern, escape=LIKE_ESCAPE),
                Enquiry.email.ilike(pattern, escape=LIKE_ESCAPE),
                Enquiry.mobile.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    field, direction = resolve_sort(sort, direction)
    column = getattr(Enquiry, field)
    if direction == "asc":
        return stmt.order_by(column.asc(), Enquiry.id.asc())
    return stmt.order_by(column.desc(), Enquiry.id.desc())


# ── 필드 값 변환 ──


def _parse_bool(value):
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def _parse_date(value):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # 날짜 뒤에는 "T..." 시간 부분만 허용
    date_part, _, _ = str(value).strip().partition("T")
    try:
        return datetime.strptime(date_part, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("followup_date format must be YYYY-MM-DD")


def _required_text(key, value):
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(f"{key} must not be empty")
    return text


def coerce_field(key, value):
    """컬럼별 입력 값을 저장 가능한 값으로 변환 (잘못된 값은 ValidationError)"""
    if key in REQUIRED_FIELDS:
        return _required_text(key, value)
    if key == "status":
        if value not in ENQUIRY_STATUSES:
            raise ValidationError(f"status must be one of {list(ENQUIRY_STATUSES)}")
        return value
    if key == "contacted":
        return _parse_bool(value)
    if key == "followup_date":
        return _parse_date(value)
    if key == "notes":
        return None if value is None else str(value)
    raise ValidationError(f"Field '{key}' cannot be updated")


def has_required_fields(data):
    return all(str(data.get(key) or "").strip() for key in REQUIRED_FIELDS)


# ── 수정/삭제 문장 ──


def build_full_update(enquiry_id, data, now):
    """전체 수정: 7개 컬럼 + updated_at 을 항상 덮어쓴다 (미입력 값은 빈 값으로)"""
    if not has_required_fields(data):
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)

    values = {key: coerce_field(key, data.get(key)) for key in REQUIRED_FIELDS}
    values["contacted"] = coerce_field("contacted", data.get("contacted"))
    values["followup_date"] = coerce_field("followup_date", data.get("followup_date"))
    values["notes"] = coerce_field("notes", data.get("notes"))
    values["status"] = coerce_field("status", data.get("status") or DEFAULT_STATUS)
    values["updated_at"] = now

    return update(Enquiry).where(Enquiry.id == enquiry_id).values(**values)


def build_partial_update(enquiry_id, fields, now):
    """부분 수정: 전달된 키만 SET 절에 포함"""
    if not fields:
        raise ValidationError(EMPTY_UPDATE_MESSAGE)

    unknown = [key for key in fields if key not in UPDATABLE_FIELDS]
    if unknown:
        raise ValidationError(f"Field '{unknown[0]}' cannot be updated")

    values = {key: coerce_field(key, value) for key, value in fields.items()}
    values["updated_at"] = now

    return update(Enquiry).where(Enquiry.id == enquiry_id).values(**values)


def build_delete(enquiry_id):
    return delete(Enquiry).where(Enquiry.id == enquiry_id)
