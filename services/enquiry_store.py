"""문의 저장소: 쿼리 빌더가 만든 문장을 실행하고 커밋/롤백을 책임진다.

앱 팩토리에서 세션을 주입받아 ``app.extensions["enquiry_store"]`` 로 등록된다.
"""
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from models.enquiry import DEFAULT_STATUS, Enquiry
from services.enquiry_query import (
    REQUIRED_FIELDS,
    REQUIRED_FIELDS_MESSAGE,
    build_delete,
    build_full_update,
    build_list_query,
    build_partial_update,
    coerce_field,
    has_required_fields,
)
from services.errors import NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)

# Integer PK 범위 (PostgreSQL int4 기준)
MAX_ENQUIRY_ID = 2**31 - 1


class EnquiryStore:
    def __init__(self, session, clock=datetime.now):
        self.session = session
        self.clock = clock

    def _fail(self, action, exc):
        self.session.rollback()
        logger.error("Enquiry %s failed: %s", action, exc, exc_info=True)
        return StoreError(f"Failed to {action} enquiry")

    @staticmethod
    def _check_id(enquiry_id):
        """컬럼 범위를 벗어난 id 는 드라이버에 넘기지 않고 없는 문의로 취급"""
        if not 0 < enquiry_id <= MAX_ENQUIRY_ID:
            raise NotFoundError()

    def list(self, sort=None, direction=None, status=None, search=None):
        stmt = build_list_query(sort=sort, direction=direction, status=status, search=search)
        try:
            return self.session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            raise self._fail("list", exc)

    def get(self, enquiry_id):
        self._check_id(enquiry_id)
        try:
            enquiry = self.session.get(Enquiry, enquiry_id)
        except SQLAlchemyError as exc:
            raise self._fail("fetch", exc)
        if enquiry is None:
            raise NotFoundError()
        return enquiry

    def create(self, uname, email, mobile):
        data = {"uname": uname, "email": email, "mobile": mobile}
        if not has_required_fields(data):
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        now = self.clock()
        enquiry = Enquiry(
            **{key: coerce_field(key, data[key]) for key in REQUIRED_FIELDS},
            status=DEFAULT_STATUS,
            contacted=False,
            created_at=now,
            updated_at=now,
            submission_datetime=now,
        )
        try:
            self.session.add(enquiry)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("create", exc)

        logger.info("Enquiry %s created", enquiry.id)
        return enquiry

    def _execute_update(self, enquiry_id, stmt):
        try:
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                self.session.rollback()
                raise NotFoundError()
            self.session.commit()
            return self.session.get(Enquiry, enquiry_id)
        except SQLAlchemyError as exc:
            raise self._fail("update", exc)

    def replace(self, enquiry_id, data):
        """전체 수정 (PUT)"""
        self._check_id(enquiry_id)
        stmt = build_full_update(enquiry_id, data, self.clock())
        enquiry = self._execute_update(enquiry_id, stmt)
        logger.info("Enquiry %s replaced", enquiry_id)
        return enquiry

    def patch(self, enquiry_id, fields):
        """부분 수정 (PATCH)"""
        self._check_id(enquiry_id)
        stmt = build_partial_update(enquiry_id, fields, self.clock())
        enquiry = self._execute_update(enquiry_id, stmt)
        logger.info("Enquiry %s updated: %s", enquiry_id, ", ".join(sorted(fields)))
        return enquiry

    def delete(self, enquiry_id):
        self._check_id(enquiry_id)
        try:
            result = self.session.execute(build_delete(enquiry_id))
            if result.rowcount == 0:
                self.session.rollback()
                raise NotFoundError()
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete", exc)

        logger.info("Enquiry %s deleted", enquiry_id)
        return enquiry_id
