"""문의(enquiry) 처리 예외: 라우트에서 HTTP 상태 코드로 변환된다."""


class EnquiryError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(EnquiryError):
    """필수 입력 누락/형식 오류 (400)"""
    status_code = 400


class NotFoundError(EnquiryError):
    """id에 해당하는 문의 없음 (404)"""
    status_code = 404

    def __init__(self, message="Enquiry not found"):
        super().__init__(message)


class StoreError(EnquiryError):
    """DB 실행 실패 (500): 응답에는 고정 문구만 노출"""
    status_code = 500
