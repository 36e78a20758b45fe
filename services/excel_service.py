"""문의 목록 엑셀 내보내기 헬퍼"""
from datetime import datetime
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

EXCEL_COLUMNS = [
    ("id", "ID"),
    ("uname", "Name"),
    ("email", "Email"),
    ("mobile", "Mobile"),
    ("status", "Status"),
    ("contacted", "Contacted"),
    ("followup_date", "Follow-up"),
    ("notes", "Notes"),
    ("submission_datetime", "Submitted"),
    ("updated_at", "Updated"),
]
EXCEL_COL_WIDTHS = {"A": 8, "B": 24, "C": 32, "D": 18, "E": 16, "F": 12, "G": 14, "H": 40, "I": 20, "J": 20}
EXCEL_HEADER_FONT = Font(bold=True, color="FFFFFF")
EXCEL_HEADER_FILL = PatternFill(start_color="003057", end_color="003057", fill_type="solid")
EXCEL_WRAP_ALIGN = Alignment(wrap_text=True, vertical="top")


def _to_date_text(value):
    if not value:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return value.strftime("%Y-%m-%d")


def _status_text(status):
    return (status or "new").replace("_", " ")


def _excel_row_values(enquiry):
    return {
        "id": enquiry.id,
        "uname": enquiry.uname or "",
        "email": enquiry.email or "",
        "mobile": enquiry.mobile or "",
        "status": _status_text(enquiry.status),
        "contacted": "Yes" if enquiry.contacted else "No",
        "followup_date": _to_date_text(enquiry.followup_date),
        "notes": enquiry.notes or "",
        "submission_datetime": _to_date_text(enquiry.submission_datetime),
        "updated_at": _to_date_text(enquiry.updated_at),
    }


def build_enquiry_workbook(enquiries):
    """문의 목록을 xlsx 바이트 스트림으로 생성"""
    wb = Workbook()
    ws = wb.active
    ws.title = "Enquiries"

    for col_idx, (_, label) in enumerate(EXCEL_COLUMNS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=label)
        cell.font = EXCEL_HEADER_FONT
        cell.fill = EXCEL_HEADER_FILL

    for row_idx, enquiry in enumerate(enquiries, start=2):
        values = _excel_row_values(enquiry)
        for col_idx, (key, _) in enumerate(EXCEL_COLUMNS, start=1):
            ws.cell(row=row_idx, column=col_idx, value=values[key]).alignment = EXCEL_WRAP_ALIGN

    for col, width in EXCEL_COL_WIDTHS.items():
        ws.column_dimensions[col].width = width
    ws.freeze_panes = "A2"

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
