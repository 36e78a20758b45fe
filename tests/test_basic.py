import json
import logging
from io import BytesIO

from openpyxl import load_workbook


def test_health(client):
    """DB 연결 상태 확인"""
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {"status": "healthy", "database": "connected"}


def test_security_headers_present(client):
    """보안 헤더가 모든 응답에 포함되어야 함"""
    resp = client.get("/api/admin/enquiries")
    assert resp.headers.get("X-Frame-Options") == "SAMEORIGIN"
    assert resp.headers.get("X-Content-Type-Options") == "nosniff"
    assert resp.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"


def test_unknown_route_returns_json_404(client):
    response = client.get('/non_existent_page')
    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_method_not_allowed(client):
    response = client.post('/api/admin/enquiries')
    assert response.status_code == 405
    assert response.get_json() == {"error": "Method not allowed"}


def test_new_enquiry_notification_logged_without_smtp(client, caplog):
    """SMTP 미설정 시 메일 대신 로그만 남김"""
    with caplog.at_level(logging.INFO, logger="services.notification_service"):
        resp = client.post(
            "/api/enquire",
            data=json.dumps({"uname": "Alice", "email": "a@x.com", "mobile": "9999999999"}),
            content_type="application/json",
        )
    assert resp.status_code == 201
    assert any("[MOCK EMAIL]" in r.getMessage() and "Alice" in r.getMessage() for r in caplog.records)


def test_export_enquiries_workbook(client):
    for name, email in [("Alice", "alice@x.com"), ("Bob", "bob@x.com")]:
        client.post(
            "/api/enquire",
            data=json.dumps({"uname": name, "email": email, "mobile": "123"}),
            content_type="application/json",
        )

    response = client.get("/api/admin/enquiries/export?search=alice")

    assert response.status_code == 200
    assert response.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    worksheet = load_workbook(BytesIO(response.data)).active
    headers = [worksheet.cell(row=1, column=i).value for i in range(1, 6)]
    assert headers == ["ID", "Name", "Email", "Mobile", "Status"]
    assert worksheet.cell(row=2, column=2).value == "Alice"
    assert worksheet.cell(row=2, column=5).value == "new"
    assert worksheet.cell(row=3, column=2).value is None
