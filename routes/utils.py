from flask import current_app, jsonify, request


def get_store():
    """앱 팩토리에서 주입한 EnquiryStore"""
    return current_app.extensions["enquiry_store"]


def json_body() -> dict:
    """JSON 객체 본문 (없거나 객체가 아니면 빈 dict)"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(message: str, status_code: int):
    return jsonify({"error": message}), status_code
