"""문의 블루프린트: 공개 접수 + 관리자 REST API."""

import logging

from flask import Blueprint, current_app, jsonify, request, send_file

from extensions import limiter
from routes.utils import error_response, get_store, json_body
from services.errors import NotFoundError, StoreError, ValidationError
from services.excel_service import build_enquiry_workbook
from services.notification_service import NotificationService

logger = logging.getLogger(__name__)

enquiry_bp = Blueprint("enquiry", __name__)


def _list_args():
    return {
        "sort": request.args.get("sort"),
        "direction": request.args.get("direction"),
        "status": request.args.get("status"),
        "search": request.args.get("search"),
    }


# ── 공개 ──


@enquiry_bp.route("/api/enquire", methods=["POST"])
@limiter.limit(lambda: current_app.config.get("ENQUIRY_RATE_LIMIT", "10 per minute"))
def create_enquiry():
    data = json_body()
    try:
        enquiry = get_store().create(data.get("uname"), data.get("email"), data.get("mobile"))
    except ValidationError as exc:
        return error_response(exc.message, 400)
    except StoreError:
        return error_response("Failed to create enquiry", 500)

    payload = enquiry.to_dict()
    NotificationService.send_new_enquiry_notification(payload)
    return jsonify(payload), 201


# ── 관리자 ──


@enquiry_bp.route("/api/admin/enquiries")
def list_enquiries():
    try:
        enquiries = get_store().list(**_list_args())
    except StoreError:
        return error_response("Failed to fetch enquiries", 500)
    return jsonify([e.to_dict() for e in enquiries])


@enquiry_bp.route("/api/admin/enquiries/export")
def export_enquiries():
    try:
        enquiries = get_store().list(**_list_args())
        output = build_enquiry_workbook(enquiries)
    except StoreError:
        return error_response("Failed to export enquiries", 500)

    logger.info("Enquiry export generated (%d rows)", len(enquiries))
    return send_file(
        output,
        as_attachment=True,
        download_name="enquiries_export.xlsx",
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


@enquiry_bp.route("/api/admin/enquiries/<int:enquiry_id>")
def get_enquiry(enquiry_id):
    try:
        enquiry = get_store().get(enquiry_id)
    except NotFoundError as exc:
        return error_response(exc.message, 404)
    except StoreError:
        return error_response("Failed to fetch enquiry", 500)
    return jsonify(enquiry.to_dict())


@enquiry_bp.route("/api/admin/enquiries/<int:enquiry_id>", methods=["PUT"])
def replace_enquiry(enquiry_id):
    try:
        enquiry = get_store().replace(enquiry_id, json_body())
    except ValidationError as exc:
        return error_response(exc.message, 400)
    except NotFoundError as exc:
        return error_response(exc.message, 404)
    except StoreError:
        return error_response("Failed to update enquiry", 500)
    return jsonify(enquiry.to_dict())


@enquiry_bp.route("/api/admin/enquiries/<int:enquiry_id>", methods=["PATCH"])
def patch_enquiry(enquiry_id):
    try:
        enquiry = get_store().patch(enquiry_id, json_body())
    except ValidationError as exc:
        return error_response(exc.message, 400)
    except NotFoundError as exc:
        return error_response(exc.message, 404)
    except StoreError:
        return error_response("Failed to update enquiry", 500)
    return jsonify(enquiry.to_dict())


@enquiry_bp.route("/api/admin/enquiries/<int:enquiry_id>", methods=["DELETE"])
def delete_enquiry(enquiry_id):
    try:
        deleted_id = get_store().delete(enquiry_id)
    except NotFoundError as exc:
        return error_response(exc.message, 404)
    except StoreError:
        return error_response("Failed to delete enquiry", 500)
    return jsonify({"message": "Enquiry deleted successfully", "id": deleted_id})
