"""System blueprint — /api/ping, /api/health, /api/audit-logs."""

from flask import Blueprint, current_app, request

from tarhal.blueprints.api import error_response, success_response
from tarhal.database import check_database_health
from tarhal.decorators import admin_required
from tarhal.services.audit_service import list_audit_entries

system_bp = Blueprint("system", __name__, url_prefix="/api")


@system_bp.route("/ping", methods=["GET"])
def ping():
    return success_response(message=current_app.config["PING_MESSAGE"])


@system_bp.route("/health", methods=["GET"])
def health():
    report = check_database_health()
    if not report["connected"]:
        return error_response("Database unavailable", 503, data=report)
    return success_response(report)


@system_bp.route("/audit-logs", methods=["GET"])
@admin_required
def audit_logs():
    try:
        limit = min(int(request.args.get("limit", 100)), 500)
    except ValueError:
        limit = 100
    entries = list_audit_entries(
        table_name=request.args.get("table_name"),
        record_id=request.args.get("record_id"),
        limit=limit,
    )
    data = [e.to_dict() for e in entries]
    return success_response(data, count=len(data))
