"""Route factory for catalogue resources.

Every resource family exposes the same surface:

  GET    /<resource>                  — List (?active=false includes hidden)
  GET    /<resource>/<id>             — Detail
  POST   /<resource>                  — Create (201)
  PUT    /<resource>/<id>             — Partial update
  (a body setting status to published or archived needs an admin)
  DELETE /<resource>/<id>             — Soft delete
  DELETE /<resource>/<id>/permanent   — Hard delete (admin, opt-in)

Content resources add the review workflow:

  POST   /<resource>/<id>/submit      — Submit for review (any signed-in user)
  POST   /<resource>/<id>/approve     — Publish (admin)
  POST   /<resource>/<id>/reject      — Back to draft with {reason} (admin)
"""

import bleach
from flask import request
from flask_login import current_user

from tarhal.blueprints.api import (
    active_only,
    error_response,
    json_body,
    query_flag,
    success_response,
)
from tarhal.decorators import admin_required, current_actor_id, login_required_api

DEFAULT_REJECTION_REASON = "Rejected by reviewer"

# Statuses a body may only set when the caller is an admin
ADMIN_STATUSES = ("published", "archived")


def _sets_admin_status(data):
    return data.get("status") in ADMIN_STATUSES and not current_user.is_admin


def _sanitize(text):
    """Strip all HTML tags from user input."""
    if text is None:
        return text
    return bleach.clean(str(text), tags=[], strip=True).strip()


def register_record_routes(bp, service, validate, list_filters=(),
                           flag_filters=(), write_guard=login_required_api,
                           permanent_delete=False):
    """Attach list/detail/create/update/delete routes for ``service`` to ``bp``."""
    label = service.label

    def collect_filters():
        filters = {name: request.args.get(name) for name in list_filters}
        for name in flag_filters:
            filters[name] = query_flag(name)
        return filters

    @bp.route("", methods=["GET"])
    def list_records():
        records = service.list_records(active_only=active_only(), **collect_filters())
        data = [r.to_dict() for r in records]
        return success_response(data, count=len(data))

    @bp.route("/<record_id>", methods=["GET"])
    def get_record(record_id):
        record = service.get(record_id)
        if record is None:
            return error_response(f"{label} not found", 404)
        return success_response(record.to_dict())

    @bp.route("", methods=["POST"])
    @write_guard
    def create_record():
        data = json_body()
        validate(data)
        if _sets_admin_status(data):
            return error_response("Admin access required", 403)
        record = service.create(data, current_actor_id())
        return success_response(
            record.to_dict(), message=f"{label} created successfully", status=201
        )

    @bp.route("/<record_id>", methods=["PUT"])
    @write_guard
    def update_record(record_id):
        data = json_body()
        validate(data, partial=True)
        if _sets_admin_status(data):
            return error_response("Admin access required", 403)
        record = service.update(record_id, data, current_actor_id())
        return success_response(
            record.to_dict(), message=f"{label} updated successfully"
        )

    @bp.route("/<record_id>", methods=["DELETE"])
    @write_guard
    def delete_record(record_id):
        if not service.soft_delete(record_id, current_actor_id()):
            return error_response(f"{label} not found", 404)
        return success_response(message=f"{label} deleted successfully")

    if permanent_delete:
        @bp.route("/<record_id>/permanent", methods=["DELETE"])
        @admin_required
        def purge_record(record_id):
            if not service.hard_delete(record_id, current_actor_id()):
                return error_response(f"{label} not found", 404)
            return success_response(message=f"{label} permanently deleted")


def register_workflow_routes(bp, service, submit_guard=login_required_api,
                             review_guard=admin_required):
    """Attach submit/approve/reject routes for a content ``service``."""

    @bp.route("/<record_id>/submit", methods=["POST"])
    @submit_guard
    def submit_record(record_id):
        record = service.submit_for_review(record_id, current_actor_id())
        return success_response(record.to_dict(), message="Submitted for review")

    @bp.route("/<record_id>/approve", methods=["POST"])
    @review_guard
    def approve_record(record_id):
        record = service.approve(record_id, current_actor_id())
        return success_response(record.to_dict(), message="Approved and published")

    @bp.route("/<record_id>/reject", methods=["POST"])
    @review_guard
    def reject_record(record_id):
        data = request.get_json(silent=True) or {}
        reason = _sanitize(data.get("reason")) if isinstance(data, dict) else None
        record = service.reject(
            record_id, current_actor_id(), reason or DEFAULT_REJECTION_REASON
        )
        return success_response(record.to_dict(), message="Rejected")
