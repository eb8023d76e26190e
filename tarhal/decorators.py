"""
Custom route decorators for access control.

Callers authenticate with "Authorization: Bearer <jwt>"; Flask-Login's
request_loader resolves it to current_user.

- login_required_api: 401 unless the token resolves to an active user.
- admin_required: 401 without a token, 403 for an invalid token or a
  non-admin user.
"""

from functools import wraps

from flask import request
from flask_login import current_user

from tarhal.blueprints.api import error_response


def current_actor_id():
    """Id of the authenticated caller, or None."""
    if current_user.is_authenticated:
        return current_user.id
    return None


def login_required_api(f):
    """Require a valid bearer token."""

    @wraps(f)
    def decorated(*args, **kwargs):
        if not current_user.is_authenticated:
            return error_response("Unauthorized", 401)
        return f(*args, **kwargs)

    return decorated


def admin_required(f):
    """Require a valid bearer token with role=admin."""

    @wraps(f)
    def decorated(*args, **kwargs):
        if not request.headers.get("Authorization"):
            return error_response("Access token required", 401)
        if not current_user.is_authenticated:
            return error_response("Invalid or expired token", 403)
        if not current_user.is_admin:
            return error_response("Admin access required", 403)
        return f(*args, **kwargs)

    return decorated
