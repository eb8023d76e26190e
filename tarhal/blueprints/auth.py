"""Auth blueprint — /api/auth

Route Map:
  POST /api/auth/login    — Exchange email/password for a bearer token
  POST /api/auth/logout   — Acknowledge logout (tokens are stateless)
  GET  /api/auth/me       — The signed-in user
"""

import logging

from flask import Blueprint, current_app
from flask_login import current_user

from tarhal.blueprints.api import error_response, json_body, success_response
from tarhal.decorators import login_required_api
from tarhal.extensions import limiter
from tarhal.services import auth_service
from tarhal.services.audit_service import log_audit_action

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _login_limit():
    return current_app.config["LOGIN_RATE_LIMIT"]


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(_login_limit, methods=["POST"])
def login():
    data = json_body()
    email = data.get("email")
    password = data.get("password")
    if not email or not password:
        return error_response("Email and password are required", 400)

    user = auth_service.authenticate(email, password)
    if user is None:
        logger.info(f"Failed login for {email}")
        return error_response("Invalid email or password", 401)

    token = auth_service.issue_token(user)
    log_audit_action(user.id, "login", "users", user.id)
    return success_response(
        {"token": token, "user": user.to_dict()}, message="Login successful"
    )


@auth_bp.route("/logout", methods=["POST"])
def logout():
    if current_user.is_authenticated:
        logger.info(f"User {current_user.id} logged out")
    return success_response(message="Logged out")


@auth_bp.route("/me", methods=["GET"])
@login_required_api
def me():
    return success_response(current_user.to_dict())
