"""JSON envelope helpers shared by every /api blueprint.

Every response is {"success": bool, "data"?, "error"?, "message"?}.
"""

from flask import jsonify, request

from tarhal.validators import require_json_object


def success_response(data=None, message=None, status=200, **extra):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    body.update(extra)
    return jsonify(body), status


def error_response(error, status=400, **extra):
    body = {"success": False, "error": error}
    body.update(extra)
    return jsonify(body), status


def json_body():
    """The request's JSON object; ValidationError if it is not one."""
    return require_json_object(request.get_json(silent=True))


def query_flag(name, default=None):
    """Parse ?name=true|false; anything else yields ``default``."""
    value = request.args.get(name)
    if value is None:
        return default
    value = value.lower()
    if value in ("1", "true", "yes"):
        return True
    if value in ("0", "false", "no"):
        return False
    return default


def active_only():
    """Listings hide soft-deleted rows unless ?active=false."""
    return request.args.get("active") != "false"
