"""Provinces blueprint — /api/provinces (filter: country_id)."""

from flask import Blueprint

from tarhal.blueprints.resources import register_record_routes
from tarhal.services.province_service import provinces
from tarhal.validators import validate_province

provinces_bp = Blueprint("provinces", __name__, url_prefix="/api/provinces")

register_record_routes(
    provinces_bp,
    provinces,
    validate_province,
    list_filters=("country_id",),
    permanent_delete=True,
)
