"""Cities blueprint — /api/cities (filters: country_id, province_id)."""

from flask import Blueprint

from tarhal.blueprints.resources import register_record_routes
from tarhal.services.city_service import cities
from tarhal.validators import validate_city

cities_bp = Blueprint("cities", __name__, url_prefix="/api/cities")

register_record_routes(
    cities_bp,
    cities,
    validate_city,
    list_filters=("country_id", "province_id"),
    permanent_delete=True,
)
