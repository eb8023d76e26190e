"""Destinations blueprint — /api/destinations

Filters: country_id, province_id, city_id, status, category.
Writes need a signed-in user; approve/reject need an admin.
"""

from flask import Blueprint

from tarhal.blueprints.resources import register_record_routes, register_workflow_routes
from tarhal.services.destination_service import destinations
from tarhal.validators import validate_destination

destinations_bp = Blueprint("destinations", __name__, url_prefix="/api/destinations")

register_record_routes(
    destinations_bp,
    destinations,
    validate_destination,
    list_filters=("country_id", "province_id", "city_id", "status", "category"),
)
register_workflow_routes(destinations_bp, destinations)
