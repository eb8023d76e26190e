"""Countries blueprint — /api/countries

Filters: continent, search (+ language=ar|en|fr). Mutations are admin-only.

  GET  /api/countries/statistics   — Counts by continent, ratings, totals
"""

from flask import Blueprint

from tarhal.blueprints.api import success_response
from tarhal.blueprints.resources import register_record_routes
from tarhal.decorators import admin_required
from tarhal.services.country_service import countries
from tarhal.validators import validate_country

countries_bp = Blueprint("countries", __name__, url_prefix="/api/countries")


@countries_bp.route("/statistics", methods=["GET"])
def statistics():
    return success_response(countries.statistics())


register_record_routes(
    countries_bp,
    countries,
    validate_country,
    list_filters=("continent", "search", "language"),
    write_guard=admin_required,
    permanent_delete=True,
)
