"""Travel offices blueprint — /api/travel-offices

All mutations, including the review workflow, are admin-only.

Route Map (beyond the shared resource routes):
  GET  /api/travel-offices/statistics             — Counts and rating summary
  GET  /api/travel-offices/country/<country_id>   — Offices in one country
"""

from flask import Blueprint

from tarhal.blueprints.api import active_only, success_response
from tarhal.blueprints.resources import register_record_routes, register_workflow_routes
from tarhal.decorators import admin_required
from tarhal.services.travel_office_service import travel_offices
from tarhal.validators import validate_travel_office

travel_offices_bp = Blueprint(
    "travel_offices", __name__, url_prefix="/api/travel-offices"
)


@travel_offices_bp.route("/statistics", methods=["GET"])
def statistics():
    return success_response(travel_offices.statistics())


@travel_offices_bp.route("/country/<country_id>", methods=["GET"])
def by_country(country_id):
    records = travel_offices.list_records(
        active_only=active_only(), country_id=country_id
    )
    data = [r.to_dict() for r in records]
    return success_response(data, count=len(data))


register_record_routes(
    travel_offices_bp,
    travel_offices,
    validate_travel_office,
    list_filters=("country_id", "status", "search", "language"),
    flag_filters=("with_location", "is_company_office"),
    write_guard=admin_required,
    permanent_delete=True,
)
register_workflow_routes(
    travel_offices_bp, travel_offices, submit_guard=admin_required
)
