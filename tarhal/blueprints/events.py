"""Events blueprint — /api/events

Filters: country_id, province_id, city_id, destination_id, status,
event_type, start_date (on or after), end_date (on or before).
"""

from flask import Blueprint

from tarhal.blueprints.resources import register_record_routes, register_workflow_routes
from tarhal.services.event_service import events
from tarhal.validators import validate_event

events_bp = Blueprint("events", __name__, url_prefix="/api/events")

register_record_routes(
    events_bp,
    events,
    validate_event,
    list_filters=(
        "country_id", "province_id", "city_id", "destination_id",
        "status", "event_type", "start_date", "end_date",
    ),
)
register_workflow_routes(events_bp, events)
