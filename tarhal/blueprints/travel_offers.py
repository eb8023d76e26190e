"""Travel offers blueprint — /api/travel-offers

Filters: country_id, is_featured=true|false. Newest offers first.
Mutations are admin-only; DELETE hides an offer, /permanent removes it.
"""

from flask import Blueprint

from tarhal.blueprints.resources import register_record_routes
from tarhal.decorators import admin_required
from tarhal.services.travel_offer_service import travel_offers
from tarhal.validators import validate_travel_offer

travel_offers_bp = Blueprint("travel_offers", __name__, url_prefix="/api/travel-offers")

register_record_routes(
    travel_offers_bp,
    travel_offers,
    validate_travel_offer,
    list_filters=("country_id",),
    flag_filters=("is_featured",),
    write_guard=admin_required,
    permanent_delete=True,
)
