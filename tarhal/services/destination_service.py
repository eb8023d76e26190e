"""Destination service: catalogue of places, under review workflow."""

from tarhal.models.destination import Destination
from tarhal.services.content_service import ContentService
from tarhal.services.record_service import multilingual


class DestinationService(ContentService):
    model = Destination
    table_name = "destinations"
    label = "Destination"
    FILTER_FIELDS = ("country_id", "province_id", "city_id", "status", "category")
    EDITABLE_FIELDS = (
        "city_id", "province_id", "country_id",
        *multilingual("name", "description"),
        "main_image", "gallery", "latitude", "longitude",
        *multilingual("address"),
        "category", "rating", "reviews",
        *multilingual("best_time", "duration", "highlights", "attractions"),
        "entry_fee", "currency",
        *multilingual("opening_hours"),
        "contact_phone", "contact_email", "website",
        "status", "is_active",
    )


destinations = DestinationService()
