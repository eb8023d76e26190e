"""Event service: dated happenings, under review workflow.

Listing adds a date window: start_date >= from, end_date <= to. Dates are
ISO strings, so lexical comparison is chronological.
"""

from tarhal.models.event import Event
from tarhal.services.content_service import ContentService
from tarhal.services.record_service import multilingual


class EventService(ContentService):
    model = Event
    table_name = "events"
    label = "Event"
    FILTER_FIELDS = (
        "country_id", "province_id", "city_id", "destination_id",
        "status", "event_type",
    )
    EDITABLE_FIELDS = (
        "destination_id", "city_id", "province_id", "country_id",
        *multilingual("title", "description"),
        "event_type", "start_date", "end_date",
        "main_image", "gallery",
        *multilingual("location"),
        "latitude", "longitude",
        *multilingual("organizer"),
        "contact_phone", "contact_email", "website",
        "ticket_price", "currency", "is_recurring", "recurrence_pattern",
        *multilingual("highlights"),
        "status", "is_active",
    )

    def ordering(self):
        return [Event.start_date.desc(), Event.title_ar]

    def apply_filters(self, query, filters):
        query = super().apply_filters(query, filters)
        if filters.get("start_date"):
            query = query.filter(Event.start_date >= filters["start_date"])
        if filters.get("end_date"):
            query = query.filter(Event.end_date <= filters["end_date"])
        return query


events = EventService()
