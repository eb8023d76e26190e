"""Event content record (festivals, seasons, cultural and sports events)."""

from tarhal.extensions import db
from tarhal.models.json_column import JSONList
from tarhal.models.mixins import RecordMixin, ReviewWorkflowMixin, generate_id


class Event(ReviewWorkflowMixin, RecordMixin, db.Model):
    __tablename__ = "events"

    EVENT_TYPES = ["festival", "season", "cultural", "sports", "religious", "other"]

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("event")
    )
    destination_id = db.Column(
        db.String(64), db.ForeignKey("destinations.id"), index=True
    )
    city_id = db.Column(db.String(64), db.ForeignKey("cities.id"), index=True)
    province_id = db.Column(
        db.String(64), db.ForeignKey("provinces.id"), index=True
    )
    country_id = db.Column(
        db.String(64), db.ForeignKey("countries.id"), nullable=False, index=True
    )
    title_ar = db.Column(db.String(255), nullable=False)
    title_en = db.Column(db.String(255), nullable=False)
    title_fr = db.Column(db.String(255), default="")
    description_ar = db.Column(db.Text, nullable=False)
    description_en = db.Column(db.Text, nullable=False)
    description_fr = db.Column(db.Text, default="")
    event_type = db.Column(
        db.String(20), nullable=False, default="other"
    )  # festival | season | cultural | sports | religious | other
    start_date = db.Column(db.String(32), nullable=False)  # ISO date
    end_date = db.Column(db.String(32), nullable=False)
    main_image = db.Column(db.Text)
    gallery = db.Column(JSONList("events.gallery"), default=list)
    location_ar = db.Column(db.String(255))
    location_en = db.Column(db.String(255))
    location_fr = db.Column(db.String(255))
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    organizer_ar = db.Column(db.String(255))
    organizer_en = db.Column(db.String(255))
    organizer_fr = db.Column(db.String(255))
    contact_phone = db.Column(db.String(50))
    contact_email = db.Column(db.String(255))
    website = db.Column(db.Text)
    ticket_price = db.Column(db.Float)
    currency = db.Column(db.String(3), default="USD")
    is_recurring = db.Column(db.Boolean, default=False)
    recurrence_pattern = db.Column(db.String(50))  # e.g. "yearly"
    highlights_ar = db.Column(JSONList("events.highlights_ar"), default=list)
    highlights_en = db.Column(JSONList("events.highlights_en"), default=list)
    highlights_fr = db.Column(JSONList("events.highlights_fr"), default=list)

    # --- Relationships (read-only display names) ---
    destination = db.relationship("Destination", lazy="joined")
    country = db.relationship("Country", lazy="joined")
    province = db.relationship("Province", lazy="joined")
    city = db.relationship("City", lazy="joined")

    def to_dict(self):
        data = super().to_dict()
        data["destination_name"] = (
            self.destination.name_ar if self.destination else None
        )
        data["country_name"] = self.country.name_ar if self.country else None
        data["province_name"] = self.province.name_ar if self.province else None
        data["city_name"] = self.city.name_ar if self.city else None
        return data

    def __repr__(self):
        return f"<Event {self.title_en} ({self.status})>"
