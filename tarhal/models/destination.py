"""Destination content record.

A place worth visiting, scoped to a country and optionally a province and
city. Moves through the review workflow before it is shown publicly.
"""

from tarhal.extensions import db
from tarhal.models.json_column import JSONList
from tarhal.models.mixins import RecordMixin, ReviewWorkflowMixin, generate_id


class Destination(ReviewWorkflowMixin, RecordMixin, db.Model):
    __tablename__ = "destinations"

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("destination")
    )
    city_id = db.Column(db.String(64), db.ForeignKey("cities.id"), index=True)
    province_id = db.Column(
        db.String(64), db.ForeignKey("provinces.id"), index=True
    )
    country_id = db.Column(
        db.String(64), db.ForeignKey("countries.id"), nullable=False, index=True
    )
    name_ar = db.Column(db.String(255), nullable=False)
    name_en = db.Column(db.String(255), nullable=False)
    name_fr = db.Column(db.String(255), default="")
    description_ar = db.Column(db.Text, nullable=False)
    description_en = db.Column(db.Text, nullable=False)
    description_fr = db.Column(db.Text, default="")
    main_image = db.Column(db.Text, nullable=False)
    gallery = db.Column(JSONList("destinations.gallery"), default=list)
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    address_ar = db.Column(db.Text)
    address_en = db.Column(db.Text)
    address_fr = db.Column(db.Text)
    category = db.Column(db.String(50))
    rating = db.Column(db.Float, default=4.5)
    reviews = db.Column(db.Integer, default=0)
    best_time_ar = db.Column(db.String(255))
    best_time_en = db.Column(db.String(255))
    best_time_fr = db.Column(db.String(255))
    duration_ar = db.Column(db.String(255))
    duration_en = db.Column(db.String(255))
    duration_fr = db.Column(db.String(255))
    highlights_ar = db.Column(JSONList("destinations.highlights_ar"), default=list)
    highlights_en = db.Column(JSONList("destinations.highlights_en"), default=list)
    highlights_fr = db.Column(JSONList("destinations.highlights_fr"), default=list)
    attractions_ar = db.Column(
        JSONList("destinations.attractions_ar"), default=list
    )
    attractions_en = db.Column(
        JSONList("destinations.attractions_en"), default=list
    )
    attractions_fr = db.Column(
        JSONList("destinations.attractions_fr"), default=list
    )
    entry_fee = db.Column(db.Float)
    currency = db.Column(db.String(3), default="USD")
    opening_hours_ar = db.Column(db.String(255))
    opening_hours_en = db.Column(db.String(255))
    opening_hours_fr = db.Column(db.String(255))
    contact_phone = db.Column(db.String(50))
    contact_email = db.Column(db.String(255))
    website = db.Column(db.Text)

    # --- Relationships (read-only display names) ---
    country = db.relationship("Country", lazy="joined")
    province = db.relationship("Province", lazy="joined")
    city = db.relationship("City", lazy="joined")

    def to_dict(self):
        data = super().to_dict()
        data["country_name"] = self.country.name_ar if self.country else None
        data["province_name"] = self.province.name_ar if self.province else None
        data["city_name"] = self.city.name_ar if self.city else None
        return data

    def __repr__(self):
        return f"<Destination {self.name_en} ({self.status})>"
