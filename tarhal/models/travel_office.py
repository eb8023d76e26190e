"""Travel office content record: an agency branch or partner office."""

from tarhal.extensions import db
from tarhal.models.json_column import JSONList
from tarhal.models.mixins import RecordMixin, ReviewWorkflowMixin, generate_id


class TravelOffice(ReviewWorkflowMixin, RecordMixin, db.Model):
    __tablename__ = "travel_offices"

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("office")
    )
    country_id = db.Column(
        db.String(64), db.ForeignKey("countries.id"), nullable=False, index=True
    )
    name_ar = db.Column(db.String(255), nullable=False)
    name_en = db.Column(db.String(255), nullable=False)
    name_fr = db.Column(db.String(255), nullable=False)
    address_ar = db.Column(db.Text, nullable=False)
    address_en = db.Column(db.Text, nullable=False)
    address_fr = db.Column(db.Text, nullable=False)
    phone = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    website = db.Column(db.Text)
    manager_ar = db.Column(db.String(255))
    manager_en = db.Column(db.String(255))
    manager_fr = db.Column(db.String(255))
    services_ar = db.Column(JSONList("travel_offices.services_ar"), default=list)
    services_en = db.Column(JSONList("travel_offices.services_en"), default=list)
    services_fr = db.Column(JSONList("travel_offices.services_fr"), default=list)
    working_hours_ar = db.Column(db.String(255), nullable=False)
    working_hours_en = db.Column(db.String(255), nullable=False)
    working_hours_fr = db.Column(db.String(255), nullable=False)
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    rating = db.Column(db.Float, default=4.5)
    reviews = db.Column(db.Integer, default=0)
    is_company_office = db.Column(db.Boolean, default=False)

    # --- Relationships ---
    country = db.relationship("Country", lazy="joined")

    def to_dict(self):
        data = super().to_dict()
        data["country_name"] = self.country.name_ar if self.country else None
        return data

    def __repr__(self):
        return f"<TravelOffice {self.name_en}>"
