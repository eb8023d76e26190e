"""Province reference record (first-level subdivision of a country)."""

from tarhal.extensions import db
from tarhal.models.mixins import RecordMixin, generate_id


class Province(RecordMixin, db.Model):
    __tablename__ = "provinces"

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("province")
    )
    country_id = db.Column(
        db.String(64), db.ForeignKey("countries.id"), nullable=False, index=True
    )
    name_ar = db.Column(db.String(255), nullable=False)
    name_en = db.Column(db.String(255), default="")
    name_fr = db.Column(db.String(255), default="")
    code = db.Column(db.String(20))
    description_ar = db.Column(db.Text, default="")
    description_en = db.Column(db.Text, default="")
    description_fr = db.Column(db.Text, default="")
    capital_ar = db.Column(db.String(255), default="")
    capital_en = db.Column(db.String(255), default="")
    capital_fr = db.Column(db.String(255), default="")
    main_image = db.Column(db.Text)
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)

    # --- Relationships ---
    country = db.relationship("Country", lazy="joined")

    def to_dict(self):
        data = super().to_dict()
        data["country_name"] = self.country.name_ar if self.country else None
        return data

    def __repr__(self):
        return f"<Province {self.name_ar}>"
