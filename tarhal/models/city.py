"""City reference record."""

from tarhal.extensions import db
from tarhal.models.json_column import JSONList
from tarhal.models.mixins import RecordMixin, generate_id


class City(RecordMixin, db.Model):
    __tablename__ = "cities"

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("city")
    )
    country_id = db.Column(
        db.String(64), db.ForeignKey("countries.id"), nullable=False, index=True
    )
    province_id = db.Column(
        db.String(64), db.ForeignKey("provinces.id"), nullable=True, index=True
    )
    name_ar = db.Column(db.String(255), nullable=False)
    name_en = db.Column(db.String(255), default="")
    name_fr = db.Column(db.String(255), default="")
    description_ar = db.Column(db.Text, default="")
    description_en = db.Column(db.Text, default="")
    description_fr = db.Column(db.Text, default="")
    image = db.Column(db.Text, default="")
    attractions_ar = db.Column(JSONList("cities.attractions_ar"), default=list)
    attractions_en = db.Column(JSONList("cities.attractions_en"), default=list)
    attractions_fr = db.Column(JSONList("cities.attractions_fr"), default=list)
    best_time_ar = db.Column(db.String(255), default="")
    best_time_en = db.Column(db.String(255), default="")
    best_time_fr = db.Column(db.String(255), default="")
    duration_ar = db.Column(db.String(255), default="")
    duration_en = db.Column(db.String(255), default="")
    duration_fr = db.Column(db.String(255), default="")
    rating = db.Column(db.Float, default=4.5)
    reviews = db.Column(db.Integer, default=0)

    # --- Relationships ---
    country = db.relationship("Country", lazy="joined")
    province = db.relationship("Province", lazy="joined")

    def to_dict(self):
        data = super().to_dict()
        data["country_name"] = self.country.name_ar if self.country else None
        data["province_name"] = self.province.name_ar if self.province else None
        return data

    def __repr__(self):
        return f"<City {self.name_ar}>"
