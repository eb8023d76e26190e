"""Country reference record.

Top of the location hierarchy. Every province, city, destination, event
and travel office hangs off a country.
"""

from tarhal.extensions import db
from tarhal.models.json_column import JSONList
from tarhal.models.mixins import RecordMixin, generate_id


class Country(RecordMixin, db.Model):
    __tablename__ = "countries"

    CONTINENTS = ["africa", "asia", "europe", "america", "oceania"]

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("country")
    )
    name_ar = db.Column(db.String(255), nullable=False)
    name_en = db.Column(db.String(255), nullable=False)
    name_fr = db.Column(db.String(255), nullable=False, default="")
    capital_ar = db.Column(db.String(255), default="")
    capital_en = db.Column(db.String(255), default="")
    capital_fr = db.Column(db.String(255), default="")
    description_ar = db.Column(db.Text, default="")
    description_en = db.Column(db.Text, default="")
    description_fr = db.Column(db.Text, default="")
    continent = db.Column(
        db.String(20), nullable=False
    )  # africa | asia | europe | america | oceania
    main_image = db.Column(db.Text, default="")
    gallery = db.Column(JSONList("countries.gallery"), default=list)
    currency_ar = db.Column(db.String(255), default="")
    currency_en = db.Column(db.String(255), default="")
    currency_fr = db.Column(db.String(255), default="")
    language_ar = db.Column(db.String(255), default="")
    language_en = db.Column(db.String(255), default="")
    language_fr = db.Column(db.String(255), default="")
    best_time_ar = db.Column(db.String(255), default="")
    best_time_en = db.Column(db.String(255), default="")
    best_time_fr = db.Column(db.String(255), default="")
    rating = db.Column(db.Float, default=4.5)
    total_reviews = db.Column(db.Integer, default=0)
    total_tours = db.Column(db.Integer, default=0)
    highlights_ar = db.Column(JSONList("countries.highlights_ar"), default=list)
    highlights_en = db.Column(JSONList("countries.highlights_en"), default=list)
    highlights_fr = db.Column(JSONList("countries.highlights_fr"), default=list)
    culture_ar = db.Column(JSONList("countries.culture_ar"), default=list)
    culture_en = db.Column(JSONList("countries.culture_en"), default=list)
    culture_fr = db.Column(JSONList("countries.culture_fr"), default=list)
    cuisine_ar = db.Column(JSONList("countries.cuisine_ar"), default=list)
    cuisine_en = db.Column(JSONList("countries.cuisine_en"), default=list)
    cuisine_fr = db.Column(JSONList("countries.cuisine_fr"), default=list)
    transportation_ar = db.Column(
        JSONList("countries.transportation_ar"), default=list
    )
    transportation_en = db.Column(
        JSONList("countries.transportation_en"), default=list
    )
    transportation_fr = db.Column(
        JSONList("countries.transportation_fr"), default=list
    )
    safety_ar = db.Column(JSONList("countries.safety_ar"), default=list)
    safety_en = db.Column(JSONList("countries.safety_en"), default=list)
    safety_fr = db.Column(JSONList("countries.safety_fr"), default=list)

    def __repr__(self):
        return f"<Country {self.name_en}>"
