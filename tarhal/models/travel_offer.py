"""Travel offer: a discounted package sold for one country."""

from tarhal.extensions import db
from tarhal.models.json_column import JSONList
from tarhal.models.mixins import RecordMixin, generate_id


class TravelOffer(RecordMixin, db.Model):
    __tablename__ = "travel_offers"

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("offer")
    )
    country_id = db.Column(
        db.String(64), db.ForeignKey("countries.id"), nullable=False, index=True
    )
    title_ar = db.Column(db.String(255), nullable=False)
    title_en = db.Column(db.String(255), nullable=False)
    title_fr = db.Column(db.String(255), nullable=False)
    description_ar = db.Column(db.Text, nullable=False)
    description_en = db.Column(db.Text, nullable=False)
    description_fr = db.Column(db.Text, nullable=False)
    original_price = db.Column(db.Float, nullable=False)
    discount_price = db.Column(db.Float, nullable=False)
    discount_percentage = db.Column(db.Integer, nullable=False)
    duration_days = db.Column(db.Integer)
    duration_text_ar = db.Column(db.String(255))
    duration_text_en = db.Column(db.String(255))
    duration_text_fr = db.Column(db.String(255))
    start_date = db.Column(db.String(10))  # YYYY-MM-DD
    end_date = db.Column(db.String(10))
    valid_until = db.Column(db.String(10))
    max_participants = db.Column(db.Integer, default=20)
    includes_ar = db.Column(JSONList("travel_offers.includes_ar"), default=list)
    includes_en = db.Column(JSONList("travel_offers.includes_en"), default=list)
    includes_fr = db.Column(JSONList("travel_offers.includes_fr"), default=list)
    highlights_ar = db.Column(JSONList("travel_offers.highlights_ar"), default=list)
    highlights_en = db.Column(JSONList("travel_offers.highlights_en"), default=list)
    highlights_fr = db.Column(JSONList("travel_offers.highlights_fr"), default=list)
    images = db.Column(JSONList("travel_offers.images"), default=list)
    main_image = db.Column(db.Text)
    currency = db.Column(db.String(3), default="USD")
    is_featured = db.Column(db.Boolean, default=False)

    # --- Relationships ---
    country = db.relationship("Country", lazy="joined")

    def to_dict(self):
        data = super().to_dict()
        data["country_name"] = self.country.name_ar if self.country else None
        return data

    def __repr__(self):
        return f"<TravelOffer {self.title_en}>"
