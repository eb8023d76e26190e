"""Travel offer service: discounted packages per country.

Offers are reference content (no review workflow). Prices are major
units in the offer's currency; the discount must stay strictly below the
original price, and discount_percentage is derived from the two prices
unless the caller sets it.
"""

from decimal import ROUND_HALF_UP, Decimal

from tarhal.models.travel_offer import TravelOffer
from tarhal.services.record_service import RecordService, multilingual
from tarhal.validators import ValidationError


def discount_percentage(original_price, discount_price):
    """Whole-percent saving, rounded half-up (100 -> 75 is 25)."""
    original = Decimal(str(original_price))
    saving = (original - Decimal(str(discount_price))) / original * 100
    return int(saving.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class TravelOfferService(RecordService):
    model = TravelOffer
    table_name = "travel_offers"
    label = "Travel offer"
    FILTER_FIELDS = ("country_id", "is_featured")
    EDITABLE_FIELDS = (
        "country_id",
        *multilingual("title", "description"),
        "original_price", "discount_price", "discount_percentage",
        "duration_days",
        *multilingual("duration_text"),
        "start_date", "end_date", "valid_until", "max_participants",
        *multilingual("includes", "highlights"),
        "images", "main_image", "currency",
        "is_featured", "is_active",
    )

    def ordering(self):
        return [TravelOffer.created_at.desc(), TravelOffer.id]

    def prepare_new(self, record, data, actor_id):
        # Missing translations fall back to the Arabic text
        for concept in ("title", "description"):
            source = getattr(record, f"{concept}_ar")
            for lang in ("en", "fr"):
                if not getattr(record, f"{concept}_{lang}"):
                    setattr(record, f"{concept}_{lang}", source)
        if record.discount_percentage is None:
            record.discount_percentage = discount_percentage(
                record.original_price, record.discount_price
            )
        record.currency = (record.currency or "USD").upper()
        if not record.main_image and record.images:
            record.main_image = record.images[0]

    def prepare_changes(self, record, changes, actor_id):
        original = changes.get("original_price", record.original_price)
        discount = changes.get("discount_price", record.discount_price)
        prices_changed = "original_price" in changes or "discount_price" in changes
        if prices_changed and float(discount) >= float(original):
            raise ValidationError(["Discount price must be less than original price"])
        if prices_changed and "discount_percentage" not in changes:
            changes["discount_percentage"] = discount_percentage(original, discount)
        if changes.get("currency"):
            changes["currency"] = changes["currency"].upper()
        images = changes.get("images")
        if images and not changes.get("main_image") and not record.main_image:
            changes["main_image"] = images[0]


travel_offers = TravelOfferService()
