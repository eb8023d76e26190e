"""Request payload validation.

Runs at the HTTP boundary before any service is called. Each validate_*
function raises ValidationError carrying every problem found, which the
app turns into 400 {"success": false, "error": "Validation failed",
"details": [...]}. With partial=True (PUT bodies) only the fields present
are checked.
"""

import re
from urllib.parse import urlparse

from tarhal.models.country import Country
from tarhal.models.event import Event
from tarhal.models.mixins import ReviewWorkflowMixin

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")
PHONE_STRIP_RE = re.compile(r"[\s\-()]")
LANGUAGES = ("ar", "en", "fr")


class ValidationError(ValueError):
    """One or more payload problems. -> 400"""

    def __init__(self, details, message="Validation failed"):
        self.details = list(details)
        self.message = message
        super().__init__(f"{message}: {'; '.join(self.details)}")


def is_valid_email(value):
    return isinstance(value, str) and bool(EMAIL_RE.match(value))


def is_valid_phone(value):
    if not isinstance(value, str):
        return False
    return bool(PHONE_RE.match(PHONE_STRIP_RE.sub("", value)))


def is_valid_url(value):
    if not isinstance(value, str):
        return False
    parsed = urlparse(value)
    return bool(parsed.scheme and (parsed.netloc or parsed.scheme in ("data", "mailto")))


def _number(value):
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def is_valid_rating(value):
    number = _number(value)
    return number is not None and 1 <= number <= 5


def _blank(value):
    return value is None or (isinstance(value, str) and value.strip() == "")


def require_json_object(data):
    if not isinstance(data, dict):
        raise ValidationError(["Request body must be a JSON object"])
    return data


def missing_fields(data, fields):
    return [f for f in fields if _blank(data.get(f))]


def _check_required(data, fields, errors):
    for field in missing_fields(data, fields):
        errors.append(f"{field} is required")


def _check_all_languages(data, concept, label, errors, partial):
    keys = [f"{concept}_{lang}" for lang in LANGUAGES]
    if partial:
        if any(k in data and _blank(data[k]) for k in keys):
            errors.append(f"{label} cannot be empty")
    elif any(_blank(data.get(k)) for k in keys):
        errors.append(f"{label} is required in all languages")


def _check_common_formats(data, errors):
    """Format checks for optional fields shared by most resources."""
    for field in ("email", "contact_email"):
        if not _blank(data.get(field)) and not is_valid_email(data[field]):
            errors.append(f"Valid {field.replace('_', ' ')} is required")
    for field in ("phone", "contact_phone"):
        if not _blank(data.get(field)) and not is_valid_phone(data[field]):
            errors.append(f"Valid {field.replace('_', ' ')} number is required")
    if not _blank(data.get("website")) and not is_valid_url(data["website"]):
        errors.append("Valid website URL is required")
    if data.get("latitude") is not None:
        lat = _number(data["latitude"])
        if lat is None or not -90 <= lat <= 90:
            errors.append("Latitude must be between -90 and 90")
    if data.get("longitude") is not None:
        lng = _number(data["longitude"])
        if lng is None or not -180 <= lng <= 180:
            errors.append("Longitude must be between -180 and 180")
    if data.get("rating") is not None and not is_valid_rating(data["rating"]):
        errors.append("Rating must be between 1 and 5")
    gallery = data.get("gallery")
    if gallery is not None:
        if not isinstance(gallery, list):
            errors.append("Gallery must be a list of image URLs")
        else:
            for url in gallery:
                if not is_valid_url(url):
                    errors.append(f"Invalid gallery image URL: {url}")
                    break


def _check_status(data, errors):
    status = data.get("status")
    if status is not None and status not in ReviewWorkflowMixin.STATUSES:
        errors.append(
            f"Status must be one of: {', '.join(ReviewWorkflowMixin.STATUSES)}"
        )


def _raise_if(errors):
    if errors:
        raise ValidationError(errors)


def validate_country(data, partial=False):
    require_json_object(data)
    errors = []
    for concept, label in (
        ("name", "Country name"),
        ("capital", "Capital name"),
        ("description", "Description"),
        ("currency", "Currency"),
        ("language", "Language"),
        ("best_time", "Best time to visit"),
    ):
        _check_all_languages(data, concept, label, errors, partial)

    continent = data.get("continent")
    if (not partial or "continent" in data) and continent not in Country.CONTINENTS:
        errors.append("Valid continent is required")

    if not partial or "main_image" in data:
        if not is_valid_url(data.get("main_image")):
            errors.append("Valid main image URL is required")

    _check_common_formats(data, errors)
    _raise_if(errors)


def validate_travel_office(data, partial=False):
    require_json_object(data)
    errors = []
    if not partial:
        _check_required(data, ["country_id"], errors)
    _check_all_languages(data, "name", "Office name", errors, partial)
    _check_all_languages(data, "address", "Address", errors, partial)
    _check_all_languages(data, "working_hours", "Working hours", errors, partial)
    if not partial or "phone" in data:
        if not is_valid_phone(data.get("phone")):
            errors.append("Valid phone number is required")
    if not partial or "email" in data:
        if not is_valid_email(data.get("email")):
            errors.append("Valid email is required")
    _check_common_formats(
        {k: v for k, v in data.items() if k not in ("phone", "email")}, errors
    )
    _check_status(data, errors)
    _raise_if(errors)


def validate_destination(data, partial=False):
    require_json_object(data)
    errors = []
    if not partial:
        _check_required(
            data,
            ["country_id", "name_ar", "name_en", "description_ar",
             "description_en", "main_image", "latitude", "longitude"],
            errors,
        )
    _check_common_formats(data, errors)
    _check_status(data, errors)
    _raise_if(errors)


def validate_event(data, partial=False):
    require_json_object(data)
    errors = []
    if not partial:
        _check_required(
            data,
            ["country_id", "title_ar", "title_en", "description_ar",
             "description_en", "event_type", "start_date", "end_date"],
            errors,
        )
    event_type = data.get("event_type")
    if event_type is not None and event_type not in Event.EVENT_TYPES:
        errors.append(
            f"Event type must be one of: {', '.join(Event.EVENT_TYPES)}"
        )
    start, end = data.get("start_date"), data.get("end_date")
    if not _blank(start) and not _blank(end) and str(end) < str(start):
        errors.append("End date must not be before start date")
    _check_common_formats(data, errors)
    _check_status(data, errors)
    _raise_if(errors)


def validate_province(data, partial=False):
    require_json_object(data)
    errors = []
    if not partial:
        _check_required(data, ["country_id", "name_ar", "name_en"], errors)
    _check_common_formats(data, errors)
    _raise_if(errors)


def validate_city(data, partial=False):
    require_json_object(data)
    errors = []
    if not partial:
        _check_required(
            data,
            ["country_id", "name_ar", "description_ar", "image",
             "best_time_ar", "duration_ar"],
            errors,
        )
    _check_common_formats(data, errors)
    _raise_if(errors)


def _positive_int(value):
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_travel_offer(data, partial=False):
    require_json_object(data)
    errors = []
    if not partial:
        _check_required(data, ["country_id", "title_ar", "description_ar"], errors)

    original = discount = None
    if not partial or "original_price" in data:
        original = _number(data.get("original_price"))
        if original is None or original <= 0:
            errors.append("Original price must be greater than zero")
            original = None
    if not partial or "discount_price" in data:
        discount = _number(data.get("discount_price"))
        if discount is None or discount <= 0:
            errors.append("Discount price must be greater than zero")
            discount = None
    if original is not None and discount is not None and discount >= original:
        errors.append("Discount price must be less than original price")

    if data.get("discount_percentage") is not None:
        percent = data["discount_percentage"]
        whole = isinstance(percent, int) and not isinstance(percent, bool)
        if not whole or not 0 <= percent <= 100:
            errors.append("Discount percentage must be between 0 and 100")
    for field in ("max_participants", "duration_days"):
        if data.get(field) is not None and not _positive_int(data[field]):
            errors.append(f"{field} must be a positive whole number")
    currency = data.get("currency")
    if currency is not None and not (
        isinstance(currency, str) and re.fullmatch(r"[A-Za-z]{3}", currency)
    ):
        errors.append("Currency must be a 3-letter ISO code")

    for concept in ("includes", "highlights"):
        for lang in LANGUAGES:
            key = f"{concept}_{lang}"
            if data.get(key) is not None and not isinstance(data[key], list):
                errors.append(f"{key} must be a list")
    images = data.get("images")
    if images is not None:
        if not isinstance(images, list):
            errors.append("Images must be a list of image URLs")
        elif not all(is_valid_url(url) for url in images):
            errors.append("Images must be a list of image URLs")
    if not _blank(data.get("main_image")) and not is_valid_url(data["main_image"]):
        errors.append("Valid main image URL is required")

    start, end = data.get("start_date"), data.get("end_date")
    if not _blank(start) and not _blank(end) and str(end) < str(start):
        errors.append("End date must not be before start date")
    _raise_if(errors)
