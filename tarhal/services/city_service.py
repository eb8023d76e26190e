"""City service: reference CRUD scoped by country and province."""

from tarhal.models.city import City
from tarhal.services.record_service import RecordService, multilingual


class CityService(RecordService):
    model = City
    table_name = "cities"
    label = "City"
    FILTER_FIELDS = ("country_id", "province_id")
    EDITABLE_FIELDS = (
        "country_id", "province_id",
        *multilingual("name", "description"),
        "image",
        *multilingual("attractions", "best_time", "duration"),
        "rating", "reviews",
        "is_active",
    )


cities = CityService()
