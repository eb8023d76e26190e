"""Province service: reference CRUD scoped by country."""

from tarhal.models.province import Province
from tarhal.services.record_service import RecordService, multilingual


class ProvinceService(RecordService):
    model = Province
    table_name = "provinces"
    label = "Province"
    FILTER_FIELDS = ("country_id",)
    EDITABLE_FIELDS = (
        "country_id",
        *multilingual("name"),
        "code",
        *multilingual("description", "capital"),
        "main_image", "latitude", "longitude",
        "is_active",
    )


provinces = ProvinceService()
