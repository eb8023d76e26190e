"""Travel office service: agency branches and partner offices.

Besides the shared workflow, listings can be narrowed to offices with map
coordinates, to company-owned offices, or by a free-text search over one
language's name/address plus phone and email.
"""

from sqlalchemy import func, or_

from tarhal.extensions import db
from tarhal.models.country import Country
from tarhal.models.travel_office import TravelOffice
from tarhal.services.content_service import ContentService
from tarhal.services.record_service import LANGUAGES, multilingual, round_one_decimal


class TravelOfficeService(ContentService):
    model = TravelOffice
    table_name = "travel_offices"
    label = "Travel office"
    FILTER_FIELDS = ("country_id", "status", "is_company_office")
    EDITABLE_FIELDS = (
        "country_id",
        *multilingual("name", "address"),
        "phone", "email", "website",
        *multilingual("manager", "services", "working_hours"),
        "latitude", "longitude", "rating", "reviews",
        "is_company_office", "status", "is_active",
    )

    def apply_filters(self, query, filters):
        query = super().apply_filters(query, filters)
        if filters.get("with_location"):
            query = query.filter(
                TravelOffice.latitude.isnot(None),
                TravelOffice.longitude.isnot(None),
            )
        search = filters.get("search")
        if search:
            lang = filters.get("language") or "ar"
            if lang not in LANGUAGES:
                lang = "ar"
            term = f"%{search}%"
            query = query.filter(or_(
                getattr(TravelOffice, f"name_{lang}").like(term),
                getattr(TravelOffice, f"address_{lang}").like(term),
                TravelOffice.phone.like(term),
                TravelOffice.email.like(term),
            ))
        return query

    def ordering(self):
        return [TravelOffice.name_ar]

    def statistics(self):
        """Counts, per-country breakdown and rating summary (active rows)."""
        active = TravelOffice.is_active.is_(True)
        total = db.session.query(func.count(TravelOffice.id)).scalar()
        active_count = (
            db.session.query(func.count(TravelOffice.id)).filter(active).scalar()
        )
        by_country = {}
        rows = (
            db.session.query(Country.name_ar, func.count(TravelOffice.id))
            .select_from(TravelOffice)
            .outerjoin(Country, TravelOffice.country_id == Country.id)
            .filter(active)
            .group_by(TravelOffice.country_id, Country.name_ar)
            .all()
        )
        for country_name, count in rows:
            key = country_name or "Unknown"
            by_country[key] = by_country.get(key, 0) + count
        avg_rating, total_reviews = (
            db.session.query(
                func.avg(TravelOffice.rating), func.sum(TravelOffice.reviews)
            ).filter(active).one()
        )
        return {
            "total": total,
            "active": active_count,
            "by_country": by_country,
            "avg_rating": round_one_decimal(avg_rating),
            "total_reviews": int(total_reviews or 0),
        }


travel_offices = TravelOfficeService()
