"""Country service: reference CRUD, continent/text lookups, statistics."""

from sqlalchemy import func, or_

from tarhal.extensions import db
from tarhal.models.country import Country
from tarhal.services.record_service import (
    LANGUAGES,
    RecordService,
    multilingual,
    round_one_decimal,
)


class CountryService(RecordService):
    model = Country
    table_name = "countries"
    label = "Country"
    FILTER_FIELDS = ("continent",)
    EDITABLE_FIELDS = (
        *multilingual("name", "capital", "description"),
        "continent", "main_image", "gallery",
        *multilingual("currency", "language", "best_time"),
        "rating", "total_reviews", "total_tours",
        *multilingual("highlights", "culture", "cuisine", "transportation", "safety"),
        "is_active",
    )

    def apply_filters(self, query, filters):
        query = super().apply_filters(query, filters)
        search = filters.get("search")
        if search:
            lang = filters.get("language") or "ar"
            if lang not in LANGUAGES:
                lang = "ar"
            term = f"%{search}%"
            query = query.filter(or_(
                getattr(Country, f"name_{lang}").like(term),
                getattr(Country, f"description_{lang}").like(term),
            ))
        return query

    def find_by_continent(self, continent, active_only=True):
        return self.list_records(active_only=active_only, continent=continent)

    def search(self, term, language="ar", active_only=True):
        return self.list_records(
            active_only=active_only, search=term, language=language
        )

    def statistics(self):
        active = Country.is_active.is_(True)
        total = db.session.query(func.count(Country.id)).scalar()
        active_count = db.session.query(func.count(Country.id)).filter(active).scalar()
        by_continent = dict(
            db.session.query(Country.continent, func.count(Country.id))
            .filter(active)
            .group_by(Country.continent)
            .all()
        )
        avg_rating, total_tours, total_reviews = (
            db.session.query(
                func.avg(Country.rating),
                func.sum(Country.total_tours),
                func.sum(Country.total_reviews),
            ).filter(active).one()
        )
        return {
            "total": total,
            "active": active_count,
            "by_continent": by_continent,
            "avg_rating": round_one_decimal(avg_rating),
            "total_tours": int(total_tours or 0),
            "total_reviews": int(total_reviews or 0),
        }


countries = CountryService()
