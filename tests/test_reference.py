"""Tests for reference data (countries, provinces, cities).

Covers:
- Country validation (all-language fields, continent, image URL)
- Country search, continent lookup and statistics
- Admin-only country mutations and permanent delete
- Province and city CRUD with scope filters and display names
"""

import pytest

from conftest import country_payload
from tarhal.models.country import Country
from tarhal.services.city_service import cities
from tarhal.services.country_service import countries
from tarhal.services.province_service import provinces
from tarhal.services.record_service import round_one_decimal
from tarhal.validators import ValidationError, validate_country


class TestCountryValidation:

    def test_complete_payload_passes(self):
        validate_country(country_payload())

    def test_missing_language_reported(self):
        with pytest.raises(ValidationError) as exc:
            validate_country(country_payload(capital_fr=""))
        assert "Capital name is required in all languages" in exc.value.details

    def test_bad_continent(self):
        with pytest.raises(ValidationError) as exc:
            validate_country(country_payload(continent="atlantis"))
        assert "Valid continent is required" in exc.value.details

    def test_partial_only_checks_present_fields(self):
        validate_country({"rating": 3}, partial=True)
        with pytest.raises(ValidationError):
            validate_country({"rating": 9}, partial=True)
        with pytest.raises(ValidationError):
            validate_country({"name_en": ""}, partial=True)


class TestCountryService:

    def _seed(self):
        countries.create(country_payload())
        countries.create(country_payload(
            name_ar="فرنسا", name_en="France", name_fr="France",
            description_en="Wine and castles", continent="europe",
            rating=4.25, total_tours=3, total_reviews=60,
        ))

    def test_find_by_continent(self, db_session):
        self._seed()
        assert [c.name_en for c in countries.find_by_continent("europe")] == ["France"]

    def test_search_by_language(self, db_session):
        self._seed()
        assert [c.name_en for c in countries.search("castles", language="en")] == ["France"]
        # Unknown language falls back to Arabic columns
        assert [c.name_en for c in countries.search("مصر", language="xx")] == ["Egypt"]

    def test_statistics(self, db_session):
        self._seed()
        hidden = countries.create(country_payload(name_en="Hidden", rating=1.0))
        countries.soft_delete(hidden.id)

        stats = countries.statistics()
        assert stats["total"] == 3
        assert stats["active"] == 2
        assert stats["by_continent"] == {"africa": 1, "europe": 1}
        assert stats["avg_rating"] == pytest.approx(4.5)  # (4.8 + 4.25) / 2 = 4.525
        assert stats["total_tours"] == 15
        assert stats["total_reviews"] == 400

    def test_round_one_decimal_half_up(self):
        assert round_one_decimal(0.25) == pytest.approx(0.3)
        assert round_one_decimal(None) == 0.0

    def test_list_orders_by_arabic_name(self, db_session):
        self._seed()
        names = [c.name_ar for c in countries.list_records()]
        assert names == sorted(names)


class TestCountriesApi:

    def test_create_requires_admin(self, client, supervisor_headers):
        resp = client.post(
            "/api/countries", json=country_payload(), headers=supervisor_headers
        )
        assert resp.status_code == 403

    def test_create_requires_token(self, client):
        resp = client.post("/api/countries", json=country_payload())
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "Access token required"

    def test_invalid_token(self, client):
        resp = client.post(
            "/api/countries",
            json=country_payload(),
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert resp.status_code == 403
        assert resp.get_json()["error"] == "Invalid or expired token"

    def test_admin_create_and_fetch(self, client, admin_headers):
        resp = client.post("/api/countries", json=country_payload(), headers=admin_headers)
        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["highlights_en"] == ["Pyramids", "Nile"]
        assert data["cuisine_ar"] == []

        resp = client.get(f"/api/countries/{data['id']}")
        assert resp.get_json()["data"]["name_fr"] == "Égypte"

    def test_filter_by_continent(self, client, db_session):
        countries.create(country_payload())
        countries.create(country_payload(name_en="Japan", continent="asia"))
        resp = client.get("/api/countries?continent=asia")
        assert [c["name_en"] for c in resp.get_json()["data"]] == ["Japan"]

    def test_permanent_delete(self, client, admin_headers, db_session):
        record = countries.create(country_payload())
        resp = client.delete(f"/api/countries/{record.id}/permanent", headers=admin_headers)
        assert resp.status_code == 200
        db_session.expire_all()
        assert db_session.get(Country, record.id) is None

    def test_permanent_delete_unknown(self, client, admin_headers):
        resp = client.delete("/api/countries/missing/permanent", headers=admin_headers)
        assert resp.status_code == 404

    def test_soft_delete_unknown(self, client, admin_headers):
        resp = client.delete("/api/countries/missing", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Country not found"

    def test_statistics_endpoint(self, client, db_session):
        countries.create(country_payload())
        resp = client.get("/api/countries/statistics")
        assert resp.status_code == 200
        assert resp.get_json()["data"]["by_continent"] == {"africa": 1}


class TestProvincesAndCities:

    def test_province_lists_scoped_by_country(self, client, country, province):
        other = countries.create({"name_ar": "ليبيا", "name_en": "Libya", "continent": "africa"})
        provinces.create({"country_id": other.id, "name_ar": "طرابلس", "name_en": "Tripoli"})

        resp = client.get(f"/api/provinces?country_id={country.id}")
        data = resp.get_json()["data"]
        assert [p["name_en"] for p in data] == ["Giza"]
        assert data[0]["country_name"] == "مصر"

    def test_city_display_names(self, client, city):
        resp = client.get(f"/api/cities/{city.id}")
        data = resp.get_json()["data"]
        assert data["country_name"] == "مصر"
        assert data["province_name"] == "الجيزة"

    def test_city_create_validation(self, client, country, supervisor_headers):
        resp = client.post(
            "/api/cities",
            json={"country_id": country.id, "name_ar": "الأقصر"},
            headers=supervisor_headers,
        )
        assert resp.status_code == 400
        assert "image is required" in resp.get_json()["details"]

    def test_city_create(self, client, country, province, supervisor_headers):
        resp = client.post(
            "/api/cities",
            json={
                "country_id": country.id,
                "province_id": province.id,
                "name_ar": "الأقصر",
                "name_en": "Luxor",
                "description_ar": "مدينة المعابد",
                "image": "https://img.example.com/luxor.jpg",
                "best_time_ar": "الشتاء",
                "duration_ar": "يومان",
                "attractions_en": ["Karnak"],
            },
            headers=supervisor_headers,
        )
        assert resp.status_code == 201
        assert resp.get_json()["data"]["attractions_en"] == ["Karnak"]

    def test_city_filter_by_province(self, db_session, country, province, city):
        cities.create({"country_id": country.id, "name_ar": "أسوان"})
        assert [c.id for c in cities.list_records(province_id=province.id)] == [city.id]

    def test_unknown_country_violates_constraint(self, client, supervisor_headers):
        resp = client.post(
            "/api/provinces",
            json={"country_id": "country_missing", "name_ar": "س", "name_en": "S"},
            headers=supervisor_headers,
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Database constraint violation"
