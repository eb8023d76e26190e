"""Shared test fixtures for the Tarhal back-office test suite.

Provides:
- app: Flask app configured for testing (in-memory SQLite, rate limits off)
- client: Flask test client
- db_session: clean database per test (tables created/dropped)
- country / province / city: a minimal location hierarchy
- admin / supervisor: back-office users, with matching *_headers fixtures
  carrying a bearer token
"""

import pytest
from flask import g

from tarhal import create_app
from tarhal.extensions import db as _db
from tarhal.models.city import City
from tarhal.models.country import Country
from tarhal.models.province import Province
from tarhal.services.auth_service import create_user, issue_token


@pytest.fixture(scope="session")
def app():
    """Create the Flask application configured for testing."""
    app = create_app("testing")

    # db_session keeps an app context pushed, so every client request shares
    # one `g`. Drop Flask-Login's cached user so each request re-reads its
    # own Authorization header.
    @app.teardown_request
    def _forget_login_user(exc):
        g.pop("_login_user", None)

    yield app


@pytest.fixture(autouse=True)
def db_session(app):
    """Create all tables before each test, drop after."""
    with app.app_context():
        _db.create_all()
        yield _db.session
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


def country_payload(**overrides):
    """A complete, valid country body for POST /api/countries."""
    data = {
        "name_ar": "مصر",
        "name_en": "Egypt",
        "name_fr": "Égypte",
        "capital_ar": "القاهرة",
        "capital_en": "Cairo",
        "capital_fr": "Le Caire",
        "description_ar": "أرض الفراعنة",
        "description_en": "Land of the pharaohs",
        "description_fr": "Terre des pharaons",
        "currency_ar": "جنيه",
        "currency_en": "Pound",
        "currency_fr": "Livre",
        "language_ar": "العربية",
        "language_en": "Arabic",
        "language_fr": "Arabe",
        "best_time_ar": "الشتاء",
        "best_time_en": "Winter",
        "best_time_fr": "Hiver",
        "continent": "africa",
        "main_image": "https://img.example.com/egypt.jpg",
        "rating": 4.8,
        "total_tours": 12,
        "total_reviews": 340,
        "highlights_en": ["Pyramids", "Nile"],
    }
    data.update(overrides)
    return data


def destination_payload(country_id, **overrides):
    data = {
        "country_id": country_id,
        "name_ar": "الأهرامات",
        "name_en": "Pyramids of Giza",
        "description_ar": "عجائب الدنيا",
        "description_en": "Ancient wonder",
        "main_image": "https://img.example.com/giza.jpg",
        "latitude": 29.9792,
        "longitude": 31.1342,
        "gallery": ["https://img.example.com/giza-1.jpg"],
        "highlights_en": ["Sphinx", "Great Pyramid"],
    }
    data.update(overrides)
    return data


def event_payload(country_id, **overrides):
    data = {
        "country_id": country_id,
        "title_ar": "مهرجان الشمس",
        "title_en": "Sun Festival",
        "description_ar": "احتفال سنوي",
        "description_en": "Yearly celebration",
        "event_type": "festival",
        "start_date": "2026-02-22",
        "end_date": "2026-02-23",
    }
    data.update(overrides)
    return data


def office_payload(country_id, **overrides):
    data = {
        "country_id": country_id,
        "name_ar": "مكتب القاهرة",
        "name_en": "Cairo Office",
        "name_fr": "Bureau du Caire",
        "address_ar": "وسط البلد",
        "address_en": "Downtown",
        "address_fr": "Centre-ville",
        "working_hours_ar": "٩ - ٥",
        "working_hours_en": "9 - 5",
        "working_hours_fr": "9 - 17",
        "phone": "+20 (2) 1234-5678",
        "email": "cairo@tarhal.example",
        "latitude": 30.0444,
        "longitude": 31.2357,
        "rating": 4.0,
        "reviews": 10,
    }
    data.update(overrides)
    return data


def offer_payload(country_id, **overrides):
    data = {
        "country_id": country_id,
        "title_ar": "رحلة النيل",
        "description_ar": "سبعة أيام على النيل",
        "original_price": 1200,
        "discount_price": 900,
        "duration_days": 7,
        "includes_en": ["Hotel", "Cruise"],
        "images": ["https://img.example.com/nile-1.jpg"],
    }
    data.update(overrides)
    return data


@pytest.fixture
def country(db_session):
    record = Country(
        name_ar="مصر", name_en="Egypt", name_fr="Égypte", continent="africa",
    )
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def province(db_session, country):
    record = Province(country_id=country.id, name_ar="الجيزة", name_en="Giza")
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def city(db_session, country, province):
    record = City(
        country_id=country.id, province_id=province.id,
        name_ar="الجيزة", name_en="Giza",
    )
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def admin(db_session):
    return create_user("admin@tarhal.local", "admin123", role="admin", full_name="Admin")


@pytest.fixture
def supervisor(db_session):
    return create_user("editor@tarhal.local", "editor123", full_name="Editor")


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {issue_token(admin)}"}


@pytest.fixture
def supervisor_headers(supervisor):
    return {"Authorization": f"Bearer {issue_token(supervisor)}"}
