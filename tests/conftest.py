"""
Shared fixtures: an app bound to in-memory SQLite, a test client, the
promotion service, and a factory that stores valid promotions.
"""
from datetime import date

import pytest

from config import TestConfig
from app import create_app, db
from app.services.promotions import PromotionService
from tests.factories import build_promotion


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def service(app):
    return PromotionService()


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def make_promotion(service):
    def _make(**overrides):
        return service.add_promotion(build_promotion(**overrides))
    return _make
