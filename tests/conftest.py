"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from klip import create_app
from klip.config import TestConfig
from klip.extensions import db
from klip.seed import seed_demo_data


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        try:
            yield app
        finally:
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def seeded(app):
    return seed_demo_data()


@pytest.fixture()
def login(client):
    """Simulate the auth provider having signed someone in."""

    def _login(email: str, name: str | None = None):
        with client.session_transaction() as sess:
            sess["user_email"] = email
            if name:
                sess["user_name"] = name
        return client

    return _login
