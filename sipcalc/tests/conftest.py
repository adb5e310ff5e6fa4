from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from sipcalc.app import create_app
from sipcalc.config import Settings


@pytest.fixture()
def app() -> Flask:
    return create_app(Settings(env="test", log_level="WARNING", goal_max_years=60))


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
