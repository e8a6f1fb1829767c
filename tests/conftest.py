"""Pytest fixtures for Emergency Network tests."""

import os
from pathlib import Path

import pytest

from emergency_network.app import create_app
from emergency_network.database import db


_PROJECT_ROOT = Path(__file__).parent.parent


def _build_test_database_url() -> str:
    """TEST_DATABASE_URL if set, else a private in-memory SQLite database."""
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


@pytest.fixture(scope="session", autouse=True)
def _force_test_database():
    """Force ALL tests to use the test database. Never connect to production.

    Sets DATABASE_URL before any test or fixture can create a Flask app.
    """
    test_url = _build_test_database_url()
    original = os.environ.get("DATABASE_URL")
    os.environ["DATABASE_URL"] = test_url

    yield

    if original is not None:
        os.environ["DATABASE_URL"] = original
    else:
        os.environ.pop("DATABASE_URL", None)


@pytest.fixture
def app():
    """Create a Flask application with an empty schema."""
    original_cwd = os.getcwd()
    os.chdir(_PROJECT_ROOT)

    app = create_app(config_path=str(_PROJECT_ROOT / "config.yaml"), testing=True)

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
    os.chdir(original_cwd)


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create a test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def db_session(app):
    """Provide the Flask-SQLAlchemy session inside an app context."""
    with app.app_context():
        yield db.session
        db.session.rollback()
