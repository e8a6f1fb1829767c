"""Database lifecycle fixtures for integration tests.

Uses TEST_DATABASE_URL when set (a PostgreSQL database whose name ends in
'_test' is created and dropped around the session), otherwise a private
in-memory SQLite database.
"""

import os

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from emergency_network.database import db


def _get_test_database_url() -> str:
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


def _is_postgres(url: str) -> bool:
    return url.startswith("postgresql")


def _get_admin_url(test_url: str) -> str:
    """Get a connection URL to the 'postgres' database for admin operations."""
    return test_url.rsplit("/", 1)[0] + "/postgres"


@pytest.fixture(scope="session")
def test_database_url():
    """Provide the test database URL."""
    return _get_test_database_url()


@pytest.fixture(scope="session")
def test_db_engine(test_database_url):
    """Create the schema for the whole test session and tear it down afterwards."""
    # Import all models to ensure they're registered with metadata
    from emergency_network import models  # noqa: F401

    if not _is_postgres(test_database_url):
        engine = create_engine(
            test_database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        db.metadata.create_all(engine)
        yield engine
        engine.dispose()
        return

    db_name = test_database_url.rsplit("/", 1)[1]
    admin_engine = create_engine(_get_admin_url(test_database_url), isolation_level="AUTOCOMMIT")
    try:
        with admin_engine.connect() as conn:
            conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            conn.execute(text(f'CREATE DATABASE "{db_name}"'))
    finally:
        admin_engine.dispose()

    engine = create_engine(test_database_url)
    db.metadata.create_all(engine)

    yield engine

    engine.dispose()
    admin_engine = create_engine(_get_admin_url(test_database_url), isolation_level="AUTOCOMMIT")
    try:
        with admin_engine.connect() as conn:
            conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
    finally:
        admin_engine.dispose()


@pytest.fixture(scope="session")
def TestSessionFactory(test_db_engine):
    """Provide a sessionmaker bound to the test database engine."""
    return sessionmaker(bind=test_db_engine, expire_on_commit=False)


@pytest.fixture
def db_session(test_db_engine, TestSessionFactory):
    """Provide a database session with per-test isolation via rollback."""
    connection = test_db_engine.connect()
    transaction = connection.begin()
    session = TestSessionFactory(bind=connection)

    yield session

    session.close()
    if transaction.is_active:
        transaction.rollback()
    connection.close()
