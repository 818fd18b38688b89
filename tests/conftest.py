"""
Pytest configuration for the invoice dashboard.

Provides fixtures for:
- Settings override for integration tests
- Database availability checks (integration tests skip without Postgres)
- An open `Database` over a clean schema, optionally seeded
"""

from __future__ import annotations

import os
from typing import AsyncGenerator

import psycopg
import pytest
import pytest_asyncio

from invoice_dashboard.config import Settings
from invoice_dashboard.infrastructure.db_factory import Database, build_dsn
from invoice_dashboard.seed.loader import seed_database

TEST_BCRYPT_ROUNDS = 4


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "invoice_dashboard_test"),
        db_sslmode=os.getenv("DB_SSLMODE", "disable"),
        database_url=os.getenv("TEST_POSTGRES_URL"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return build_dsn(test_settings)


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


def _drop_tables(dsn: str) -> None:
    with psycopg.connect(dsn) as conn:
        conn.execute("DROP TABLE IF EXISTS invoices, customers, users, revenue CASCADE;")


@pytest_asyncio.fixture
async def database(
    test_dsn: str, db_connection_available: bool
) -> AsyncGenerator[Database, None]:
    """
    An open `Database` over an empty schema; tables are dropped before and after.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    _drop_tables(test_dsn)
    db = Database(dsn=test_dsn, min_size=1, max_size=5)
    await db.open()
    try:
        yield db
    finally:
        await db.close()
        _drop_tables(test_dsn)


@pytest_asyncio.fixture
async def seeded_database(database: Database) -> Database:
    """
    `database` with the built-in fixture set loaded (13 invoices, 6 customers).
    """
    await seed_database(database, bcrypt_rounds=TEST_BCRYPT_ROUNDS)
    return database
