"""
Idempotent database seeding.

Creates the schema when missing and loads the fixture set in one transaction.
Every insert skips rows whose unique key already exists (`id` for users,
customers and invoices, `month` for revenue), so running the loader again
changes nothing. Rows of a pass go out through `executemany`, which psycopg
pipelines; no row depends on another row of the same pass.

Usage:
    async with Database() as db:
        report = await seed_database(db)
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, List, Optional, Sequence, TypedDict

import bcrypt
from psycopg import AsyncConnection, sql

from invoice_dashboard.config import get_settings
from invoice_dashboard.domain.models import User
from invoice_dashboard.infrastructure.db_factory import Database
from invoice_dashboard.seed.fixtures import FixtureSet, default_fixtures
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_STATEMENTS: Sequence[str] = (
    'CREATE EXTENSION IF NOT EXISTS "uuid-ossp"',
    """
    CREATE TABLE IF NOT EXISTS users (
      id UUID DEFAULT uuid_generate_v4() PRIMARY KEY,
      name VARCHAR(255) NOT NULL,
      email TEXT NOT NULL UNIQUE,
      password TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS customers (
      id UUID DEFAULT uuid_generate_v4() PRIMARY KEY,
      name VARCHAR(255) NOT NULL,
      email VARCHAR(255) NOT NULL,
      image_url VARCHAR(255) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS invoices (
      id UUID DEFAULT uuid_generate_v4() PRIMARY KEY,
      customer_id UUID NOT NULL REFERENCES customers (id),
      amount INT NOT NULL,
      status VARCHAR(255) NOT NULL,
      date DATE NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS revenue (
      month VARCHAR(4) NOT NULL UNIQUE,
      revenue INT NOT NULL
    )
    """,
)


class SeedReport(TypedDict):
    """Rows actually inserted per table; zeros on a re-run."""

    users: int
    customers: int
    invoices: int
    revenue: int


def hash_password(password: str, rounds: int) -> str:
    """One-way bcrypt hash of `password`."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


async def _hash_users(users: Sequence[User], rounds: int) -> List[Dict[str, Any]]:
    """Hash all passwords concurrently in worker threads; plaintext never leaves this function."""
    hashes = await asyncio.gather(
        *(asyncio.to_thread(hash_password, user.password, rounds) for user in users)
    )
    return [
        {"id": user.id, "name": user.name, "email": user.email, "password": hashed}
        for user, hashed in zip(users, hashes)
    ]


def insert_skipping_conflicts(table: str, columns: Sequence[str], conflict_key: str) -> sql.Composed:
    """`INSERT ... ON CONFLICT (key) DO NOTHING` with quoted identifiers and named placeholders."""
    return sql.SQL(
        "INSERT INTO {table} ({columns}) VALUES ({values}) ON CONFLICT ({key}) DO NOTHING"
    ).format(
        table=sql.Identifier(table),
        columns=sql.SQL(", ").join(sql.Identifier(column) for column in columns),
        values=sql.SQL(", ").join(sql.Placeholder(column) for column in columns),
        key=sql.Identifier(conflict_key),
    )


async def _insert_rows(
    conn: AsyncConnection,
    table: str,
    columns: Sequence[str],
    rows: Sequence[Dict[str, Any]],
    conflict_key: str = "id",
) -> int:
    if not rows:
        return 0
    query = insert_skipping_conflicts(table, columns, conflict_key)
    async with conn.cursor() as cur:
        await cur.executemany(query, rows)
        inserted = max(cur.rowcount, 0)
    log.info(
        "Seed pass complete",
        extra={"table": table, "rows": len(rows), "inserted": inserted},
    )
    return inserted


async def create_schema(conn: AsyncConnection) -> None:
    for statement in SCHEMA_STATEMENTS:
        await conn.execute(statement)


async def seed_database(
    db: Database,
    fixtures: Optional[FixtureSet] = None,
    bcrypt_rounds: Optional[int] = None,
) -> SeedReport:
    """
    Create missing tables and insert the fixture set, skipping existing rows.

    Passes run users, customers, invoices, revenue so invoices always find
    their customers. Any failure rolls the whole transaction back.
    """
    fixtures = fixtures or default_fixtures()
    rounds = bcrypt_rounds or get_settings().bcrypt_rounds
    start = time.perf_counter()

    users = await _hash_users(fixtures.users, rounds)

    async with db.transaction() as conn:
        await create_schema(conn)
        report = SeedReport(
            users=await _insert_rows(conn, "users", ("id", "name", "email", "password"), users),
            customers=await _insert_rows(
                conn,
                "customers",
                ("id", "name", "email", "image_url"),
                [customer.model_dump() for customer in fixtures.customers],
            ),
            invoices=await _insert_rows(
                conn,
                "invoices",
                ("id", "customer_id", "amount", "status", "date"),
                [invoice.model_dump() for invoice in fixtures.invoices],
            ),
            revenue=await _insert_rows(
                conn,
                "revenue",
                ("month", "revenue"),
                [rev.model_dump() for rev in fixtures.revenue],
                conflict_key="month",
            ),
        )

    log.info(
        "Database seeded",
        extra={**report, "duration_seconds": round(time.perf_counter() - start, 3)},
    )
    return report


__all__ = [
    "SCHEMA_STATEMENTS",
    "SeedReport",
    "create_schema",
    "hash_password",
    "insert_skipping_conflicts",
    "seed_database",
]
