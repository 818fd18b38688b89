"""
Seed loader: schema bootstrap and idempotent demo data.
"""

from invoice_dashboard.seed.fixtures import FixtureSet, default_fixtures
from invoice_dashboard.seed.loader import SeedReport, hash_password, seed_database

__all__ = [
    "FixtureSet",
    "SeedReport",
    "default_fixtures",
    "hash_password",
    "seed_database",
]
