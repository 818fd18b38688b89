"""
Infrastructure package for the invoice dashboard.

Centralizes database connectivity (the pooled `Database` client) and the
rendering-layer collaborators (view cache, navigation) that actions talk to.
Keep this layer focused on I/O and resource management.
"""

from invoice_dashboard.infrastructure.db_factory import Database, build_dsn, probe_connection
from invoice_dashboard.infrastructure.views import (
    InMemoryViewCache,
    Navigator,
    RaisingNavigator,
    Redirect,
    ViewCache,
)

__all__ = [
    "Database",
    "build_dsn",
    "probe_connection",
    "InMemoryViewCache",
    "Navigator",
    "RaisingNavigator",
    "Redirect",
    "ViewCache",
]
