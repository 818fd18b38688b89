"""
Invoice Dashboard - data layer for a small invoicing dashboard on PostgreSQL.

This package provides:

- A query layer: dashboard cards, latest invoices, revenue, filtered and
  paginated invoice listings, single-invoice lookup and customer tables
- A mutation layer: validated create/update/delete invoice form actions
- A seed loader: idempotent schema bootstrap and demo data
- A pooled async database client with an explicit open/close lifecycle
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from invoice_dashboard.actions import (
    ActionContext,
    create_invoice,
    delete_invoice,
    update_invoice,
)
from invoice_dashboard.config import Settings, get_settings
from invoice_dashboard.domain.forms import ActionState
from invoice_dashboard.errors import DataFetchError, InvoiceDashboardError
from invoice_dashboard.infrastructure.db_factory import Database
from invoice_dashboard.queries import (
    ITEMS_PER_PAGE,
    fetch_card_data,
    fetch_customers,
    fetch_filtered_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    fetch_revenue,
)
from invoice_dashboard.seed import SeedReport, seed_database
from invoice_dashboard.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Persistence
    "Database",
    # Queries
    "ITEMS_PER_PAGE",
    "fetch_card_data",
    "fetch_customers",
    "fetch_filtered_customers",
    "fetch_filtered_invoices",
    "fetch_invoice_by_id",
    "fetch_invoices_pages",
    "fetch_latest_invoices",
    "fetch_revenue",
    # Actions
    "ActionContext",
    "ActionState",
    "create_invoice",
    "delete_invoice",
    "update_invoice",
    # Seeding
    "SeedReport",
    "seed_database",
    # Errors
    "DataFetchError",
    "InvoiceDashboardError",
    # Logging
    "configure_logging",
    "get_logger",
]
