"""
Query layer for the invoice dashboard.

Read-only coroutines that take a `Database` and return display-ready records.
Store failures surface as `DataFetchError` with a generic message.
"""

from invoice_dashboard.queries.base import ITEMS_PER_PAGE
from invoice_dashboard.queries.customers import fetch_customers, fetch_filtered_customers
from invoice_dashboard.queries.dashboard import (
    fetch_card_data,
    fetch_latest_invoices,
    fetch_revenue,
)
from invoice_dashboard.queries.invoices import (
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)

__all__ = [
    "ITEMS_PER_PAGE",
    # Dashboard
    "fetch_card_data",
    "fetch_latest_invoices",
    "fetch_revenue",
    # Invoices
    "fetch_filtered_invoices",
    "fetch_invoice_by_id",
    "fetch_invoices_pages",
    # Customers
    "fetch_customers",
    "fetch_filtered_customers",
]
