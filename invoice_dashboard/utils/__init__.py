"""
Utilities package for the invoice dashboard.

Exports shared helpers for logging and currency formatting.
Keep this package lightweight and free of database access.
"""

from invoice_dashboard.utils.formatting import (
    cents_to_decimal,
    decimal_to_cents,
    format_currency,
)
from invoice_dashboard.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "cents_to_decimal",
    "decimal_to_cents",
    "format_currency",
]
