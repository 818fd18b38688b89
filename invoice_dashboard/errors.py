"""
Exception hierarchy for the invoice dashboard.

Store errors never cross the query/action boundary as-is: queries replace them
with a `DataFetchError` carrying a generic message, and the original error is
only written to the server-side log.
"""

from __future__ import annotations


class InvoiceDashboardError(Exception):
    """Base class for errors raised by this package."""


class DataFetchError(InvoiceDashboardError):
    """A read query failed; the message is safe to show to users."""


__all__ = ["InvoiceDashboardError", "DataFetchError"]
