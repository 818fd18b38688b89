"""
Dashboard overview queries: summary cards, latest invoices, revenue chart.
"""

from __future__ import annotations

import asyncio
from typing import List

from invoice_dashboard.domain.models import CardData, LatestInvoice, Revenue
from invoice_dashboard.infrastructure.db_factory import Database
from invoice_dashboard.queries.base import guarded
from invoice_dashboard.utils.formatting import format_currency
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

LATEST_INVOICES_LIMIT = 5


@guarded("Failed to fetch revenue data.")
async def fetch_revenue(db: Database) -> List[Revenue]:
    """Full revenue table in storage order, for the monthly chart."""
    rows = await db.fetch_all("SELECT month, revenue FROM revenue")
    log.debug("Revenue fetched", extra={"rows": len(rows)})
    return [Revenue.model_validate(row) for row in rows]


@guarded("Failed to fetch the latest invoices.")
async def fetch_latest_invoices(db: Database) -> List[LatestInvoice]:
    rows = await db.fetch_all(
        """
        SELECT invoices.amount, customers.name, customers.image_url, customers.email, invoices.id
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        ORDER BY invoices.date DESC
        LIMIT %s
        """,
        (LATEST_INVOICES_LIMIT,),
    )
    return [
        LatestInvoice.model_validate({**row, "amount": format_currency(row["amount"])})
        for row in rows
    ]


@guarded("Failed to fetch card data.")
async def fetch_card_data(db: Database) -> CardData:
    """
    Four independent counts, issued concurrently on separate pooled
    connections. They are not read from one snapshot. The first failure
    cancels the counts still in flight.
    """
    tasks = [
        asyncio.ensure_future(count)
        for count in (
            db.fetch_value("SELECT COUNT(*) FROM invoices"),
            db.fetch_value("SELECT COUNT(*) FROM invoices WHERE status = %s", ("paid",)),
            db.fetch_value("SELECT COUNT(*) FROM invoices WHERE status = %s", ("pending",)),
            db.fetch_value("SELECT COUNT(*) FROM customers"),
        )
    ]
    try:
        invoice_count, paid_count, pending_count, customer_count = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise
    return CardData(
        number_of_invoices=int(invoice_count or 0),
        number_of_customers=int(customer_count or 0),
        total_paid_invoices=int(paid_count or 0),
        total_pending_invoices=int(pending_count or 0),
    )


__all__ = ["LATEST_INVOICES_LIMIT", "fetch_card_data", "fetch_latest_invoices", "fetch_revenue"]
