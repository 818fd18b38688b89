"""
Invoice listing, pagination and single-invoice lookup.

The listing and the page count share the same join and OR-predicate with one
known difference: the listing strips commas from the search term and matches
the dollar-formatted amount, while the count matches the raw amount and keeps
commas. The two are kept as they are until product decides which one wins.
"""

from __future__ import annotations

import math
from typing import List, Optional

from invoice_dashboard.domain.models import InvoiceForm, InvoicesTableRow
from invoice_dashboard.infrastructure.db_factory import Database
from invoice_dashboard.queries.base import ITEMS_PER_PAGE, contains_pattern, guarded
from invoice_dashboard.utils.formatting import cents_to_decimal
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

_FILTERED_INVOICES_SQL = """
    SELECT
      invoices.id,
      invoices.customer_id,
      invoices.amount,
      invoices.date,
      invoices.status,
      customers.name,
      customers.email,
      customers.image_url
    FROM invoices
    JOIN customers ON invoices.customer_id = customers.id
    WHERE
      customers.name ILIKE %(pattern)s OR
      customers.email ILIKE %(pattern)s OR
      TO_CHAR(invoices.amount, 'FM$999999999D00') ILIKE %(pattern)s OR
      invoices.date::text ILIKE %(pattern)s OR
      invoices.status ILIKE %(pattern)s
    ORDER BY invoices.date DESC
    LIMIT %(limit)s OFFSET %(offset)s
"""

_INVOICES_COUNT_SQL = """
    SELECT COUNT(*)
    FROM invoices
    JOIN customers ON invoices.customer_id = customers.id
    WHERE
      customers.name ILIKE %(pattern)s OR
      customers.email ILIKE %(pattern)s OR
      invoices.amount::text ILIKE %(pattern)s OR
      invoices.date::text ILIKE %(pattern)s OR
      invoices.status ILIKE %(pattern)s
"""


def page_offset(current_page: int) -> int:
    """Row offset of a 1-based page."""
    return (current_page - 1) * ITEMS_PER_PAGE


def strip_commas(query: str) -> str:
    """Drop thousands separators so "1,234" searches like "1234"."""
    return query.replace(",", "")


@guarded("Failed to fetch invoices.")
async def fetch_filtered_invoices(
    db: Database, query: str, current_page: int
) -> List[InvoicesTableRow]:
    """
    One page of invoices matching `query` in customer name or email, the
    formatted amount, the date or the status, newest first.
    """
    params = {
        "pattern": contains_pattern(strip_commas(query)),
        "limit": ITEMS_PER_PAGE,
        "offset": page_offset(current_page),
    }
    rows = await db.fetch_all(_FILTERED_INVOICES_SQL, params)
    log.debug(
        "Filtered invoices fetched",
        extra={"search": query, "page": current_page, "rows": len(rows)},
    )
    return [InvoicesTableRow.model_validate(row) for row in rows]


@guarded("Failed to fetch total number of invoices.")
async def fetch_invoices_pages(db: Database, query: str) -> int:
    """Number of `ITEMS_PER_PAGE` pages the matching invoices fill."""
    count = await db.fetch_value(_INVOICES_COUNT_SQL, {"pattern": contains_pattern(query)})
    return math.ceil(int(count or 0) / ITEMS_PER_PAGE)


@guarded("Failed to fetch invoice.")
async def fetch_invoice_by_id(db: Database, invoice_id: str) -> Optional[InvoiceForm]:
    row = await db.fetch_one(
        """
        SELECT invoices.id, invoices.customer_id, invoices.amount, invoices.status
        FROM invoices
        WHERE invoices.id = %s
        """,
        (invoice_id,),
    )
    if row is None:
        return None
    return InvoiceForm.model_validate({**row, "amount": cents_to_decimal(row["amount"])})


__all__ = [
    "fetch_filtered_invoices",
    "fetch_invoice_by_id",
    "fetch_invoices_pages",
    "page_offset",
    "strip_commas",
]
