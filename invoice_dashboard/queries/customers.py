"""
Customer queries: the select-input list and the customers table.
"""

from __future__ import annotations

from typing import List

from invoice_dashboard.domain.models import CustomerField, CustomersTableRow
from invoice_dashboard.infrastructure.db_factory import Database
from invoice_dashboard.queries.base import contains_pattern, guarded
from invoice_dashboard.utils.formatting import format_currency

# LEFT JOIN keeps customers without invoices; their counts and sums come out as 0.
_FILTERED_CUSTOMERS_SQL = """
    SELECT
      customers.id,
      customers.name,
      customers.email,
      customers.image_url,
      COUNT(invoices.id) AS total_invoices,
      SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END) AS total_pending,
      SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END) AS total_paid
    FROM customers
    LEFT JOIN invoices ON customers.id = invoices.customer_id
    WHERE
      customers.name ILIKE %(pattern)s OR
      customers.email ILIKE %(pattern)s
    GROUP BY customers.id, customers.name, customers.email, customers.image_url
    ORDER BY customers.name ASC
"""


@guarded("Failed to fetch all customers.")
async def fetch_customers(db: Database) -> List[CustomerField]:
    rows = await db.fetch_all("SELECT id, name FROM customers ORDER BY name ASC")
    return [CustomerField.model_validate(row) for row in rows]


@guarded("Failed to fetch customer table.")
async def fetch_filtered_customers(db: Database, query: str) -> List[CustomersTableRow]:
    rows = await db.fetch_all(_FILTERED_CUSTOMERS_SQL, {"pattern": contains_pattern(query)})
    return [
        CustomersTableRow.model_validate(
            {
                **row,
                "total_invoices": int(row["total_invoices"] or 0),
                "total_pending": format_currency(int(row["total_pending"] or 0)),
                "total_paid": format_currency(int(row["total_paid"] or 0)),
            }
        )
        for row in rows
    ]


__all__ = ["fetch_customers", "fetch_filtered_customers"]
