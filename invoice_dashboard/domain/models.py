"""
Domain models for the invoice dashboard.

Two kinds of models live here: the stored entities (`User`, `Customer`,
`Invoice`, `Revenue`), aligned with the schema created by the seed loader,
and the display-ready records returned by the query layer.
"""
from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

InvoiceStatus = Literal["pending", "paid"]
INVOICE_STATUSES: tuple[str, ...] = ("pending", "paid")

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class User(BaseModel):
    """
    A dashboard login. `password` is plaintext only in the fixture set; the
    seed loader stores a bcrypt hash.
    """

    id: UUID
    name: str
    email: str
    password: str

    model_config = _FROZEN


class Customer(BaseModel):
    id: UUID
    name: str
    email: str
    image_url: str

    model_config = _FROZEN


class Invoice(BaseModel):
    """
    Representation of a single row in the `invoices` table.
    """

    id: UUID = Field(..., description="Primary key (UUID).")
    customer_id: UUID = Field(..., description="References customers.id.")
    amount: int = Field(..., gt=0, description="Amount in cents.")
    status: InvoiceStatus = Field(..., description="Payment status.")
    date: Date = Field(..., description="Issue date, set once at creation.")

    model_config = _FROZEN


class Revenue(BaseModel):
    month: str
    revenue: int

    model_config = _FROZEN


# Display records


class CardData(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: int
    total_pending_invoices: int

    model_config = _FROZEN


class LatestInvoice(BaseModel):
    id: UUID
    name: str
    email: str
    image_url: str
    amount: str = Field(..., description="Formatted currency string.")

    model_config = _FROZEN


class InvoicesTableRow(BaseModel):
    id: UUID
    customer_id: UUID
    name: str
    email: str
    image_url: str
    date: Date
    amount: int = Field(..., description="Amount in cents.")
    status: InvoiceStatus

    model_config = _FROZEN


class InvoiceForm(BaseModel):
    """An invoice shaped for the edit form: amount in currency units, not cents."""

    id: UUID
    customer_id: UUID
    amount: Decimal
    status: InvoiceStatus

    model_config = _FROZEN


class CustomerField(BaseModel):
    id: UUID
    name: str

    model_config = _FROZEN


class CustomersTableRow(BaseModel):
    id: UUID
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str

    model_config = _FROZEN


__all__ = [
    "INVOICE_STATUSES",
    "InvoiceStatus",
    "User",
    "Customer",
    "Invoice",
    "Revenue",
    "CardData",
    "LatestInvoice",
    "InvoicesTableRow",
    "InvoiceForm",
    "CustomerField",
    "CustomersTableRow",
]
