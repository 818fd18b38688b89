"""
Domain package for the invoice dashboard.

Exports the stored entities, the display records returned by queries and the
invoice form validation used by actions. No database access happens here.
"""

from invoice_dashboard.domain.forms import (
    ActionState,
    InvoiceFormInput,
    validate_invoice_form,
)
from invoice_dashboard.domain.models import (
    INVOICE_STATUSES,
    CardData,
    Customer,
    CustomerField,
    CustomersTableRow,
    Invoice,
    InvoiceForm,
    InvoicesTableRow,
    LatestInvoice,
    Revenue,
    User,
)

__all__ = [
    "INVOICE_STATUSES",
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
    "ActionState",
    "InvoiceFormInput",
    "validate_invoice_form",
]
