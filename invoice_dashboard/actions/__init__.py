"""
Mutation layer: validated invoice form actions.
"""

from invoice_dashboard.actions.invoices import (
    INVOICES_PATH,
    ActionContext,
    create_invoice,
    delete_invoice,
    update_invoice,
)

__all__ = [
    "INVOICES_PATH",
    "ActionContext",
    "create_invoice",
    "delete_invoice",
    "update_invoice",
]
