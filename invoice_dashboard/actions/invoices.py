"""
Invoice form actions: create, update and delete.

Each action validates first and only then touches the store. A successful
create or update marks the invoice list stale and redirects to it; failures
hand an `ActionState` back to the form instead. Store errors are logged with
their traceback and replaced with a generic message. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Mapping, Optional

import psycopg

from invoice_dashboard.domain.forms import ActionState, validate_invoice_form
from invoice_dashboard.infrastructure.db_factory import Database
from invoice_dashboard.infrastructure.views import (
    InMemoryViewCache,
    Navigator,
    RaisingNavigator,
    ViewCache,
)
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

INVOICES_PATH = "/dashboard/invoices"

FormData = Mapping[str, Optional[str]]


@dataclass
class ActionContext:
    """Per-request collaborators an action needs."""

    db: Database
    cache: ViewCache = field(default_factory=InMemoryViewCache)
    navigator: Navigator = field(default_factory=RaisingNavigator)


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


async def create_invoice(ctx: ActionContext, form_data: FormData) -> Optional[ActionState]:
    """
    Create an invoice dated today from a submitted form.

    Returns an `ActionState` when validation or the insert fails; on success
    control leaves through `ctx.navigator.redirect`.
    """
    parsed, errors = validate_invoice_form(form_data)
    if parsed is None:
        return ActionState(errors=errors, message="Missing Fields. Failed to Create Invoice.")

    try:
        await ctx.db.execute(
            """
            INSERT INTO invoices (customer_id, amount, status, date)
            VALUES (%s, %s, %s, %s)
            """,
            (parsed.customer_id, parsed.amount_in_cents, parsed.status, _today()),
        )
    except psycopg.Error:
        log.exception("Database Error: failed to create invoice")
        return ActionState(message="Database Error: Failed to Create Invoice.")

    log.info(
        "Invoice created",
        extra={"customer_id": parsed.customer_id, "amount_cents": parsed.amount_in_cents},
    )
    ctx.cache.revalidate_path(INVOICES_PATH)
    ctx.navigator.redirect(INVOICES_PATH)
    return None


async def update_invoice(
    ctx: ActionContext, invoice_id: str, form_data: FormData
) -> Optional[ActionState]:
    """
    Overwrite customer, amount and status of an existing invoice.

    The issue date and id never change. An id that matches no row is
    reported like any other store failure.
    """
    parsed, errors = validate_invoice_form(form_data)
    if parsed is None:
        return ActionState(errors=errors, message="Missing Fields. Failed to Update Invoice.")

    try:
        updated = await ctx.db.execute(
            """
            UPDATE invoices
            SET customer_id = %s, amount = %s, status = %s
            WHERE id = %s
            """,
            (parsed.customer_id, parsed.amount_in_cents, parsed.status, invoice_id),
        )
    except psycopg.Error:
        log.exception("Database Error: failed to update invoice", extra={"invoice_id": invoice_id})
        return ActionState(message="Database Error: Failed to Update Invoice.")

    if updated == 0:
        log.warning("Update matched no invoice", extra={"invoice_id": invoice_id})
        return ActionState(message="Database Error: Failed to Update Invoice.")

    log.info("Invoice updated", extra={"invoice_id": invoice_id})
    ctx.cache.revalidate_path(INVOICES_PATH)
    ctx.navigator.redirect(INVOICES_PATH)
    return None


async def delete_invoice(ctx: ActionContext, invoice_id: str) -> bool:
    """
    Best-effort delete.

    Returns True when a row was removed. Store errors are logged and
    reported as False, never raised. The invoice list is revalidated either way.
    """
    deleted = False
    try:
        deleted = await ctx.db.execute("DELETE FROM invoices WHERE id = %s", (invoice_id,)) > 0
    except psycopg.Error:
        log.exception("Database Error: failed to delete invoice", extra={"invoice_id": invoice_id})

    log.info("Invoice delete processed", extra={"invoice_id": invoice_id, "deleted": deleted})
    ctx.cache.revalidate_path(INVOICES_PATH)
    return deleted


__all__ = [
    "INVOICES_PATH",
    "ActionContext",
    "create_invoice",
    "delete_invoice",
    "update_invoice",
]
