"""
Invoice form validation.

Submitted forms arrive as a flat mapping of strings (``customerId``,
``amount``, ``status``). Every field is checked independently so the caller
can show all problems at once; errors are keyed by field name and carry the
message meant for the form.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from invoice_dashboard.domain.models import InvoiceStatus
from invoice_dashboard.utils.formatting import decimal_to_cents

FIELD_MESSAGES: Dict[str, str] = {
    "customer_id": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}

FieldErrors = Dict[str, List[str]]


class InvoiceFormInput(BaseModel):
    """
    Validated invoice fields. Identity and issue date are not part of the form.
    """

    customer_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, allow_inf_nan=False)
    status: InvoiceStatus

    model_config = {"frozen": True, "str_strip_whitespace": True}

    @field_validator("amount")
    @classmethod
    def _amount_has_positive_cents(cls, value: Decimal) -> Decimal:
        # Stored as integer cents; sub-cent amounts round to zero.
        if decimal_to_cents(value) <= 0:
            raise ValueError("amount rounds to zero cents")
        return value

    @property
    def amount_in_cents(self) -> int:
        return decimal_to_cents(self.amount)


class ActionState(BaseModel):
    """What a failed form action hands back to the form for display."""

    errors: FieldErrors = Field(default_factory=dict)
    message: Optional[str] = None


def validate_invoice_form(
    form_data: Mapping[str, Optional[str]],
) -> Tuple[Optional[InvoiceFormInput], FieldErrors]:
    """
    Validate a submitted invoice form.

    Returns the parsed input and an empty error map on success, or ``None``
    and the per-field errors on failure.
    """
    raw = {
        "customer_id": form_data.get("customerId"),
        "amount": form_data.get("amount"),
        "status": form_data.get("status"),
    }
    try:
        return InvoiceFormInput.model_validate(raw), {}
    except ValidationError as exc:
        errors: FieldErrors = {}
        for error in exc.errors(include_url=False):
            field = str(error["loc"][0]) if error["loc"] else ""
            message = FIELD_MESSAGES.get(field, error["msg"])
            bucket = errors.setdefault(field, [])
            if message not in bucket:
                bucket.append(message)
        return None, errors


__all__ = [
    "FIELD_MESSAGES",
    "ActionState",
    "FieldErrors",
    "InvoiceFormInput",
    "validate_invoice_form",
]
