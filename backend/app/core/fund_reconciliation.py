"""Fund Reconciliation — pure conversion of a paid checkout session into a fund record.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Only sessions with payment_status == "paid" produce a record
    - amount is stored in major units; the provider reports minor units
    - transaction_id is the provider's payment-intent id (the idempotency key)

Design Decisions:
    - Decimal arithmetic for money: avoids float rounding on 19.99-style amounts
    - Placeholder names instead of failures: the payment already happened,
      a missing display name must not block recording it
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

from app.core.domain_types import (
    PLACEHOLDER_DONOR_NAME,
    PLACEHOLDER_HOLDER_NAME,
    CheckoutSessionSnapshot,
    FundStatus,
)
from app.core.errors import PaymentNotCompletedError, UpstreamError, ValidationError

MINOR_UNITS_PER_MAJOR = 100
_CENT = Decimal("0.01")


def parse_amount(amount: object) -> Decimal:
    """Parse a positive major-unit amount (max two decimals)."""
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        raise ValidationError("Missing required field: amount", "amount")
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid amount '{amount}'", "amount")
    if not value.is_finite() or value <= 0:
        raise ValidationError("Amount must be a positive number", "amount")
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Decimal) -> int:
    return int((amount * MINOR_UNITS_PER_MAJOR).to_integral_value(ROUND_HALF_UP))


def from_minor_units(minor: int) -> Decimal:
    return (Decimal(minor) / MINOR_UNITS_PER_MAJOR).quantize(_CENT)


def check_session_paid(session: CheckoutSessionSnapshot) -> None:
    if session.payment_status != "paid":
        raise PaymentNotCompletedError(session.payment_status)


def derive_fund_record(
    session: CheckoutSessionSnapshot, now: datetime | None = None,
) -> dict:
    """Build fund record column values from a paid session snapshot."""
    check_session_paid(session)
    if not session.payment_intent_id:
        raise UpstreamError(
            f"Paid session {session.id} has no payment intent", "malformed_session",
        )
    metadata = session.metadata or {}
    return {
        "donor_display_name": (
            metadata.get("name") or PLACEHOLDER_DONOR_NAME
        ),
        "payment_holder_name": (
            session.customer_name or PLACEHOLDER_HOLDER_NAME
        ),
        "email": session.customer_email or metadata.get("email"),
        "amount": from_minor_units(session.amount_total or 0),
        "currency": session.currency,
        "transaction_id": session.payment_intent_id,
        "checkout_session_id": session.id,
        "payment_method_types": list(session.payment_method_types),
        "status": FundStatus.PAID.value,
        "created_at": now or datetime.now(timezone.utc),
    }
