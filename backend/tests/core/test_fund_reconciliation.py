"""Fund Reconciliation — tests for pure session → fund record derivation.

Tests cover:
    - Amount parsing and minor/major unit conversion
    - Unpaid sessions raise PaymentNotCompletedError
    - Placeholders for missing names, metadata email fallback
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.core.domain_types import (
    PLACEHOLDER_DONOR_NAME,
    PLACEHOLDER_HOLDER_NAME,
    CheckoutSessionSnapshot,
)
from app.core.errors import PaymentNotCompletedError, UpstreamError, ValidationError
from app.core.fund_reconciliation import (
    derive_fund_record,
    from_minor_units,
    parse_amount,
    to_minor_units,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _paid(**overrides) -> CheckoutSessionSnapshot:
    fields = dict(
        id="cs_1",
        payment_status="paid",
        metadata={"name": "Nadia", "email": "nadia@example.com"},
        customer_email="nadia@example.com",
        customer_name="NADIA RAHMAN",
        amount_total=1999,
        currency="usd",
        payment_intent_id="pi_1",
        payment_method_types=("card",),
    )
    fields.update(overrides)
    return CheckoutSessionSnapshot(**fields)


# ─── amounts ─────────────────────────────────────────────────────

def test_parse_amount_accepts_numbers_and_strings():
    assert parse_amount(25) == Decimal("25.00")
    assert parse_amount("19.99") == Decimal("19.99")
    assert parse_amount(0.1) == Decimal("0.10")


@pytest.mark.parametrize("amount", [0, -5, "abc", None, "", "NaN", "Infinity"])
def test_parse_amount_rejects_non_positive_or_garbage(amount):
    with pytest.raises(ValidationError) as exc:
        parse_amount(amount)
    assert exc.value.field == "amount"


def test_minor_unit_conversion():
    assert to_minor_units(Decimal("19.99")) == 1999
    assert from_minor_units(1999) == Decimal("19.99")
    assert from_minor_units(500) == Decimal("5.00")


# ─── derive_fund_record ──────────────────────────────────────────

def test_derive_maps_session_fields():
    record = derive_fund_record(_paid(), now=NOW)
    assert record == {
        "donor_display_name": "Nadia",
        "payment_holder_name": "NADIA RAHMAN",
        "email": "nadia@example.com",
        "amount": Decimal("19.99"),
        "currency": "usd",
        "transaction_id": "pi_1",
        "checkout_session_id": "cs_1",
        "payment_method_types": ["card"],
        "status": "paid",
        "created_at": NOW,
    }


@pytest.mark.parametrize("status", ["unpaid", "no_payment_required", None])
def test_derive_rejects_unpaid_session(status):
    with pytest.raises(PaymentNotCompletedError) as exc:
        derive_fund_record(_paid(payment_status=status))
    assert exc.value.http_status == 409


def test_derive_uses_placeholders_for_missing_names():
    record = derive_fund_record(_paid(metadata={}, customer_name=None))
    assert record["donor_display_name"] == PLACEHOLDER_DONOR_NAME
    assert record["payment_holder_name"] == PLACEHOLDER_HOLDER_NAME


def test_derive_falls_back_to_metadata_email():
    record = derive_fund_record(_paid(customer_email=None))
    assert record["email"] == "nadia@example.com"


def test_derive_requires_payment_intent():
    with pytest.raises(UpstreamError):
        derive_fund_record(_paid(payment_intent_id=None))
