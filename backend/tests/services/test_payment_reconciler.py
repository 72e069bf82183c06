"""Payment Reconciler — checkout creation and idempotent confirmation.

Tests cover:
    - create_checkout_session validates amount/email and writes nothing
    - confirm_payment creates exactly one fund record per transaction
    - repeated confirmation returns the same record, created=False
    - unpaid session → PaymentNotCompletedError, nothing written
    - provider failure → UpstreamError, nothing written
"""

from decimal import Decimal

import pytest

from app.core.errors import PaymentNotCompletedError, UpstreamError, ValidationError
from app.services.payment_reconciler import PaymentReconciler
from tests.services.factories import make_paid_session


@pytest.fixture
def reconciler(fake_gateway, fund_repo):
    return PaymentReconciler(fake_gateway, fund_repo)


# ─── create_checkout_session ─────────────────────────────────────

async def test_checkout_returns_url_and_sends_minor_units(
    reconciler, fake_gateway, fund_repo,
):
    url = await reconciler.create_checkout_session("25", "nadia@example.com", "Nadia")

    assert url == "https://checkout.stripe.test/pay/cs_test_1"
    call = fake_gateway.created[0]
    assert call["amount_minor"] == 2500
    assert call["email"] == "nadia@example.com"
    assert call["metadata"] == {
        "name": "Nadia", "email": "nadia@example.com", "amount": "25.00",
    }
    assert await fund_repo.count() == 0


async def test_checkout_rounds_fractional_cents(reconciler, fake_gateway):
    await reconciler.create_checkout_session(19.999, "a@b.c", None)
    assert fake_gateway.created[0]["amount_minor"] == 2000


@pytest.mark.parametrize("amount", [0, -1, "ten", None])
async def test_checkout_rejects_bad_amount(reconciler, fake_gateway, amount):
    with pytest.raises(ValidationError) as exc:
        await reconciler.create_checkout_session(amount, "a@b.c", "A")
    assert exc.value.field == "amount"
    assert fake_gateway.created == []


async def test_checkout_requires_email(reconciler, fake_gateway):
    with pytest.raises(ValidationError) as exc:
        await reconciler.create_checkout_session(10, "  ", "A")
    assert exc.value.field == "email"
    assert fake_gateway.created == []


async def test_checkout_provider_failure_is_upstream(reconciler, fake_gateway):
    fake_gateway.fail_with = UpstreamError("boom", "APIError")
    with pytest.raises(UpstreamError):
        await reconciler.create_checkout_session(10, "a@b.c", "A")


# ─── confirm_payment ─────────────────────────────────────────────

async def test_confirm_paid_session_creates_record(reconciler, fake_gateway, fund_repo):
    fake_gateway.add_session(make_paid_session())

    record, created = await reconciler.confirm_payment("cs_paid_1")

    assert created is True
    assert record["transaction_id"] == "pi_paid_1"
    assert record["donor_display_name"] == "Nadia"
    assert record["payment_holder_name"] == "NADIA RAHMAN"
    assert record["email"] == "nadia@example.com"
    assert Decimal(record["amount"]) == Decimal("25.00")
    assert record["status"] == "paid"
    assert record["payment_method_types"] == ["card"]
    assert await fund_repo.count() == 1


async def test_confirm_twice_is_idempotent(reconciler, fake_gateway, fund_repo):
    fake_gateway.add_session(make_paid_session())

    first, first_created = await reconciler.confirm_payment("cs_paid_1")
    second, second_created = await reconciler.confirm_payment("cs_paid_1")

    assert first_created is True
    assert second_created is False
    assert second["id"] == first["id"]
    assert await fund_repo.count() == 1
    assert fake_gateway.retrieve_calls == ["cs_paid_1", "cs_paid_1"]


async def test_two_sessions_same_payment_intent_record_once(
    reconciler, fake_gateway, fund_repo,
):
    fake_gateway.add_session(make_paid_session("cs_a", "pi_shared"))
    fake_gateway.add_session(make_paid_session("cs_b", "pi_shared"))

    await reconciler.confirm_payment("cs_a")
    _, created = await reconciler.confirm_payment("cs_b")

    assert created is False
    assert await fund_repo.count() == 1


async def test_checkout_then_pay_then_confirm(reconciler, fake_gateway, fund_repo):
    await reconciler.create_checkout_session("12.50", "sam@example.com", "")
    fake_gateway.mark_paid("cs_test_1", payment_intent_id="pi_flow", holder_name=None)

    record, created = await reconciler.confirm_payment("cs_test_1")

    assert created is True
    assert record["donor_display_name"] == "Anonymous"
    assert record["payment_holder_name"] == "Unknown"
    assert Decimal(record["amount"]) == Decimal("12.50")


async def test_unpaid_session_writes_nothing(reconciler, fake_gateway, fund_repo):
    await reconciler.create_checkout_session(10, "a@b.c", "A")

    with pytest.raises(PaymentNotCompletedError) as exc:
        await reconciler.confirm_payment("cs_test_1")

    assert exc.value.payment_status == "unpaid"
    assert await fund_repo.count() == 0


async def test_unknown_session_is_upstream_error(reconciler, fund_repo):
    with pytest.raises(UpstreamError):
        await reconciler.confirm_payment("cs_missing")
    assert await fund_repo.count() == 0


@pytest.mark.parametrize("session_id", [None, "", "   "])
async def test_confirm_requires_session_id(reconciler, fake_gateway, session_id):
    with pytest.raises(ValidationError) as exc:
        await reconciler.confirm_payment(session_id)
    assert exc.value.field == "sessionId"
    assert fake_gateway.retrieve_calls == []


# ─── list_funds ──────────────────────────────────────────────────

async def test_list_funds_pages_with_total(reconciler, fake_gateway):
    for i in range(3):
        fake_gateway.add_session(make_paid_session(f"cs_{i}", f"pi_{i}"))
        await reconciler.confirm_payment(f"cs_{i}")

    items, total = await reconciler.list_funds(skip=0, limit=2)

    assert total == 3
    assert len(items) == 2
