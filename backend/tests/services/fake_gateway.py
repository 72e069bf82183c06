"""In-memory PaymentGateway — stands in for Stripe Checkout in service and route tests.

Sessions start "unpaid"; mark_paid() simulates the customer completing checkout.
Setting fail_with makes every call raise that exception.
"""

from dataclasses import replace

from app.core.domain_types import CheckoutSessionSnapshot
from app.core.errors import UpstreamError


class FakePaymentGateway:
    def __init__(self):
        self.sessions: dict[str, CheckoutSessionSnapshot] = {}
        self.created: list[dict] = []
        self.retrieve_calls: list[str] = []
        self.fail_with: Exception | None = None

    async def create_checkout_session(
        self, *, amount_minor: int, email: str, metadata: dict[str, str],
    ) -> CheckoutSessionSnapshot:
        if self.fail_with:
            raise self.fail_with
        session_id = f"cs_test_{len(self.created) + 1}"
        self.created.append({
            "amount_minor": amount_minor, "email": email, "metadata": metadata,
        })
        snapshot = CheckoutSessionSnapshot(
            id=session_id,
            payment_status="unpaid",
            url=f"https://checkout.stripe.test/pay/{session_id}",
            metadata=dict(metadata),
            customer_email=email,
            amount_total=amount_minor,
            currency="usd",
            payment_method_types=("card",),
        )
        self.sessions[session_id] = snapshot
        return snapshot

    async def retrieve_checkout_session(
        self, session_id: str,
    ) -> CheckoutSessionSnapshot:
        self.retrieve_calls.append(session_id)
        if self.fail_with:
            raise self.fail_with
        if session_id not in self.sessions:
            raise UpstreamError(
                f"No such checkout.session: {session_id}", "InvalidRequestError",
            )
        return self.sessions[session_id]

    def add_session(self, snapshot: CheckoutSessionSnapshot) -> None:
        self.sessions[snapshot.id] = snapshot

    def mark_paid(
        self,
        session_id: str,
        payment_intent_id: str = "pi_test_1",
        holder_name: str | None = "Card Holder",
    ) -> CheckoutSessionSnapshot:
        paid = replace(
            self.sessions[session_id],
            payment_status="paid",
            payment_intent_id=payment_intent_id,
            customer_name=holder_name,
        )
        self.sessions[session_id] = paid
        return paid
