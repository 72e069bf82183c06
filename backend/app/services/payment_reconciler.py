"""Payment Reconciler — checkout session creation and idempotent payment confirmation.

Invariants:
    - create_checkout_session writes no local state
    - confirm_payment writes at most one FundRecord per transaction_id
    - A repeated confirmation returns the stored record unchanged
    - Unpaid sessions raise PaymentNotCompletedError and write nothing

Design Decisions:
    - Confirmation is safe to retry after a client timeout: the provider is the
      source of truth and insert_or_get makes the local write idempotent
    - Amount validated and converted to minor units here, not in the gateway,
      so the gateway never sees a float
"""

import logging

from app.core.fund_reconciliation import derive_fund_record, parse_amount, to_minor_units
from app.core.errors import UpstreamError, ValidationError
from app.core.repository_protocols import FundRepository, PaymentGateway
from app.core.search_criteria import clamp_pagination

logger = logging.getLogger(__name__)


class PaymentReconciler:
    """Bridges the payment provider and the fund ledger."""

    def __init__(
        self,
        gateway: PaymentGateway,
        funds: FundRepository,
        default_limit: int = 10,
        max_limit: int = 100,
    ):
        self.gateway = gateway
        self.funds = funds
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def create_checkout_session(
        self, amount: object, email: str | None, name: str | None,
    ) -> str:
        """Create a hosted checkout session and return its redirect URL."""
        value = parse_amount(amount)
        if not email or not email.strip():
            raise ValidationError("Missing required field: email", "email")
        display_name = (name or "").strip()

        session = await self.gateway.create_checkout_session(
            amount_minor=to_minor_units(value),
            email=email.strip(),
            metadata={
                "name": display_name,
                "email": email.strip(),
                "amount": str(value),
            },
        )
        if not session.url:
            raise UpstreamError(
                f"Checkout session {session.id} has no redirect URL", "missing_url",
            )
        return session.url

    async def confirm_payment(self, session_id: str | None) -> tuple[dict, bool]:
        """Record the fund for a paid session exactly once.

        Returns (record, created).
        """
        if not session_id or not session_id.strip():
            raise ValidationError("Missing required field: sessionId", "sessionId")

        session = await self.gateway.retrieve_checkout_session(session_id.strip())
        values = derive_fund_record(session)

        record, created = await self.funds.insert_or_get(values)
        if created:
            logger.info(
                "Fund record created",
                extra={
                    "transaction_id": record["transaction_id"],
                    "checkout_session_id": session.id,
                },
            )
        else:
            logger.info(
                "Payment already reconciled, returning existing fund record",
                extra={
                    "transaction_id": record["transaction_id"],
                    "checkout_session_id": session.id,
                },
            )
        return record, created

    async def list_funds(
        self, skip: int | None = None, limit: int | None = None,
    ) -> tuple[list[dict], int]:
        safe_skip, safe_limit = clamp_pagination(
            skip, limit, self.default_limit, self.max_limit,
        )
        total = await self.funds.count()
        items = await self.funds.list_page(safe_skip, safe_limit)
        return items, total
