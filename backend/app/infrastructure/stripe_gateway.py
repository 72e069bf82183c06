"""Resilient Stripe Gateway — wraps Stripe Checkout with retry, backoff, and error mapping.

Invariants:
    - Rate limits (429) and connection errors: exponential backoff with jitter, max N retries
    - Other Stripe errors (card, invalid request, auth): immediate failure, no retry
    - All failures mapped to UpstreamError (core/errors.py)
    - Returned sessions are CheckoutSessionSnapshot values, never SDK objects
    - Session creation reuses ONE idempotency key across its retries

Design Decisions:
    - Wrapper over raw SDK: the reconciler depends on the PaymentGateway Protocol
      and tests substitute an in-memory fake
    - api_key passed per call instead of setting stripe.api_key globally
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
"""

import asyncio
import logging
import random
import uuid
from typing import Any, Awaitable, Callable

import stripe

from app.core.domain_types import CheckoutSessionSnapshot
from app.core.errors import UpstreamError

logger = logging.getLogger(__name__)


def _attr(obj: Any, name: str, default: Any = None) -> Any:
    """Read a Stripe object field; missing keys and None parents yield default."""
    if obj is None:
        return default
    value = getattr(obj, name, default)
    return default if value is None else value


def to_snapshot(session: Any) -> CheckoutSessionSnapshot:
    """Normalize a Stripe checkout.Session into a CheckoutSessionSnapshot."""
    metadata = _attr(session, "metadata")
    customer_details = _attr(session, "customer_details")
    payment_intent = _attr(session, "payment_intent")
    if payment_intent is not None and not isinstance(payment_intent, str):
        payment_intent = _attr(payment_intent, "id")
    return CheckoutSessionSnapshot(
        id=_attr(session, "id"),
        payment_status=_attr(session, "payment_status"),
        url=_attr(session, "url"),
        metadata={
            key: str(_attr(metadata, key))
            for key in ("name", "email", "amount")
            if _attr(metadata, key) is not None
        },
        customer_email=(
            _attr(customer_details, "email") or _attr(session, "customer_email")
        ),
        customer_name=_attr(customer_details, "name"),
        amount_total=_attr(session, "amount_total"),
        currency=_attr(session, "currency"),
        payment_intent_id=payment_intent,
        payment_method_types=tuple(_attr(session, "payment_method_types", [])),
    )


class StripeGateway:
    """PaymentGateway implementation backed by Stripe Checkout."""

    def __init__(
        self,
        api_key: str,
        currency: str = "usd",
        success_url: str = "",
        cancel_url: str = "",
        product_name: str = "Blood donation fund contribution",
        max_retries: int = 3,
        base_delay_ms: int = 500,
        max_delay_ms: int = 8_000,
    ):
        self.api_key = api_key
        self.currency = currency
        self.success_url = success_url
        self.cancel_url = cancel_url
        self.product_name = product_name
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def create_checkout_session(
        self,
        *,
        amount_minor: int,
        email: str,
        metadata: dict[str, str],
    ) -> CheckoutSessionSnapshot:
        """Create a hosted card-payment session for a single line item."""
        idempotency_key = f"checkout-{uuid.uuid4()}"
        session = await self._with_retry(
            "create_checkout_session",
            lambda: stripe.checkout.Session.create_async(
                api_key=self.api_key,
                idempotency_key=idempotency_key,
                mode="payment",
                payment_method_types=["card"],
                customer_email=email,
                line_items=[{
                    "price_data": {
                        "currency": self.currency,
                        "product_data": {"name": self.product_name},
                        "unit_amount": amount_minor,
                    },
                    "quantity": 1,
                }],
                metadata=metadata,
                success_url=(
                    f"{self.success_url}?session_id={{CHECKOUT_SESSION_ID}}"
                ),
                cancel_url=self.cancel_url,
            ),
        )
        logger.info(
            "Checkout session created",
            extra={"checkout_session_id": _attr(session, "id")},
        )
        return to_snapshot(session)

    async def retrieve_checkout_session(
        self, session_id: str,
    ) -> CheckoutSessionSnapshot:
        session = await self._with_retry(
            "retrieve_checkout_session",
            lambda: stripe.checkout.Session.retrieve_async(
                session_id, api_key=self.api_key,
            ),
        )
        return to_snapshot(session)

    async def _with_retry(
        self, operation: str, call: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run call, retrying transient Stripe failures with backoff."""
        for attempt in range(self.max_retries + 1):
            try:
                return await call()
            except stripe.RateLimitError as e:
                await self._handle_transient(operation, e, attempt, "rate_limit")
            except stripe.APIConnectionError as e:
                await self._handle_transient(
                    operation, e, attempt, "connection_error",
                )
            except stripe.StripeError as e:
                logger.error(
                    f"Stripe {operation} failed: {e.user_message or e}",
                    extra={"error_code": getattr(e, "code", None)},
                )
                raise UpstreamError(
                    e.user_message or "Payment provider rejected the request",
                    type(e).__name__,
                )
        raise UpstreamError(f"{operation} exhausted retries", "retries_exhausted")

    async def _handle_transient(
        self, operation: str, e: Exception, attempt: int, kind: str,
    ) -> None:
        if attempt >= self.max_retries:
            raise UpstreamError(
                f"{operation} failed after {self.max_retries} retries", kind,
            )
        delay = self._backoff(attempt)
        logger.warning(
            f"Stripe {kind} on {operation}, retry after {delay}ms: {e}",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

