"""Payment Routes — hosted checkout creation, confirmation and fund listing.

Invariants:
    - POST /donation-payment-info is safe to retry with the same sessionId
    - Provider failures surface as 502 UPSTREAM_ERROR; nothing is written locally
"""

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_payment_reconciler
from app.schemas.payment import (
    CheckoutSessionCreate,
    CheckoutSessionResponse,
    FundPage,
    FundRecordResponse,
    PaymentConfirm,
    PaymentConfirmResponse,
)
from app.services.payment_reconciler import PaymentReconciler

router = APIRouter(tags=["payments"])


@router.post("/create-checkout-session", response_model=CheckoutSessionResponse)
async def create_checkout_session(
    body: CheckoutSessionCreate,
    reconciler: PaymentReconciler = Depends(get_payment_reconciler),
):
    url = await reconciler.create_checkout_session(body.amount, body.email, body.name)
    return CheckoutSessionResponse(url=url)


@router.post("/donation-payment-info", response_model=PaymentConfirmResponse)
async def confirm_donation_payment(
    body: PaymentConfirm,
    reconciler: PaymentReconciler = Depends(get_payment_reconciler),
):
    """Turn a paid checkout session into a fund record (idempotent)."""
    record, _ = await reconciler.confirm_payment(body.session_id)
    return PaymentConfirmResponse(
        success=True, donation=FundRecordResponse.model_validate(record),
    )


@router.get("/funds", response_model=FundPage)
async def list_funds(
    skip: int | None = Query(None),
    limit: int | None = Query(None),
    reconciler: PaymentReconciler = Depends(get_payment_reconciler),
):
    items, total = await reconciler.list_funds(skip, limit)
    return FundPage(
        funds=[FundRecordResponse.model_validate(r) for r in items],
        total_funds=total,
    )
