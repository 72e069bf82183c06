"""Payment Schemas — checkout session creation, confirmation and fund listings."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel


class CheckoutSessionCreate(CamelModel):
    """Amount in major currency units; positivity checked by the reconciler."""
    amount: str | float | None = None
    email: str | None = Field(None, max_length=320)
    name: str | None = Field(None, max_length=200)


class CheckoutSessionResponse(CamelModel):
    url: str


class PaymentConfirm(CamelModel):
    session_id: str | None = None


class FundRecordResponse(CamelModel):
    id: UUID
    donor_display_name: str
    payment_holder_name: str
    email: str | None = None
    amount: float
    currency: str | None = None
    transaction_id: str
    payment_method_types: list[str]
    status: str
    created_at: datetime


class PaymentConfirmResponse(CamelModel):
    success: bool
    donation: FundRecordResponse


class FundPage(CamelModel):
    funds: list[FundRecordResponse]
    total_funds: int
