"""FundRecord ORM — persists one completed, confirmed payment contribution.

Invariants:
    - transaction_id (provider payment intent) is UNIQUE: one record per payment
    - amount is in major currency units
    - status is always "paid" for reconciled records
    - Never updated or deleted by the application

Design Decisions:
    - Numeric(12, 2) over Float: money never goes through binary floating point
    - checkout_session_id kept alongside transaction_id for support lookups
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, JSON, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class FundRecord(Base):
    """Fund record entity."""
    __tablename__ = "fund_records"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    donor_display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    payment_holder_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    transaction_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    checkout_session_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )
    payment_method_types: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="paid",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
