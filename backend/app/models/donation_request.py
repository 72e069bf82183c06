"""DonationRequest ORM — persists one request for blood, owned by its requester.

Invariants:
    - id is UUID primary key
    - All 13 descriptive columns are non-nullable
    - status in {pending, inprogress, done, cancel} (CHECK constraint)
    - donor_name/donor_email are NULL until a donor commits
    - updated_at is stamped on every accepted mutation

Design Decisions:
    - status as String + CHECK over a native ENUM: same DDL on PostgreSQL and
      SQLite, and adding a state is a constraint swap rather than a type migration
    - donation_date/donation_time stored as the strings the frontend sends
      (ISO date, HH:MM) so they sort lexicographically
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class DonationRequest(Base):
    """Donation request entity."""
    __tablename__ = "donation_requests"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'inprogress', 'done', 'cancel')",
            name="ck_donation_requests_status",
        ),
        Index("ix_donation_requests_requester_created", "requester_email", "created_at"),
        Index("ix_donation_requests_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    requester_name: Mapped[str] = mapped_column(String(200), nullable=False)
    requester_email: Mapped[str] = mapped_column(String(320), nullable=False)
    recipient_name: Mapped[str] = mapped_column(String(200), nullable=False)
    recipient_division: Mapped[str] = mapped_column(String(100), nullable=False)
    recipient_district: Mapped[str] = mapped_column(String(100), nullable=False)
    recipient_upazila: Mapped[str] = mapped_column(String(100), nullable=False)
    recipient_union: Mapped[str] = mapped_column(String(100), nullable=False)
    hospital_name: Mapped[str] = mapped_column(String(300), nullable=False)
    full_address: Mapped[str] = mapped_column(Text, nullable=False)
    blood_group: Mapped[str] = mapped_column(String(5), nullable=False)
    donation_date: Mapped[str] = mapped_column(String(20), nullable=False)
    donation_time: Mapped[str] = mapped_column(String(20), nullable=False)
    request_message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    donor_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    donor_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
