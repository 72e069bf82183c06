"""UserAccount ORM — profile, role and status of a platform member.

Invariants:
    - email is UNIQUE (the natural key the frontend uses)
    - role in {donor, admin, volunteer}; status in {active, blocked}
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class UserAccount(Base):
    """User account entity."""
    __tablename__ = "user_accounts"
    __table_args__ = (
        CheckConstraint(
            "role IN ('donor', 'admin', 'volunteer')",
            name="ck_user_accounts_role",
        ),
        CheckConstraint(
            "status IN ('active', 'blocked')",
            name="ck_user_accounts_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    blood_group: Mapped[str | None] = mapped_column(String(5), nullable=True)
    division: Mapped[str | None] = mapped_column(String(100), nullable=True)
    district: Mapped[str | None] = mapped_column(String(100), nullable=True)
    upazila: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="donor")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
