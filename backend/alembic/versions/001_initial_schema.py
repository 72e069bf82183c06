"""Initial schema — donation_requests, fund_records, user_accounts.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "donation_requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("requester_name", sa.String(200), nullable=False),
        sa.Column("requester_email", sa.String(320), nullable=False),
        sa.Column("recipient_name", sa.String(200), nullable=False),
        sa.Column("recipient_division", sa.String(100), nullable=False),
        sa.Column("recipient_district", sa.String(100), nullable=False),
        sa.Column("recipient_upazila", sa.String(100), nullable=False),
        sa.Column("recipient_union", sa.String(100), nullable=False),
        sa.Column("hospital_name", sa.String(300), nullable=False),
        sa.Column("full_address", sa.Text, nullable=False),
        sa.Column("blood_group", sa.String(5), nullable=False),
        sa.Column("donation_date", sa.String(20), nullable=False),
        sa.Column("donation_time", sa.String(20), nullable=False),
        sa.Column("request_message", sa.Text, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("donor_name", sa.String(200), nullable=True),
        sa.Column("donor_email", sa.String(320), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'inprogress', 'done', 'cancel')",
            name="ck_donation_requests_status",
        ),
    )
    op.create_index(
        "ix_donation_requests_requester_created", "donation_requests",
        ["requester_email", "created_at"],
    )
    op.create_index("ix_donation_requests_status", "donation_requests", ["status"])

    op.create_table(
        "fund_records",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("donor_display_name", sa.String(200), nullable=False),
        sa.Column("payment_holder_name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=True),
        sa.Column("transaction_id", sa.String(255), nullable=False, unique=True),
        sa.Column("checkout_session_id", sa.String(255), nullable=True),
        sa.Column("payment_method_types", sa.JSON, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="paid"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "user_accounts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("avatar_url", sa.String(1000), nullable=True),
        sa.Column("blood_group", sa.String(5), nullable=True),
        sa.Column("division", sa.String(100), nullable=True),
        sa.Column("district", sa.String(100), nullable=True),
        sa.Column("upazila", sa.String(100), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="donor"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "role IN ('donor', 'admin', 'volunteer')", name="ck_user_accounts_role",
        ),
        sa.CheckConstraint(
            "status IN ('active', 'blocked')", name="ck_user_accounts_status",
        ),
    )


def downgrade() -> None:
    op.drop_table("user_accounts")
    op.drop_table("fund_records")
    op.drop_index("ix_donation_requests_status", table_name="donation_requests")
    op.drop_index("ix_donation_requests_requester_created", table_name="donation_requests")
    op.drop_table("donation_requests")
