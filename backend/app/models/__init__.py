"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Entities are independent: no foreign keys between requests, funds and users

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all
      and alembic autogenerate
"""

from app.models.donation_request import DonationRequest  # noqa: F401
from app.models.fund_record import FundRecord  # noqa: F401
from app.models.user_account import UserAccount  # noqa: F401
