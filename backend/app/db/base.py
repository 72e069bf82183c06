"""Declarative base for the BloodBond tables.

donation_requests, fund_records and user_accounts all register on
Base.metadata; alembic/env.py and the test fixtures build the schema from it.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
