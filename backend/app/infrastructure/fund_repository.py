"""Fund Repository — SQLAlchemy implementation of FundRepository.

Invariants:
    - At most one row per transaction_id (UNIQUE index)
    - insert_or_get never raises on a duplicate: it returns the stored row
    - Rows are never updated or deleted here

Design Decisions:
    - Read first, then insert, then resolve IntegrityError by re-reading:
      the read avoids a failed INSERT on the common retry path, the unique
      index closes the race between two concurrent confirmations
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.fund_record import FundRecord

logger = logging.getLogger(__name__)


def fund_to_dict(row: FundRecord) -> dict:
    return {
        column.key: getattr(row, column.key)
        for column in FundRecord.__table__.columns
    }


class SqlFundRepository:
    """Fund record persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_transaction_id(self, transaction_id: str) -> dict | None:
        result = await self.db.execute(
            select(FundRecord).where(FundRecord.transaction_id == transaction_id),
        )
        row = result.scalar_one_or_none()
        return fund_to_dict(row) if row else None

    async def insert_or_get(self, values: dict) -> tuple[dict, bool]:
        """Insert a fund record unless its transaction_id exists.

        Returns (record, created).
        """
        transaction_id = values["transaction_id"]
        existing = await self.get_by_transaction_id(transaction_id)
        if existing:
            return existing, False

        row = FundRecord(**values)
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            existing = await self.get_by_transaction_id(transaction_id)
            if existing is None:
                raise
            logger.info(
                "Concurrent confirmation resolved to existing fund record",
                extra={"transaction_id": transaction_id},
            )
            return existing, False
        await self.db.refresh(row)
        return fund_to_dict(row), True

    async def count(self) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(FundRecord),
        )
        return int(result.scalar_one())

    async def list_page(self, skip: int, limit: int) -> list[dict]:
        result = await self.db.execute(
            select(FundRecord)
            .order_by(FundRecord.created_at.desc(), FundRecord.id)
            .offset(skip)
            .limit(limit),
        )
        return [fund_to_dict(row) for row in result.scalars().all()]
