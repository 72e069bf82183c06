"""Donation Request Repository — SQLAlchemy implementation of DonationRequestRepository.

Invariants:
    - update_if_active is ONE statement: UPDATE ... WHERE id = :id AND status IN (active)
    - A zero rowcount means "missing or terminal", never a partial write
    - count() and find() share the same WHERE clauses but not a snapshot
    - Returned records are plain dicts keyed by column attribute

Design Decisions:
    - Conditional UPDATE over SELECT FOR UPDATE: one round trip, works on
      SQLite in tests, and the status predicate is evaluated by the database
    - get() uses populate_existing so a row re-read after an UPDATE reflects
      the new values instead of the identity-map copy
    - id is the secondary sort key so pages are stable under equal sort values
"""

import logging

from sqlalchemy import delete as sa_delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import (
    ACTIVE_STATUSES,
    SEARCHABLE_REQUEST_FIELDS,
    RequestId,
)
from app.core.search_criteria import SearchSpec
from app.models.donation_request import DonationRequest

logger = logging.getLogger(__name__)

_ACTIVE_VALUES = sorted(s.value for s in ACTIVE_STATUSES)


def request_to_dict(row: DonationRequest) -> dict:
    return {
        column.key: getattr(row, column.key)
        for column in DonationRequest.__table__.columns
    }


def _where_clauses(spec: SearchSpec) -> list:
    clauses = [
        getattr(DonationRequest, attribute) == value
        for attribute, value in spec.filters.items()
    ]
    if spec.search:
        clauses.append(or_(*(
            getattr(DonationRequest, name).icontains(spec.search, autoescape=True)
            for name in SEARCHABLE_REQUEST_FIELDS
        )))
    return clauses


class SqlDonationRequestRepository:
    """Donation request persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, values: dict) -> dict:
        row = DonationRequest(**values)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return request_to_dict(row)

    async def get(self, request_id: RequestId) -> dict | None:
        result = await self.db.execute(
            select(DonationRequest)
            .where(DonationRequest.id == request_id)
            .execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return request_to_dict(row) if row else None

    async def update_if_active(
        self, request_id: RequestId, values: dict,
    ) -> dict | None:
        """Apply values only while the stored status is non-terminal."""
        result = await self.db.execute(
            update(DonationRequest)
            .where(DonationRequest.id == request_id)
            .where(DonationRequest.status.in_(_ACTIVE_VALUES))
            .values(**values)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            return None
        await self.db.commit()
        return await self.get(request_id)

    async def delete(self, request_id: RequestId) -> dict | None:
        snapshot = await self.get(request_id)
        if snapshot is None:
            return None
        result = await self.db.execute(
            sa_delete(DonationRequest).where(DonationRequest.id == request_id),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            return None
        await self.db.commit()
        return snapshot

    async def count(self, spec: SearchSpec) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(DonationRequest)
            .where(*_where_clauses(spec)),
        )
        return int(result.scalar_one())

    async def find(self, spec: SearchSpec) -> list[dict]:
        column = getattr(DonationRequest, spec.sort_attribute)
        ordering = column.desc() if spec.descending else column.asc()
        result = await self.db.execute(
            select(DonationRequest)
            .where(*_where_clauses(spec))
            .order_by(ordering, DonationRequest.id)
            .offset(spec.skip)
            .limit(spec.limit),
        )
        return [request_to_dict(row) for row in result.scalars().all()]
