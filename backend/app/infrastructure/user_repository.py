"""User Repository — SQLAlchemy implementation of UserRepository.

Invariants:
    - email uniqueness enforced by the database; a collision raises DuplicateKeyError
    - Filters are equality on column attributes chosen by the service
"""

from sqlalchemy import delete as sa_delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import UserId
from app.core.errors import DuplicateKeyError
from app.models.user_account import UserAccount


def user_to_dict(row: UserAccount) -> dict:
    return {
        column.key: getattr(row, column.key)
        for column in UserAccount.__table__.columns
    }


def _where_clauses(filters: dict) -> list:
    return [
        getattr(UserAccount, attribute) == value
        for attribute, value in filters.items()
    ]


class SqlUserRepository:
    """User account persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, values: dict) -> dict:
        row = UserAccount(**values)
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateKeyError("email", values["email"])
        await self.db.refresh(row)
        return user_to_dict(row)

    async def get_by_email(self, email: str) -> dict | None:
        result = await self.db.execute(
            select(UserAccount)
            .where(UserAccount.email == email)
            .execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return user_to_dict(row) if row else None

    async def update(self, user_id: UserId, values: dict) -> dict | None:
        result = await self.db.execute(
            update(UserAccount)
            .where(UserAccount.id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            return None
        await self.db.commit()
        refreshed = await self.db.execute(
            select(UserAccount)
            .where(UserAccount.id == user_id)
            .execution_options(populate_existing=True),
        )
        return user_to_dict(refreshed.scalar_one())

    async def delete(self, user_id: UserId) -> dict | None:
        result = await self.db.execute(
            select(UserAccount).where(UserAccount.id == user_id),
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        snapshot = user_to_dict(row)
        await self.db.execute(
            sa_delete(UserAccount).where(UserAccount.id == user_id),
        )
        await self.db.commit()
        return snapshot

    async def count(self, filters: dict) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(UserAccount)
            .where(*_where_clauses(filters)),
        )
        return int(result.scalar_one())

    async def list_page(self, filters: dict, skip: int, limit: int) -> list[dict]:
        result = await self.db.execute(
            select(UserAccount)
            .where(*_where_clauses(filters))
            .order_by(UserAccount.created_at.desc(), UserAccount.id)
            .offset(skip)
            .limit(limit),
        )
        return [user_to_dict(row) for row in result.scalars().all()]
