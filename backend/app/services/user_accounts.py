"""User Account Service — keyed CRUD over user profiles, roles and statuses.

Invariants:
    - email is the lookup key and is unique
    - role defaults to donor, status to active
    - Updates are allow-listed (PATCHABLE_USER_FIELDS) and stamp updated_at
"""

import logging
from datetime import datetime, timezone

from app.core.domain_types import PATCHABLE_USER_FIELDS, UserRole, UserStatus
from app.core.errors import DuplicateKeyError, NotFoundError, ValidationError
from app.core.repository_protocols import UserRepository
from app.core.search_criteria import clamp_pagination

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ("name", "avatar_url", "blood_group", "division", "district", "upazila")


def _parse_enum(enum_cls, value, field: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(
            f"Invalid {field} '{value}'. Allowed: {allowed}", field,
        )


class UserAccountService:
    """User accounts as a plain keyed store."""

    def __init__(
        self,
        repository: UserRepository,
        default_limit: int = 10,
        max_limit: int = 100,
    ):
        self.repository = repository
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def create(self, payload: dict) -> dict:
        email = (payload.get("email") or "").strip().lower()
        if not email:
            raise ValidationError("Missing required field: email", "email")
        if await self.repository.get_by_email(email):
            raise DuplicateKeyError("email", email)

        now = datetime.now(timezone.utc)
        values = {
            name: payload[name] for name in _PROFILE_FIELDS
            if payload.get(name) is not None
        }
        values.update(
            email=email,
            role=_parse_enum(UserRole, payload.get("role") or UserRole.DONOR, "role"),
            status=_parse_enum(
                UserStatus, payload.get("status") or UserStatus.ACTIVE, "status",
            ),
            created_at=now,
            updated_at=now,
        )
        record = await self.repository.insert(values)
        logger.info("User account created", extra={"user_email": email})
        return record

    async def get_by_email(self, email: str) -> dict:
        record = await self.repository.get_by_email(email.strip().lower())
        if record is None:
            raise NotFoundError("UserAccount", email)
        return record

    async def list_accounts(
        self,
        status: str | None = None,
        role: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> tuple[list[dict], int]:
        filters = {}
        if status:
            filters["status"] = _parse_enum(UserStatus, status, "status")
        if role:
            filters["role"] = _parse_enum(UserRole, role, "role")
        safe_skip, safe_limit = clamp_pagination(
            skip, limit, self.default_limit, self.max_limit,
        )
        total = await self.repository.count(filters)
        items = await self.repository.list_page(filters, safe_skip, safe_limit)
        return items, total

    async def update(self, email: str, patch: dict) -> dict:
        unknown = sorted(set(patch) - PATCHABLE_USER_FIELDS)
        if unknown:
            raise ValidationError(
                f"Field '{unknown[0]}' cannot be updated", unknown[0],
            )
        values = {k: v for k, v in patch.items() if v is not None}
        if "role" in values:
            values["role"] = _parse_enum(UserRole, values["role"], "role")
        if "status" in values:
            values["status"] = _parse_enum(UserStatus, values["status"], "status")
        values["updated_at"] = datetime.now(timezone.utc)

        current = await self.get_by_email(email)
        updated = await self.repository.update(current["id"], values)
        if updated is None:
            raise NotFoundError("UserAccount", email)
        logger.info("User account updated", extra={"user_email": current["email"]})
        return updated

    async def delete(self, email: str) -> dict:
        current = await self.get_by_email(email)
        snapshot = await self.repository.delete(current["id"])
        if snapshot is None:
            raise NotFoundError("UserAccount", email)
        logger.info("User account deleted", extra={"user_email": current["email"]})
        return snapshot
