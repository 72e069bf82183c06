"""User Account Schemas — profile payloads and listing envelope."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel, StrictCamelModel


class UserCreate(CamelModel):
    email: str | None = Field(None, max_length=320)
    name: str | None = Field(None, max_length=200)
    avatar_url: str | None = Field(None, max_length=1000)
    blood_group: str | None = None
    division: str | None = None
    district: str | None = None
    upazila: str | None = None
    role: str | None = None
    status: str | None = None


class UserPatch(StrictCamelModel):
    name: str | None = Field(None, max_length=200)
    avatar_url: str | None = Field(None, max_length=1000)
    blood_group: str | None = None
    division: str | None = None
    district: str | None = None
    upazila: str | None = None
    role: str | None = None
    status: str | None = None


class UserResponse(CamelModel):
    id: UUID
    email: str
    name: str | None = None
    avatar_url: str | None = None
    blood_group: str | None = None
    division: str | None = None
    district: str | None = None
    upazila: str | None = None
    role: str
    status: str
    created_at: datetime
    updated_at: datetime | None = None


class UserPage(CamelModel):
    users: list[UserResponse]
    total_users: int
