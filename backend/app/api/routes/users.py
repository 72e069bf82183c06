"""User Routes — keyed CRUD over user accounts (email is the key)."""

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_user_service
from app.schemas.user import UserCreate, UserPage, UserPatch, UserResponse
from app.services.user_accounts import UserAccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, service: UserAccountService = Depends(get_user_service),
):
    record = await service.create(body.model_dump(exclude_none=True))
    return UserResponse.model_validate(record)


@router.get("", response_model=UserPage)
async def list_users(
    status_filter: str | None = Query(None, alias="status"),
    role: str | None = Query(None),
    skip: int | None = Query(None),
    limit: int | None = Query(None),
    service: UserAccountService = Depends(get_user_service),
):
    items, total = await service.list_accounts(status_filter, role, skip, limit)
    return UserPage(
        users=[UserResponse.model_validate(u) for u in items], total_users=total,
    )


@router.get("/{email}", response_model=UserResponse)
async def get_user(
    email: str, service: UserAccountService = Depends(get_user_service),
):
    return UserResponse.model_validate(await service.get_by_email(email))


@router.patch("/{email}", response_model=UserResponse)
async def update_user(
    email: str,
    body: UserPatch,
    service: UserAccountService = Depends(get_user_service),
):
    record = await service.update(email, body.model_dump(exclude_unset=True))
    return UserResponse.model_validate(record)


@router.delete("/{email}", response_model=UserResponse)
async def delete_user(
    email: str, service: UserAccountService = Depends(get_user_service),
):
    return UserResponse.model_validate(await service.delete(email))
