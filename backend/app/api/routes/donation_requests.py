"""Donation Request Routes — create, list, search, patch and delete requests.

Invariants:
    - Routes hold no business rules: every decision is made by the lifecycle
      manager or the query engine
    - Paths are a contract with frontend clients (/donation-requests,
      /donation-request-all) and must not be renamed
    - Errors propagate as BloodBondError and are rendered by error_handlers

Design Decisions:
    - GET /donation-requests (by requester, newest first) and
      GET /donation-request-all (filtered search) are separate operations
    - Query parameters keep the frontend's names (division, district, email)
      and are mapped onto column names here
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_lifecycle_manager, get_query_engine
from app.schemas.donation_request import (
    DonationRequestCreate,
    DonationRequestPage,
    DonationRequestPatch,
    DonationRequestResponse,
)
from app.services.lifecycle_manager import DonationLifecycleManager
from app.services.query_engine import RequestQueryEngine

router = APIRouter(tags=["donation-requests"])


@router.post(
    "/donation-requests",
    response_model=DonationRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_donation_request(
    body: DonationRequestCreate,
    manager: DonationLifecycleManager = Depends(get_lifecycle_manager),
):
    """Create a donation request (status defaults to pending)."""
    record = await manager.create(body.model_dump(exclude_none=True))
    return DonationRequestResponse.model_validate(record)


@router.get(
    "/donation-requests", response_model=list[DonationRequestResponse],
)
async def list_requests_by_requester(
    email: str | None = Query(None),
    limit: int | None = Query(None),
    manager: DonationLifecycleManager = Depends(get_lifecycle_manager),
):
    """All requests of one requester, newest first."""
    records = await manager.list_by_requester(email, limit)
    return [DonationRequestResponse.model_validate(r) for r in records]


@router.get(
    "/donation-requests/{request_id}", response_model=DonationRequestResponse,
)
async def get_donation_request(
    request_id: UUID,
    manager: DonationLifecycleManager = Depends(get_lifecycle_manager),
):
    return DonationRequestResponse.model_validate(await manager.get(request_id))


@router.get("/donation-request-all", response_model=DonationRequestPage)
async def search_donation_requests(
    id: str | None = Query(None),
    email: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    blood_group: str | None = Query(None, alias="bloodGroup"),
    division: str | None = Query(None),
    district: str | None = Query(None),
    recipient_name: str | None = Query(None, alias="recipientName"),
    search: str | None = Query(None),
    skip: int | None = Query(None),
    limit: int | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    order: str | None = Query(None),
    engine: RequestQueryEngine = Depends(get_query_engine),
):
    """Filtered, sorted, paginated search with total count."""
    result = await engine.search({
        "id": id,
        "requester_email": email,
        "status": status_filter,
        "blood_group": blood_group,
        "recipient_division": division,
        "recipient_district": district,
        "recipient_name": recipient_name,
        "search": search,
        "skip": skip,
        "limit": limit,
        "sort_by": sort_by,
        "order": order,
    })
    return DonationRequestPage(
        requests=[
            DonationRequestResponse.model_validate(r) for r in result.items
        ],
        total_requests=result.total,
    )


@router.patch(
    "/donation-request-all/{request_id}",
    response_model=DonationRequestResponse,
)
async def update_donation_request(
    request_id: UUID,
    body: DonationRequestPatch,
    manager: DonationLifecycleManager = Depends(get_lifecycle_manager),
):
    """Guarded partial update; terminal requests answer 403."""
    record = await manager.transition(
        request_id, body.model_dump(exclude_unset=True),
    )
    return DonationRequestResponse.model_validate(record)


@router.delete(
    "/donation-request-all/{request_id}",
    response_model=DonationRequestResponse,
)
async def delete_donation_request(
    request_id: UUID,
    manager: DonationLifecycleManager = Depends(get_lifecycle_manager),
):
    """Delete a request and return the removed snapshot."""
    return DonationRequestResponse.model_validate(await manager.delete(request_id))
