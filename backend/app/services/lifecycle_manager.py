"""Lifecycle Manager — creation, guarded transitions and deletion of donation requests.

Invariants:
    - Validation happens before any write (no partial writes on failure)
    - transition checks, in order: record exists (NotFoundError), record is not
      done/cancel (TerminalStateError whatever the patch holds), patch is valid
      (ValidationError)
    - Every accepted transition is ONE conditional UPDATE keyed on id AND active status
    - updated_at is stamped on every accepted mutation

Design Decisions:
    - The pre-fetch only produces precise errors (404 vs 403); correctness comes
      from update_if_active, which re-checks status inside the statement
"""

import logging

from app.core.domain_types import RequestId
from app.core.enforce_lifecycle import (
    build_creation_record,
    build_update_set,
    check_not_terminal,
)
from app.core.errors import NotFoundError, TerminalStateError, ValidationError
from app.core.repository_protocols import DonationRequestRepository
from app.core.search_criteria import SearchSpec, clamp_pagination

logger = logging.getLogger(__name__)


class DonationLifecycleManager:
    """Owns every write to donation requests."""

    def __init__(
        self,
        repository: DonationRequestRepository,
        default_limit: int = 10,
        max_limit: int = 100,
    ):
        self.repository = repository
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def create(self, payload: dict) -> dict:
        """Validate and persist a new request (status defaults to pending)."""
        values = build_creation_record(payload)
        record = await self.repository.insert(values)
        logger.info(
            f"Donation request {record['id']} created",
            extra={"request_id": record["id"], "status": record["status"]},
        )
        return record

    async def get(self, request_id: RequestId) -> dict:
        record = await self.repository.get(request_id)
        if record is None:
            raise NotFoundError("DonationRequest", str(request_id))
        return record

    async def transition(self, request_id: RequestId, patch: dict) -> dict:
        """Apply an allow-listed patch unless the request is terminal."""
        current = await self.get(request_id)
        try:
            check_not_terminal(current["status"])
        except TerminalStateError:
            logger.warning(
                f"Rejected mutation of terminal request {request_id}",
                extra={"request_id": request_id, "status": current["status"]},
            )
            raise

        values = build_update_set(patch)
        updated = await self.repository.update_if_active(request_id, values)
        if updated is None:
            # Lost the race: status went terminal (or the row vanished) after the fetch.
            latest = await self.repository.get(request_id)
            if latest is None:
                raise NotFoundError("DonationRequest", str(request_id))
            logger.warning(
                f"Concurrent terminal transition on request {request_id}",
                extra={"request_id": request_id, "status": latest["status"]},
            )
            raise TerminalStateError(latest["status"])

        logger.info(
            f"Donation request {request_id} updated",
            extra={"request_id": request_id, "status": updated["status"]},
        )
        return updated

    async def delete(self, request_id: RequestId) -> dict:
        """Remove a request, returning the deleted snapshot."""
        snapshot = await self.repository.delete(request_id)
        if snapshot is None:
            raise NotFoundError("DonationRequest", str(request_id))
        logger.info(
            f"Donation request {request_id} deleted",
            extra={"request_id": request_id},
        )
        return snapshot

    async def list_by_requester(
        self, email: str | None, limit: int | None = None,
    ) -> list[dict]:
        """All requests of one requester, newest first."""
        if not email or not email.strip():
            raise ValidationError("Missing required field: email", "email")
        _, safe_limit = clamp_pagination(
            0, limit, self.default_limit, self.max_limit,
        )
        spec = SearchSpec(
            filters={"requester_email": email.strip()},
            sort_attribute="created_at",
            descending=True,
            skip=0,
            limit=safe_limit,
        )
        return await self.repository.find(spec)
