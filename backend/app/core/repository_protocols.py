"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Records cross the boundary as plain dicts with snake_case keys

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass in-memory fakes
      without inheriting anything
    - update_if_active is the only way to mutate a donation request: the
      status guard lives in the same statement as the write
    - insert_or_get on funds: uniqueness of transaction_id is enforced by
      storage, the repository resolves the collision by re-reading
"""

from typing import Protocol

from app.core.domain_types import (
    CheckoutSessionSnapshot,
    RequestId,
    UserId,
)
from app.core.search_criteria import SearchSpec


class DonationRequestRepository(Protocol):
    """Contract for donation request persistence — implemented by shell."""
    async def insert(self, values: dict) -> dict: ...
    async def get(self, request_id: RequestId) -> dict | None: ...
    async def update_if_active(
        self, request_id: RequestId, values: dict,
    ) -> dict | None: ...
    async def delete(self, request_id: RequestId) -> dict | None: ...
    async def count(self, spec: SearchSpec) -> int: ...
    async def find(self, spec: SearchSpec) -> list[dict]: ...


class FundRepository(Protocol):
    """Contract for fund record persistence — implemented by shell."""
    async def get_by_transaction_id(self, transaction_id: str) -> dict | None: ...
    async def insert_or_get(self, values: dict) -> tuple[dict, bool]: ...
    async def count(self) -> int: ...
    async def list_page(self, skip: int, limit: int) -> list[dict]: ...


class UserRepository(Protocol):
    """Contract for user account persistence — implemented by shell."""
    async def insert(self, values: dict) -> dict: ...
    async def get_by_email(self, email: str) -> dict | None: ...
    async def update(self, user_id: UserId, values: dict) -> dict | None: ...
    async def delete(self, user_id: UserId) -> dict | None: ...
    async def count(self, filters: dict) -> int: ...
    async def list_page(self, filters: dict, skip: int, limit: int) -> list[dict]: ...


class PaymentGateway(Protocol):
    """Contract for the external payment provider — implemented by shell."""
    async def create_checkout_session(
        self,
        *,
        amount_minor: int,
        email: str,
        metadata: dict[str, str],
    ) -> CheckoutSessionSnapshot: ...
    async def retrieve_checkout_session(
        self, session_id: str,
    ) -> CheckoutSessionSnapshot: ...
