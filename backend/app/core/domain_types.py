"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RequestId and UserId wrap UUIDs at repository and service signatures
    - All valid states encoded as Enums — no raw string matching
    - TERMINAL_STATUSES and ACTIVE_STATUSES partition RequestStatus

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders and compare equal to
      the raw strings stored in the DB (but hash by name, so sets of members
      are tested by value)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

RequestId = NewType("RequestId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class RequestStatus(str, Enum):
    """Donation request lifecycle states — maps to DB `status` column."""
    PENDING = "pending"
    INPROGRESS = "inprogress"
    DONE = "done"
    CANCEL = "cancel"


class SortField(str, Enum):
    """Sortable donation request columns (API name → attribute name)."""
    CREATED_AT = "createdAt"
    DONATION_DATE = "donationDate"
    STATUS = "status"
    BLOOD_GROUP = "bloodGroup"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class UserRole(str, Enum):
    DONOR = "donor"
    ADMIN = "admin"
    VOLUNTEER = "volunteer"


class UserStatus(str, Enum):
    ACTIVE = "active"
    BLOCKED = "blocked"


class FundStatus(str, Enum):
    PAID = "paid"


TERMINAL_STATUSES = frozenset({RequestStatus.DONE, RequestStatus.CANCEL})
ACTIVE_STATUSES = frozenset({RequestStatus.PENDING, RequestStatus.INPROGRESS})


# ─── Donation Request Fields ─────────────────────────────────────

# Order matters: the first missing one is reported.
REQUIRED_REQUEST_FIELDS: tuple[str, ...] = (
    "requester_name",
    "requester_email",
    "recipient_name",
    "recipient_division",
    "recipient_district",
    "recipient_upazila",
    "recipient_union",
    "hospital_name",
    "full_address",
    "blood_group",
    "donation_date",
    "donation_time",
    "request_message",
)

# Fields a transition patch may touch. Requester identity is fixed at creation.
PATCHABLE_REQUEST_FIELDS: frozenset[str] = frozenset({
    "status",
    "donor_name",
    "donor_email",
    "recipient_name",
    "recipient_division",
    "recipient_district",
    "recipient_upazila",
    "recipient_union",
    "hospital_name",
    "full_address",
    "blood_group",
    "donation_date",
    "donation_time",
    "request_message",
})

# Free-text search matches any of these, case-insensitively.
SEARCHABLE_REQUEST_FIELDS: tuple[str, ...] = (
    "recipient_district",
    "recipient_upazila",
    "blood_group",
)

SORT_ATTRIBUTES: dict[SortField, str] = {
    SortField.CREATED_AT: "created_at",
    SortField.DONATION_DATE: "donation_date",
    SortField.STATUS: "status",
    SortField.BLOOD_GROUP: "blood_group",
}

# Fields a user-account update may touch.
PATCHABLE_USER_FIELDS: frozenset[str] = frozenset({
    "name",
    "avatar_url",
    "blood_group",
    "division",
    "district",
    "upazila",
    "role",
    "status",
})


# ─── Pagination ──────────────────────────────────────────────────

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest OFFSET sent to storage (fits a 32-bit integer on every driver).
MAX_SKIP = 2**31 - 1


# ─── Payment Provider Value Objects ──────────────────────────────

PLACEHOLDER_DONOR_NAME = "Anonymous"
PLACEHOLDER_HOLDER_NAME = "Unknown"


@dataclass(frozen=True)
class CheckoutSessionSnapshot:
    """Provider-neutral view of a retrieved checkout session.

    amount_total is in minor currency units (cents), exactly as the
    provider reports it.
    """
    id: str
    payment_status: str | None
    url: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    customer_email: str | None = None
    customer_name: str | None = None
    amount_total: int | None = None
    currency: str | None = None
    payment_intent_id: str | None = None
    payment_method_types: tuple[str, ...] = ()
