"""Search Criteria — sanitizes untrusted list/search input into a bounded SearchSpec.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - limit is always in [1, max_limit]; skip is always in [0, MAX_SKIP]
    - Negative or missing skip/limit fall back to defaults
    - Unknown sortBy silently falls back to createdAt; unknown order to desc
    - Blank equality filters and blank search tokens are ignored
    - An id filter that is not a UUID raises ValidationError

Design Decisions:
    - SearchSpec is a frozen dataclass: the repository receives a value it can
      translate mechanically, never raw caller input
    - Equality filters keyed by column attribute names (snake_case), so the
      repository needs no mapping of its own
"""

from dataclasses import dataclass, field
from uuid import UUID

from app.core.domain_types import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MAX_SKIP,
    SORT_ATTRIBUTES,
    SortField,
    SortOrder,
)
from app.core.errors import ValidationError

# Caller-facing filter name → column attribute.
FILTERABLE_FIELDS: dict[str, str] = {
    "id": "id",
    "requester_email": "requester_email",
    "status": "status",
    "blood_group": "blood_group",
    "recipient_division": "recipient_division",
    "recipient_district": "recipient_district",
    "recipient_name": "recipient_name",
}


@dataclass(frozen=True)
class SearchSpec:
    """Sanitized filter/sort/pagination for a donation request listing."""
    filters: dict[str, object] = field(default_factory=dict)
    search: str | None = None
    sort_attribute: str = "created_at"
    descending: bool = True
    skip: int = 0
    limit: int = DEFAULT_PAGE_SIZE


def parse_identifier(value: object) -> UUID:
    """Identifiers are UUIDs; anything else is a caller error."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid id '{value}'", "id")


def clamp_pagination(
    skip: int | None,
    limit: int | None,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> tuple[int, int]:
    """Floor skip at zero and cap it at MAX_SKIP; default and clamp limit."""
    safe_skip = min(skip, MAX_SKIP) if skip is not None and skip >= 0 else 0
    if limit is None or limit <= 0:
        safe_limit = default_limit
    else:
        safe_limit = limit
    return safe_skip, max(1, min(safe_limit, max_limit))


def resolve_sort(sort_by: str | None, order: str | None) -> tuple[str, bool]:
    """Map sortBy/order onto (attribute, descending) with silent fallback."""
    try:
        attribute = SORT_ATTRIBUTES[SortField(sort_by)]
    except ValueError:
        attribute = SORT_ATTRIBUTES[SortField.CREATED_AT]
    try:
        descending = SortOrder((order or "").lower()) is SortOrder.DESC
    except ValueError:
        descending = True
    return attribute, descending


def build_search_spec(
    criteria: dict,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> SearchSpec:
    """Build a SearchSpec from raw criteria (keys as in FILTERABLE_FIELDS plus
    search, sort_by, order, skip, limit)."""
    filters: dict[str, object] = {}
    for name, attribute in FILTERABLE_FIELDS.items():
        value = criteria.get(name)
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        if name == "id":
            value = parse_identifier(value)
        filters[attribute] = value

    search = criteria.get("search")
    if isinstance(search, str):
        search = search.strip() or None

    sort_attribute, descending = resolve_sort(
        criteria.get("sort_by"), criteria.get("order"),
    )
    skip, limit = clamp_pagination(
        criteria.get("skip"), criteria.get("limit"), default_limit, max_limit,
    )
    return SearchSpec(
        filters=filters,
        search=search,
        sort_attribute=sort_attribute,
        descending=descending,
        skip=skip,
        limit=limit,
    )
