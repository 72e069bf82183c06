"""Lifecycle Enforcement — pure guards for donation request creation and transitions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Creation requires all 13 descriptive fields, non-empty after strip
    - ValidationError names fields by their camelCase wire name
    - Status is always one of RequestStatus; done/cancel accept no mutation
    - Patches are allow-listed (PATCHABLE_REQUEST_FIELDS); None values are dropped

Design Decisions:
    - Guards raise domain errors instead of returning error dicts: every caller
      is a service method that would re-raise anyway
    - check_not_terminal is advisory only — the repository's conditional
      UPDATE is the real serialization point
"""

from datetime import datetime, timezone

from pydantic.alias_generators import to_camel

from app.core.domain_types import (
    PATCHABLE_REQUEST_FIELDS,
    REQUIRED_REQUEST_FIELDS,
    TERMINAL_STATUSES,
    RequestStatus,
)
from app.core.errors import TerminalStateError, ValidationError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_status(value: object, field: str = "status") -> RequestStatus:
    """Coerce a raw status into RequestStatus or raise ValidationError."""
    if isinstance(value, RequestStatus):
        return value
    try:
        return RequestStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in RequestStatus)
        raise ValidationError(
            f"Invalid status '{value}'. Allowed: {allowed}", field,
        )


def is_terminal(status: str | RequestStatus) -> bool:
    # Enum members hash by name, so compare values rather than test membership.
    value = status.value if isinstance(status, RequestStatus) else status
    return value in {s.value for s in TERMINAL_STATUSES}


def find_missing_field(payload: dict) -> str | None:
    """Return the first required field that is absent or blank."""
    for name in REQUIRED_REQUEST_FIELDS:
        value = payload.get(name)
        if value is None:
            return name
        if isinstance(value, str) and not value.strip():
            return name
    return None


def build_creation_record(payload: dict, now: datetime | None = None) -> dict:
    """Validate a creation payload and return the column values to insert.

    Status defaults to pending; a caller-supplied status must be valid.
    """
    missing = find_missing_field(payload)
    if missing:
        raise ValidationError(
            f"Missing required field: {to_camel(missing)}", to_camel(missing),
        )

    record = {name: payload[name] for name in REQUIRED_REQUEST_FIELDS}
    for name in ("donor_name", "donor_email"):
        if payload.get(name) is not None:
            record[name] = payload[name]

    raw_status = payload.get("status")
    record["status"] = (
        RequestStatus.PENDING.value if raw_status is None
        else parse_status(raw_status).value
    )
    stamp = now or utc_now()
    record["created_at"] = stamp
    record["updated_at"] = stamp
    return record


def build_update_set(patch: dict, now: datetime | None = None) -> dict:
    """Turn a caller patch into the column values of one atomic UPDATE.

    Unknown keys raise ValidationError; keys set to None are dropped.
    """
    unknown = sorted(set(patch) - PATCHABLE_REQUEST_FIELDS)
    if unknown:
        field = to_camel(unknown[0])
        raise ValidationError(f"Field '{field}' cannot be updated", field)

    values = {k: v for k, v in patch.items() if v is not None}
    if "status" in values:
        values["status"] = parse_status(values["status"]).value
    for name, value in values.items():
        if name != "status" and isinstance(value, str) and not value.strip():
            raise ValidationError(
                f"Field '{to_camel(name)}' cannot be blank", to_camel(name),
            )

    values["updated_at"] = now or utc_now()
    return values


def check_not_terminal(status: str) -> None:
    """Raise TerminalStateError when the stored status is done/cancel."""
    if is_terminal(status):
        raise TerminalStateError(status)
