"""Donation Request Schemas — create/patch payloads and listing envelopes.

Invariants:
    - DonationRequestCreate fields are all optional at the schema level: the
      lifecycle manager reports the FIRST missing required field by name
    - DonationRequestPatch forbids unknown keys (allow-listed patch)
    - Listing envelope is {requests, totalRequests}
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel, StrictCamelModel


class DonationRequestCreate(CamelModel):
    """Creation payload — required-field checks happen in the core."""
    requester_name: str | None = None
    requester_email: str | None = None
    recipient_name: str | None = None
    recipient_division: str | None = None
    recipient_district: str | None = None
    recipient_upazila: str | None = None
    recipient_union: str | None = None
    hospital_name: str | None = None
    full_address: str | None = None
    blood_group: str | None = None
    donation_date: str | None = None
    donation_time: str | None = None
    request_message: str | None = None
    status: str | None = None
    donor_name: str | None = None
    donor_email: str | None = None


class DonationRequestPatch(StrictCamelModel):
    """Partial update — only these keys are accepted."""
    status: str | None = None
    donor_name: str | None = Field(None, max_length=200)
    donor_email: str | None = Field(None, max_length=320)
    recipient_name: str | None = None
    recipient_division: str | None = None
    recipient_district: str | None = None
    recipient_upazila: str | None = None
    recipient_union: str | None = None
    hospital_name: str | None = None
    full_address: str | None = None
    blood_group: str | None = None
    donation_date: str | None = None
    donation_time: str | None = None
    request_message: str | None = None


class DonationRequestResponse(CamelModel):
    id: UUID
    requester_name: str
    requester_email: str
    recipient_name: str
    recipient_division: str
    recipient_district: str
    recipient_upazila: str
    recipient_union: str
    hospital_name: str
    full_address: str
    blood_group: str
    donation_date: str
    donation_time: str
    request_message: str
    status: str
    donor_name: str | None = None
    donor_email: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class DonationRequestPage(CamelModel):
    requests: list[DonationRequestResponse]
    total_requests: int
