# This project was developed with assistance from AI tools.
"""Application request/response schemas."""

from datetime import datetime

from producer_db.enums import ApplicationStatus
from pydantic import BaseModel, ConfigDict, Field

from . import StatusCounts
from .auth import AdminSession


class ApplicationResponse(BaseModel):
    """Single application response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    cooperative_name: str
    status: ApplicationStatus
    submission_date: datetime
    review_date: datetime | None = None
    reviewed_by: str | None = None
    notes: str | None = None
    aadhaar_file_url: str | None = None
    aadhaar_file_name: str | None = None
    land_record_file_url: str | None = None
    land_record_file_name: str | None = None


class ApplicationDetailResponse(ApplicationResponse):
    """Admin detail view: the record plus the review actions still open."""

    available_actions: list[str] = []


class ApplicationStatusResponse(BaseModel):
    """Public status lookup -- no contact details or document links."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    status: ApplicationStatus
    submission_date: datetime
    review_date: datetime | None = None
    is_submission_complete: bool


class ApplicationListResponse(BaseModel):
    """Dashboard list plus per-status counts."""

    data: list[ApplicationResponse]
    counts: StatusCounts


class ApproveRequest(BaseModel):
    confirm: bool = False
    notes: str | None = None


class RejectRequest(BaseModel):
    confirm: bool = False
    reason: str = Field(default="", description="Shown to the producer as the rejection reason.")


class CredentialsResponse(BaseModel):
    username: str
    password: str


class ApprovalResponse(BaseModel):
    """Approval result; credentials are only ever returned here."""

    application: ApplicationResponse
    credentials: CredentialsResponse


class AdminSessionResponse(BaseModel):
    session: AdminSession
