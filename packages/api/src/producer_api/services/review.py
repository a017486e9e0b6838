# This project was developed with assistance from AI tools.
"""Admin review of producer applications.

Approve and reject are the only two moves out of PENDING; both require an
explicit confirmation, and reject additionally requires a reason. Approval
issues a credential pair that is returned to the caller once.
"""

import enum
import logging
from dataclasses import dataclass

from producer_db import Application
from producer_db.enums import ApplicationStatus, DocumentKind
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas import StatusCounts
from ..services import application as app_service
from ..services.credentials import Credentials, generate_credentials, get_credential_store

logger = logging.getLogger(__name__)

DEFAULT_APPROVAL_NOTE = "Approved via admin review"


class ReviewError(ValueError):
    """Raised when a review action is missing its confirmation or reason."""


class ReviewAction(str, enum.Enum):
    APPROVE = "approve"
    REJECT = "reject"


@dataclass
class DashboardSummary:
    applications: list[Application]
    counts: StatusCounts


@dataclass
class ApprovalResult:
    application: Application
    credentials: Credentials


async def load_dashboard(
    session: AsyncSession,
    status: ApplicationStatus | None = None,
) -> DashboardSummary:
    """Applications (newest first, optionally filtered) plus counts over all of them."""
    applications = await app_service.list_applications(session, status=status)
    counts = await app_service.count_by_status(session)
    return DashboardSummary(applications=applications, counts=StatusCounts.from_counts(counts))


def available_actions(application: Application) -> frozenset[ReviewAction]:
    """Review controls to offer: both while pending, none once decided."""
    if ApplicationStatus(application.status) == ApplicationStatus.PENDING:
        return frozenset({ReviewAction.APPROVE, ReviewAction.REJECT})
    return frozenset()


async def approve_application(
    session: AsyncSession,
    application_id: str,
    *,
    reviewed_by: str | None,
    confirmed: bool,
    notes: str | None = None,
) -> ApprovalResult | None:
    """Approve a pending application and issue credentials.

    Returns None if the application is not found. Raises ReviewError without
    confirmation and InvalidTransitionError if already decided.
    """
    if not confirmed:
        raise ReviewError("Approval must be confirmed")

    application = await app_service.transition_status(
        session,
        application_id,
        ApplicationStatus.APPROVED,
        reviewed_by=reviewed_by,
        notes=(notes or "").strip() or DEFAULT_APPROVAL_NOTE,
    )
    if application is None:
        return None

    credentials = generate_credentials()
    get_credential_store().record(application.id, credentials)
    return ApprovalResult(application=application, credentials=credentials)


async def reject_application(
    session: AsyncSession,
    application_id: str,
    *,
    reviewed_by: str | None,
    reason: str,
    confirmed: bool,
) -> Application | None:
    """Reject a pending application, storing the reason in ``notes``."""
    reason = (reason or "").strip()
    if not reason:
        raise ReviewError("A rejection reason is required")
    if not confirmed:
        raise ReviewError("Rejection must be confirmed")

    return await app_service.transition_status(
        session,
        application_id,
        ApplicationStatus.REJECTED,
        reviewed_by=reviewed_by,
        notes=reason,
    )


def document_link(application: Application, kind: DocumentKind) -> str | None:
    """Stored URL for a document, or None when it was never linked."""
    if kind == DocumentKind.AADHAAR:
        return application.aadhaar_file_url or None
    return application.land_record_file_url or None


def document_name(application: Application, kind: DocumentKind) -> str | None:
    """Original file name of a linked document."""
    if kind == DocumentKind.AADHAAR:
        return application.aadhaar_file_name or None
    return application.land_record_file_name or None
