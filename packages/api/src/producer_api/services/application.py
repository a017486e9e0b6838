# This project was developed with assistance from AI tools.
"""Application CRUD service.

Create, fetch, list and partial-update operations over ``Application``
records. Status changes go through ``transition_status()`` which enforces
the allowed-transition table on ``ApplicationStatus``.
"""

import logging
import uuid
from datetime import UTC, datetime

from producer_db import Application
from producer_db.enums import ApplicationStatus
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.document import FileUpload

logger = logging.getLogger(__name__)


class ApplicationValidationError(ValueError):
    """Raised when required applicant fields are missing."""


class InvalidTransitionError(ValueError):
    """Raised when an application status transition is not allowed."""


_REQUIRED_FIELDS = ("full_name", "email", "cooperative_name")

# String(255) columns: names, email and stored file names
MAX_FIELD_LENGTH = 255


async def create_application(
    session: AsyncSession,
    *,
    full_name: str,
    email: str,
    cooperative_name: str,
) -> Application:
    """Create a new PENDING application stamped with the current time."""
    values = {
        "full_name": (full_name or "").strip(),
        "email": (email or "").strip(),
        "cooperative_name": (cooperative_name or "").strip(),
    }
    missing = [name for name in _REQUIRED_FIELDS if not values[name]]
    if missing:
        raise ApplicationValidationError(f"Missing required fields: {', '.join(missing)}")
    too_long = [name for name in _REQUIRED_FIELDS if len(values[name]) > MAX_FIELD_LENGTH]
    if too_long:
        raise ApplicationValidationError(
            f"Fields longer than {MAX_FIELD_LENGTH} characters: {', '.join(too_long)}"
        )

    application = Application(
        id=str(uuid.uuid4()),
        **values,
        status=ApplicationStatus.PENDING,
        submission_date=datetime.now(UTC),
    )
    session.add(application)
    await session.commit()
    await session.refresh(application)
    logger.info("Created application %s", application.id)
    return application


async def get_application(
    session: AsyncSession,
    application_id: str,
) -> Application | None:
    """Return a single application, or None when the id has no record."""
    stmt = select(Application).where(Application.id == application_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def list_applications(
    session: AsyncSession,
    *,
    status: ApplicationStatus | None = None,
) -> list[Application]:
    """Return applications, newest submission first.

    Args:
        status: Only return applications with this status.
    """
    stmt = select(Application).order_by(Application.submission_date.desc())
    if status is not None:
        stmt = stmt.where(Application.status == status)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_by_status(session: AsyncSession) -> dict[ApplicationStatus, int]:
    """Return the number of applications per status (zero-filled)."""
    stmt = select(Application.status, func.count(Application.id)).group_by(Application.status)
    result = await session.execute(stmt)
    counts = {s: 0 for s in ApplicationStatus}
    for status, count in result.all():
        counts[ApplicationStatus(status)] = count
    return counts


async def transition_status(
    session: AsyncSession,
    application_id: str,
    new_status: ApplicationStatus,
    *,
    reviewed_by: str | None = None,
    notes: str | None = None,
) -> Application | None:
    """Transition an application to a new status with validation.

    Returns None if the application is not found.
    Raises InvalidTransitionError if the transition is not allowed.
    """
    app = await get_application(session, application_id)
    if app is None:
        return None

    current = ApplicationStatus(app.status or ApplicationStatus.PENDING)
    allowed = ApplicationStatus.valid_transitions().get(current, frozenset())

    if new_status not in allowed:
        logger.warning(
            "Rejected transition for application %s: %s -> %s",
            application_id,
            current.value,
            new_status.value,
        )
        raise InvalidTransitionError(
            f"Cannot transition from '{current.value}' to '{new_status.value}'. "
            f"Allowed: {sorted(s.value for s in allowed) if allowed else 'none (terminal status)'}."
        )

    app.status = new_status
    app.review_date = datetime.now(UTC)
    app.reviewed_by = reviewed_by
    app.notes = notes
    await session.commit()
    await session.refresh(app)
    logger.info("Application %s transitioned %s -> %s", application_id, current.value, new_status.value)
    return app


async def attach_documents(
    session: AsyncSession,
    application_id: str,
    *,
    aadhaar: FileUpload,
    land_record: FileUpload,
) -> Application | None:
    """Link both uploaded documents onto the application record."""
    app = await get_application(session, application_id)
    if app is None:
        return None

    app.aadhaar_file_url = aadhaar.url
    app.aadhaar_file_name = aadhaar.file_name
    app.land_record_file_url = land_record.url
    app.land_record_file_name = land_record.file_name
    await session.commit()
    await session.refresh(app)
    logger.info("Linked documents to application %s", application_id)
    return app
