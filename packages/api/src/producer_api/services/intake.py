# This project was developed with assistance from AI tools.
"""Producer application intake: the two-step form and its submission.

Pure state (``ApplicationDraft``) is kept separate from the submission
sequence so the page routes, the JSON API and tests all drive the same
rules. Submission is three best-effort calls -- create, upload both
documents concurrently, link -- with no compensating rollback.
"""

import asyncio
import enum
import logging
from dataclasses import dataclass, field

from producer_db import Application
from producer_db.enums import DocumentKind
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..services import application as app_service
from ..services.application import MAX_FIELD_LENGTH, ApplicationValidationError
from ..services.storage import StorageService

logger = logging.getLogger(__name__)


class DocumentUploadError(ValueError):
    """Raised when a document fails type or size validation."""


class SubmissionError(RuntimeError):
    """Raised when a collaborator call fails part-way through submission.

    ``step`` is one of ``create``, ``upload`` or ``link``. ``application_id``
    is set once the record exists, since a failed upload or link leaves it
    behind unlinked.
    """

    def __init__(self, step: str, application_id: str | None = None):
        self.step = step
        self.application_id = application_id
        super().__init__(f"Application submission failed during {step}")


class FormStep(enum.IntEnum):
    PERSONAL_DETAILS = 1
    DOCUMENT_UPLOAD = 2


@dataclass
class PersonalDetails:
    """Step 1 fields."""

    full_name: str = ""
    email: str = ""
    cooperative_name: str = ""

    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("full_name", "email", "cooperative_name")
            if not getattr(self, name).strip()
        ]

    def oversized_fields(self) -> list[str]:
        return [
            name
            for name in ("full_name", "email", "cooperative_name")
            if len(getattr(self, name).strip()) > MAX_FIELD_LENGTH
        ]

    def validation_error(self) -> str | None:
        """First problem with the details, or None when they can be submitted."""
        missing = self.missing_fields()
        if missing:
            return f"Missing required fields: {', '.join(missing)}"
        oversized = self.oversized_fields()
        if oversized:
            return f"Fields longer than {MAX_FIELD_LENGTH} characters: {', '.join(oversized)}"
        return None

    def is_complete(self) -> bool:
        return self.validation_error() is None


@dataclass
class DocumentFile:
    """An uploaded file held in memory until submission."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def validate_document(file: DocumentFile) -> DocumentFile:
    """Accept only non-empty PDFs up to the configured size limit."""
    if file.content_type not in settings.UPLOAD_ALLOWED_CONTENT_TYPES:
        raise DocumentUploadError(
            f"Unsupported file type: {file.content_type or 'unknown'}. Please upload only PDF files."
        )
    if len(file.filename) > MAX_FIELD_LENGTH:
        raise DocumentUploadError(f"File name is longer than {MAX_FIELD_LENGTH} characters.")
    if file.size == 0:
        raise DocumentUploadError(f"{file.filename or 'File'} is empty.")
    if file.size > settings.upload_max_bytes:
        raise DocumentUploadError(
            f"File size {file.size} exceeds maximum of {settings.UPLOAD_MAX_SIZE_MB}MB"
        )
    return file


@dataclass
class ApplicationDraft:
    """State of the two-step application form."""

    step: FormStep = FormStep.PERSONAL_DETAILS
    details: PersonalDetails = field(default_factory=PersonalDetails)
    aadhaar_file: DocumentFile | None = None
    land_record_file: DocumentFile | None = None
    busy: bool = False

    def has_both_documents(self) -> bool:
        return self.aadhaar_file is not None and self.land_record_file is not None

    def can_advance(self) -> bool:
        """Whether the Next / Submit control is enabled."""
        if self.busy:
            return False
        if self.step == FormStep.PERSONAL_DETAILS:
            return self.details.is_complete()
        return self.has_both_documents()

    def next_step(self) -> FormStep:
        if self.step != FormStep.PERSONAL_DETAILS or not self.can_advance():
            raise ApplicationValidationError(self.details.validation_error() or "Cannot advance yet")
        self.step = FormStep.DOCUMENT_UPLOAD
        return self.step

    def previous_step(self) -> FormStep:
        if self.step == FormStep.DOCUMENT_UPLOAD:
            self.step = FormStep.PERSONAL_DETAILS
        return self.step

    def attach(self, kind: DocumentKind, file: DocumentFile) -> None:
        """Fill a document slot; an invalid file leaves the slot untouched."""
        validate_document(file)
        if kind == DocumentKind.AADHAAR:
            self.aadhaar_file = file
        else:
            self.land_record_file = file

    def is_ready_to_submit(self) -> bool:
        return self.step == FormStep.DOCUMENT_UPLOAD and self.can_advance()


async def submit_application(
    session: AsyncSession,
    storage: StorageService,
    details: PersonalDetails,
    aadhaar: DocumentFile,
    land_record: DocumentFile,
) -> Application:
    """Create the record, upload both documents concurrently, then link them.

    Raises ApplicationValidationError / DocumentUploadError before any
    collaborator call when inputs are invalid, and SubmissionError when a
    collaborator call fails.
    """
    problem = details.validation_error()
    if problem:
        raise ApplicationValidationError(problem)
    validate_document(aadhaar)
    validate_document(land_record)

    try:
        application = await app_service.create_application(
            session,
            full_name=details.full_name,
            email=details.email,
            cooperative_name=details.cooperative_name,
        )
    except ApplicationValidationError:
        raise
    except Exception as exc:
        raise SubmissionError("create") from exc

    application_id = application.id
    prefix = storage.build_document_prefix(application_id)
    try:
        aadhaar_upload, land_record_upload = await asyncio.gather(
            storage.upload_file(
                aadhaar.data,
                prefix=prefix,
                filename=aadhaar.filename,
                content_type=aadhaar.content_type,
            ),
            storage.upload_file(
                land_record.data,
                prefix=prefix,
                filename=land_record.filename,
                content_type=land_record.content_type,
            ),
        )
    except Exception as exc:
        logger.warning("Document upload failed; application %s left unlinked", application_id)
        raise SubmissionError("upload", application_id) from exc

    try:
        linked = await app_service.attach_documents(
            session,
            application_id,
            aadhaar=aadhaar_upload,
            land_record=land_record_upload,
        )
    except Exception as exc:
        logger.warning("Document link failed; application %s left unlinked", application_id)
        raise SubmissionError("link", application_id) from exc
    if linked is None:
        raise SubmissionError("link", application_id)

    logger.info("Application %s submitted", application_id)
    return linked
