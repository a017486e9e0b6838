# This project was developed with assistance from AI tools.
"""Public application routes: submission and status lookup."""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from producer_db import get_db
from producer_db.enums import DocumentKind
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.application import ApplicationResponse, ApplicationStatusResponse
from ..services import application as app_service
from ..services.application import ApplicationValidationError
from ..services.intake import (
    DocumentUploadError,
    PersonalDetails,
    SubmissionError,
    submit_application,
    validate_document,
)
from ..services.storage import StorageService, get_storage_service
from ._forms import read_document

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_application(
    full_name: str = Form(""),
    email: str = Form(""),
    cooperative_name: str = Form(""),
    aadhaar_file: UploadFile | None = File(None),
    land_record_file: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> ApplicationResponse:
    """Submit a complete application: details plus both PDF documents."""
    details = PersonalDetails(
        full_name=full_name,
        email=email,
        cooperative_name=cooperative_name,
    )
    problem = details.validation_error()
    if problem:
        raise HTTPException(status_code=422, detail=problem)

    documents = {}
    for kind, upload in (
        (DocumentKind.AADHAAR, aadhaar_file),
        (DocumentKind.LAND_RECORD, land_record_file),
    ):
        document = await read_document(upload)
        if document is None:
            raise HTTPException(status_code=422, detail=f"{kind.label} is required")
        try:
            documents[kind] = validate_document(document)
        except DocumentUploadError as exc:
            raise HTTPException(status_code=422, detail=f"{kind.label}: {exc}") from exc

    try:
        application = await submit_application(
            session,
            storage,
            details,
            documents[DocumentKind.AADHAAR],
            documents[DocumentKind.LAND_RECORD],
        )
    except ApplicationValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except SubmissionError as exc:
        logger.exception("Submission failed at step=%s", exc.step)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to submit application. Please try again.",
        ) from exc

    return ApplicationResponse.model_validate(application)


@router.get(
    "/{application_id}/status",
    response_model=ApplicationStatusResponse,
)
async def get_status(
    application_id: str,
    session: AsyncSession = Depends(get_db),
) -> ApplicationStatusResponse:
    """Look up where an application stands without exposing its contents."""
    app = await app_service.get_application(session, application_id)
    if app is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return ApplicationStatusResponse.model_validate(app)
