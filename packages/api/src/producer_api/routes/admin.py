# This project was developed with assistance from AI tools.
"""Admin review API: session, dashboard list, detail, approve, reject."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from producer_db import get_db
from producer_db.enums import ApplicationStatus
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.session import InvalidLoginError, RequiredAdmin, login, logout
from ..schemas.application import (
    AdminSessionResponse,
    ApplicationDetailResponse,
    ApplicationListResponse,
    ApplicationResponse,
    ApprovalResponse,
    ApproveRequest,
    CredentialsResponse,
    RejectRequest,
)
from ..schemas.auth import AdminSession, LoginRequest
from ..services import application as app_service
from ..services.application import InvalidTransitionError
from ..services.credentials import get_credential_store
from ..services.review import (
    ReviewError,
    approve_application,
    available_actions,
    load_dashboard,
    reject_application,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Application not found",
    )


@router.post("/login", response_model=AdminSessionResponse)
async def admin_login(payload: LoginRequest, request: Request) -> AdminSessionResponse:
    """Start an admin session (placeholder auth: any non-blank pair)."""
    try:
        admin = login(request, payload.email, payload.password)
    except InvalidLoginError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return AdminSessionResponse(session=admin)


@router.post("/logout", response_model=AdminSessionResponse)
async def admin_logout(request: Request) -> AdminSessionResponse:
    logout(request)
    return AdminSessionResponse(session=AdminSession())


@router.get("/applications", response_model=ApplicationListResponse)
async def list_applications(
    admin: RequiredAdmin,
    session: AsyncSession = Depends(get_db),
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
) -> ApplicationListResponse:
    """List applications newest first, with counts across all statuses."""
    summary = await load_dashboard(session, status=status_filter)
    return ApplicationListResponse(
        data=[ApplicationResponse.model_validate(app) for app in summary.applications],
        counts=summary.counts,
    )


@router.get("/applications/{application_id}", response_model=ApplicationDetailResponse)
async def get_application(
    application_id: str,
    admin: RequiredAdmin,
    session: AsyncSession = Depends(get_db),
) -> ApplicationDetailResponse:
    app = await app_service.get_application(session, application_id)
    if app is None:
        raise _not_found()
    detail = ApplicationDetailResponse.model_validate(app)
    detail.available_actions = sorted(a.value for a in available_actions(app))
    return detail


@router.post("/applications/{application_id}/approve", response_model=ApprovalResponse)
async def approve(
    application_id: str,
    payload: ApproveRequest,
    admin: RequiredAdmin,
    session: AsyncSession = Depends(get_db),
) -> ApprovalResponse:
    """Approve a pending application. Credentials are returned only in this response."""
    try:
        result = await approve_application(
            session,
            application_id,
            reviewed_by=admin.email,
            confirmed=payload.confirm,
            notes=payload.notes,
        )
    except ReviewError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if result is None:
        raise _not_found()
    return ApprovalResponse(
        application=ApplicationResponse.model_validate(result.application),
        credentials=CredentialsResponse(**result.credentials.model_dump()),
    )


@router.post("/applications/{application_id}/reject", response_model=ApplicationResponse)
async def reject(
    application_id: str,
    payload: RejectRequest,
    admin: RequiredAdmin,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """Reject a pending application with a non-empty reason."""
    try:
        app = await reject_application(
            session,
            application_id,
            reviewed_by=admin.email,
            reason=payload.reason,
            confirmed=payload.confirm,
        )
    except ReviewError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if app is None:
        raise _not_found()
    return ApplicationResponse.model_validate(app)


@router.post(
    "/applications/{application_id}/credentials/delivered",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def mark_credentials_delivered(application_id: str, admin: RequiredAdmin) -> Response:
    """Forget issued credentials once they have reached the producer."""
    if get_credential_store().pop(application_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No undelivered credentials for this application",
        )
    logger.info("Credentials for application %s marked delivered by %s", application_id, admin.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
