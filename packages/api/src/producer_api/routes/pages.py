# This project was developed with assistance from AI tools.
"""Server-rendered views: landing, the two-step application form, and the
admin login / dashboard / applicant detail pages.

Every failure lands back on an interactive page with a notice; admin views
redirect to the login page when the session is not authenticated.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from producer_db import get_db
from producer_db.enums import ApplicationStatus, DocumentKind
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.session import (
    AdminSessionDep,
    InvalidLoginError,
    flash,
    login,
    logout,
    pop_flashes,
)
from ..schemas.auth import AdminSession, Notice
from ..services import application as app_service
from ..services.application import ApplicationValidationError, InvalidTransitionError
from ..services.intake import (
    ApplicationDraft,
    DocumentUploadError,
    FormStep,
    PersonalDetails,
    SubmissionError,
    submit_application,
)
from ..services.review import (
    ReviewError,
    approve_application,
    available_actions,
    document_link,
    document_name,
    load_dashboard,
    reject_application,
)
from ..services.storage import StorageService, get_storage_service
from ._forms import read_document

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["display_date"] = lambda value: (
    value.strftime("%B %d, %Y %I:%M %p") if value else ""
)

router = APIRouter()


def render(
    request: Request,
    name: str,
    *,
    notices: list[Notice] | None = None,
    status_code: int = 200,
    **context,
) -> HTMLResponse:
    """Render a template with pending flash notices plus any inline ones."""
    context["notices"] = pop_flashes(request) + (notices or [])
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def _login_redirect(request: Request) -> RedirectResponse:
    logger.warning("Unauthenticated admin request to %s", request.url.path)
    return _redirect("/admin/login")


# ---------------------------------------------------------------------------
# Public views
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
async def landing(request: Request) -> HTMLResponse:
    return render(request, "landing.html")


def _render_form(
    request: Request,
    draft: ApplicationDraft,
    *,
    notices: list[Notice] | None = None,
    slot_errors: dict[str, str] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return render(
        request,
        "apply.html",
        draft=draft,
        step=int(draft.step),
        total_steps=len(FormStep),
        slot_errors=slot_errors or {},
        document_kinds=list(DocumentKind),
        notices=notices,
        status_code=status_code,
    )


def _details_notice(details: PersonalDetails) -> Notice:
    if details.missing_fields():
        return Notice(message="Please fill in all required fields.", category="error")
    return Notice(message=details.validation_error(), category="error")


@router.get("/apply", response_class=HTMLResponse)
async def apply_form(request: Request) -> HTMLResponse:
    return _render_form(request, ApplicationDraft())


@router.post("/apply/details", response_class=HTMLResponse)
async def apply_details(
    request: Request,
    full_name: str = Form(""),
    email: str = Form(""),
    cooperative_name: str = Form(""),
) -> HTMLResponse:
    """Step 1 -> step 2 when all three fields are filled."""
    draft = ApplicationDraft(
        details=PersonalDetails(full_name=full_name, email=email, cooperative_name=cooperative_name)
    )
    try:
        draft.next_step()
    except ApplicationValidationError:
        return _render_form(
            request,
            draft,
            notices=[_details_notice(draft.details)],
            status_code=422,
        )
    return _render_form(request, draft)


@router.post("/apply/previous", response_class=HTMLResponse)
async def apply_previous(
    request: Request,
    full_name: str = Form(""),
    email: str = Form(""),
    cooperative_name: str = Form(""),
) -> HTMLResponse:
    draft = ApplicationDraft(
        step=FormStep.DOCUMENT_UPLOAD,
        details=PersonalDetails(full_name=full_name, email=email, cooperative_name=cooperative_name),
    )
    draft.previous_step()
    return _render_form(request, draft)


@router.post("/apply/submit", response_model=None)
async def apply_submit(
    request: Request,
    full_name: str = Form(""),
    email: str = Form(""),
    cooperative_name: str = Form(""),
    aadhaar_file: UploadFile | None = File(None),
    land_record_file: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> Response:
    """Validate both document slots, then create, upload and link."""
    draft = ApplicationDraft(
        step=FormStep.DOCUMENT_UPLOAD,
        details=PersonalDetails(full_name=full_name, email=email, cooperative_name=cooperative_name),
    )
    if not draft.details.is_complete():
        draft.previous_step()
        return _render_form(
            request,
            draft,
            notices=[_details_notice(draft.details)],
            status_code=422,
        )

    slot_errors: dict[str, str] = {}
    for kind, upload in (
        (DocumentKind.AADHAAR, aadhaar_file),
        (DocumentKind.LAND_RECORD, land_record_file),
    ):
        document = await read_document(upload)
        if document is None:
            slot_errors[kind.value] = f"{kind.label} is required."
            continue
        try:
            draft.attach(kind, document)
        except DocumentUploadError as exc:
            logger.warning("Rejected %s upload: %s", kind.value, exc)
            slot_errors[kind.value] = str(exc)

    if slot_errors or not draft.is_ready_to_submit():
        return _render_form(
            request,
            draft,
            notices=[Notice(message="Invalid file. Please upload PDF documents up to 5MB.", category="error")],
            slot_errors=slot_errors,
            status_code=422,
        )

    try:
        await submit_application(
            session, storage, draft.details, draft.aadhaar_file, draft.land_record_file
        )
    except SubmissionError as exc:
        logger.exception("Submission failed at step=%s", exc.step)
        return _render_form(
            request,
            draft,
            notices=[
                Notice(message="Failed to submit application. Please try again.", category="error")
            ],
            status_code=502,
        )

    flash(request, "Application submitted successfully.", "success")
    return _redirect("/application-success")


@router.get("/application-success", response_class=HTMLResponse)
async def application_success(request: Request) -> HTMLResponse:
    return render(request, "success.html")


# ---------------------------------------------------------------------------
# Admin views
# ---------------------------------------------------------------------------


@router.get("/admin/login", response_class=HTMLResponse)
async def admin_login_form(request: Request, admin: AdminSessionDep) -> Response:
    if admin.authenticated:
        return _redirect("/admin/dashboard")
    return render(request, "admin/login.html")


@router.post("/admin/login", response_model=None)
async def admin_login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
) -> Response:
    try:
        login(request, email, password)
    except InvalidLoginError as exc:
        return render(
            request,
            "admin/login.html",
            email=email,
            notices=[Notice(message=str(exc), category="error")],
            status_code=422,
        )
    flash(request, "Login successful.", "success")
    return _redirect("/admin/dashboard")


@router.post("/admin/logout")
async def admin_logout(request: Request) -> RedirectResponse:
    logout(request)
    flash(request, "You have been logged out.")
    return _redirect("/")


@router.get("/admin/dashboard", response_model=None)
async def admin_dashboard(
    request: Request,
    admin: AdminSessionDep,
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    session: AsyncSession = Depends(get_db),
) -> Response:
    if not admin.authenticated:
        return _login_redirect(request)
    summary = await load_dashboard(session, status=status_filter)
    return render(
        request,
        "admin/dashboard.html",
        admin=admin,
        summary=summary,
        status_filter=status_filter,
        statuses=list(ApplicationStatus),
    )


def _render_detail(
    request: Request,
    admin: AdminSession,
    application,
    *,
    credentials=None,
    notices: list[Notice] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return render(
        request,
        "admin/applicant_detail.html",
        admin=admin,
        application=application,
        actions={a.value for a in available_actions(application)},
        credentials=credentials,
        documents=[
            (kind, document_name(application, kind), document_link(application, kind))
            for kind in DocumentKind
        ],
        notices=notices,
        status_code=status_code,
    )


def _applicant_not_found(request: Request) -> RedirectResponse:
    flash(request, "The requested applicant could not be found.", "error")
    return _redirect("/admin/dashboard")


@router.get("/admin/applicants/{application_id}", response_model=None)
async def applicant_detail(
    application_id: str,
    request: Request,
    admin: AdminSessionDep,
    session: AsyncSession = Depends(get_db),
) -> Response:
    if not admin.authenticated:
        return _login_redirect(request)
    application = await app_service.get_application(session, application_id)
    if application is None:
        return _applicant_not_found(request)
    return _render_detail(request, admin, application)


@router.post("/admin/applicants/{application_id}/approve", response_model=None)
async def applicant_approve(
    application_id: str,
    request: Request,
    admin: AdminSessionDep,
    confirm: bool = Form(False),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Approve and show the generated credentials exactly once."""
    if not admin.authenticated:
        return _login_redirect(request)
    try:
        result = await approve_application(
            session, application_id, reviewed_by=admin.email, confirmed=confirm
        )
    except (ReviewError, InvalidTransitionError) as exc:
        return await _detail_with_error(request, admin, session, application_id, str(exc))
    if result is None:
        return _applicant_not_found(request)
    return _render_detail(
        request,
        admin,
        result.application,
        credentials=result.credentials,
        notices=[Notice(message="Producer approved successfully.", category="success")],
    )


@router.post("/admin/applicants/{application_id}/reject", response_model=None)
async def applicant_reject(
    application_id: str,
    request: Request,
    admin: AdminSessionDep,
    confirm: bool = Form(False),
    reason: str = Form(""),
    session: AsyncSession = Depends(get_db),
) -> Response:
    if not admin.authenticated:
        return _login_redirect(request)
    try:
        application = await reject_application(
            session, application_id, reviewed_by=admin.email, reason=reason, confirmed=confirm
        )
    except (ReviewError, InvalidTransitionError) as exc:
        return await _detail_with_error(request, admin, session, application_id, str(exc))
    if application is None:
        return _applicant_not_found(request)
    return _render_detail(
        request,
        admin,
        application,
        notices=[Notice(message="Application rejected.", category="success")],
    )


async def _detail_with_error(
    request: Request,
    admin: AdminSession,
    session: AsyncSession,
    application_id: str,
    message: str,
) -> Response:
    application = await app_service.get_application(session, application_id)
    if application is None:
        return _applicant_not_found(request)
    return _render_detail(
        request,
        admin,
        application,
        notices=[Notice(message=message, category="error")],
        status_code=422,
    )


@router.get("/admin/applicants/{application_id}/documents/{kind}", response_model=None)
async def applicant_document(
    application_id: str,
    kind: DocumentKind,
    request: Request,
    admin: AdminSessionDep,
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Open the stored document URL, or explain that it is missing."""
    if not admin.authenticated:
        return _login_redirect(request)
    application = await app_service.get_application(session, application_id)
    if application is None:
        return _applicant_not_found(request)
    url = document_link(application, kind)
    if url is None:
        flash(request, f"{kind.label} has not been uploaded.", "error")
        return _redirect(f"/admin/applicants/{application_id}")
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)
