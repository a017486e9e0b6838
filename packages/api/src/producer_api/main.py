# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from .core.config import settings
from .routes import admin, applications, health, pages
from .schemas.auth import Notice
from .schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

DATABASE_UNAVAILABLE = "The service is temporarily unavailable. Please try again."


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    from producer_db import get_db_service

    from .services.storage import init_storage_service

    init_storage_service(settings)
    yield
    await get_db_service().shutdown()


app = FastAPI(
    title="Producer Onboarding API",
    description="Producer applications with document upload and admin review",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Signed cookie session -- carries the admin session and one-shot notices
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
)


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id", str(uuid.uuid4()))


def _wants_page(request: Request) -> bool:
    return not request.url.path.startswith(("/api", "/health"))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details (404 page for views)."""
    if exc.status_code == 404 and _wants_page(request):
        return pages.render(request, "not_found.html", status_code=404)
    body = ErrorResponse.for_status(
        exc.status_code, str(exc.detail), _request_id(request), instance=request.url.path
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    body = ErrorResponse.for_status(422, str(exc.errors()), _request_id(request), instance=request.url.path)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Database unavailable or failing: 503, as an error page for views."""
    request_id = _request_id(request)
    logger.exception("Database error (request_id=%s)", request_id)
    if _wants_page(request):
        return pages.render(
            request,
            "error.html",
            notices=[Notice(message=DATABASE_UNAVAILABLE, category="error")],
            admin_area=request.url.path.startswith("/admin"),
            status_code=503,
        )
    body = ErrorResponse.for_status(503, DATABASE_UNAVAILABLE, request_id, instance=request.url.path)
    return JSONResponse(status_code=503, content=body.model_dump())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    request_id = _request_id(request)
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    body = ErrorResponse.for_status(500, "An unexpected error occurred.", request_id)
    return JSONResponse(status_code=500, content=body.model_dump())


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(pages.router, include_in_schema=False)
