# This project was developed with assistance from AI tools.
"""
Admin session guard backed by Starlette's signed cookie session.

Login is a placeholder: any non-blank email/password pair is accepted and
marks the session as authenticated. Views receive an explicit
``AdminSession`` instead of reading a global flag.

Also carries one-shot notices ("flash" messages) for the page views.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from ..schemas.auth import AdminSession, Notice

logger = logging.getLogger(__name__)

_AUTH_KEY = "admin_authenticated"
_EMAIL_KEY = "admin_email"
_FLASH_KEY = "_notices"


class InvalidLoginError(ValueError):
    """Raised when the email or password is blank."""


def login(request: Request, email: str, password: str) -> AdminSession:
    """Mark the session authenticated for any non-blank pair."""
    email = (email or "").strip()
    if not email or not (password or "").strip():
        raise InvalidLoginError("Please enter both email and password")
    request.session[_AUTH_KEY] = True
    request.session[_EMAIL_KEY] = email
    logger.info("Admin login: %s", email)
    return AdminSession(authenticated=True, email=email)


def logout(request: Request) -> None:
    email = request.session.pop(_EMAIL_KEY, None)
    request.session.pop(_AUTH_KEY, None)
    if email:
        logger.info("Admin logout: %s", email)


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


async def get_admin_session(request: Request) -> AdminSession:
    """FastAPI dependency: read the admin session from the signed cookie."""
    if request.session.get(_AUTH_KEY):
        return AdminSession(authenticated=True, email=request.session.get(_EMAIL_KEY))
    return AdminSession()


# Type alias for use in route signatures
AdminSessionDep = Annotated[AdminSession, Depends(get_admin_session)]


async def require_admin(admin: AdminSessionDep) -> AdminSession:
    """Dependency for the JSON API: 401 without an authenticated session."""
    if not admin.authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin session required",
        )
    return admin


RequiredAdmin = Annotated[AdminSession, Depends(require_admin)]


# ---------------------------------------------------------------------------
# Notices
# ---------------------------------------------------------------------------


def flash(request: Request, message: str, category: str = "info") -> None:
    # reassign so the session is marked modified; mutating the stored list is not
    notices = request.session.get(_FLASH_KEY, [])
    request.session[_FLASH_KEY] = [*notices, {"message": message, "category": category}]


def pop_flashes(request: Request) -> list[Notice]:
    return [Notice(**n) for n in request.session.pop(_FLASH_KEY, [])]
