# This project was developed with assistance from AI tools.
"""Admin session schemas."""

from pydantic import BaseModel, ConfigDict


class AdminSession(BaseModel):
    """Injected into every admin view; ``authenticated`` gates access."""

    model_config = ConfigDict(frozen=True)

    authenticated: bool = False
    email: str | None = None


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class Notice(BaseModel):
    """One-shot message shown on the next rendered page."""

    message: str
    category: str = "info"
