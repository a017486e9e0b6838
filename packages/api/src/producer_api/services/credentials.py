# This project was developed with assistance from AI tools.
"""Producer credential generation and in-process issuance record.

Credentials are placeholders: generated on approval, shown to the reviewer
once, and kept in memory for out-of-band delivery. They are never written to
the application record.
"""

import logging
import secrets
import string

from pydantic import BaseModel, ConfigDict

from ..core.config import settings

logger = logging.getLogger(__name__)

_USERNAME_ALPHABET = string.ascii_lowercase + string.digits
_PASSWORD_ALPHABET = string.ascii_letters + string.digits


class Credentials(BaseModel):
    """Username/password pair issued to an approved producer."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str


def _random_string(alphabet: str, length: int) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_credentials() -> Credentials:
    """Generate a ``producer_xxxxxx`` username and a random alphanumeric password."""
    username = settings.CREDENTIAL_USERNAME_PREFIX + _random_string(
        _USERNAME_ALPHABET, settings.CREDENTIAL_USERNAME_LENGTH
    )
    password = _random_string(_PASSWORD_ALPHABET, settings.CREDENTIAL_PASSWORD_LENGTH)
    return Credentials(username=username, password=password)


class IssuedCredentialStore:
    """Credentials issued in this process, keyed by application id.

    An entry lives from approval until it is marked delivered, so the store
    holds at most one pair per approved application still awaiting delivery.
    """

    def __init__(self) -> None:
        self._issued: dict[str, Credentials] = {}

    def record(self, application_id: str, credentials: Credentials) -> None:
        self._issued[application_id] = credentials
        logger.info("Issued credentials %s for application %s", credentials.username, application_id)

    def get(self, application_id: str) -> Credentials | None:
        return self._issued.get(application_id)

    def pop(self, application_id: str) -> Credentials | None:
        """Remove and return credentials once they have been delivered."""
        return self._issued.pop(application_id, None)

    def clear(self) -> None:
        self._issued.clear()

    def __len__(self) -> int:
        return len(self._issued)


_store = IssuedCredentialStore()


def get_credential_store() -> IssuedCredentialStore:
    """Return the process-wide issued-credential store."""
    return _store
