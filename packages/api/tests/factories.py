# This project was developed with assistance from AI tools.
"""Shared test factory functions.

Applications are real (transient) ORM instances so Pydantic
``from_attributes`` and the templates see genuine column values.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

from producer_db import Application
from producer_db.enums import ApplicationStatus

from producer_api.schemas.document import FileUpload
from producer_api.services.intake import DocumentFile, PersonalDetails

MIB = 1024 * 1024


def make_application(
    id="app-0001",
    full_name="Asha Devi",
    email="asha@example.com",
    cooperative_name="Green Valley Co-op",
    status=ApplicationStatus.PENDING,
    submission_date=None,
    linked=True,
    **overrides,
) -> Application:
    """Create a transient Application with both documents linked by default."""
    app = Application(
        id=id,
        full_name=full_name,
        email=email,
        cooperative_name=cooperative_name,
        status=status,
        submission_date=submission_date or datetime(2026, 10, 1, 9, 30, tzinfo=UTC),
    )
    if linked:
        app.aadhaar_file_url = f"http://minio.test/docs/applications/{id}/documents/1_aadhaar.pdf"
        app.aadhaar_file_name = "aadhaar.pdf"
        app.land_record_file_url = f"http://minio.test/docs/applications/{id}/documents/2_land.pdf"
        app.land_record_file_name = "land.pdf"
    for field, value in overrides.items():
        setattr(app, field, value)
    return app


def make_pdf(filename="document.pdf", size=2 * MIB, content_type="application/pdf") -> DocumentFile:
    """An in-memory document of the given size (2 MB PDF by default)."""
    body = b"%PDF-1.4\n" + b"0" * max(size - 9, 0)
    return DocumentFile(filename=filename, content_type=content_type, data=body[:size])


def make_details(**overrides) -> PersonalDetails:
    values = {
        "full_name": "Asha Devi",
        "email": "asha@example.com",
        "cooperative_name": "Green Valley Co-op",
    }
    values.update(overrides)
    return PersonalDetails(**values)


def make_file_upload(object_key="applications/app-0001/documents/1_doc.pdf", file_name="doc.pdf"):
    return FileUpload(
        url=f"http://minio.test/docs/{object_key}",
        file_name=file_name,
        object_key=object_key,
        uploaded_at=datetime(2026, 10, 1, 9, 31, tzinfo=UTC),
        file_size=2 * MIB,
    )


def make_mock_session(single=None, items=None, rows=None) -> AsyncMock:
    """Build an AsyncMock session for the three result shapes the services read.

    Args:
        single: Object for ``.scalar_one_or_none()`` (by-id lookups).
        items: List for ``.scalars().all()`` (list queries).
        rows: List of tuples for ``.all()`` (grouped counts).
    """
    session = AsyncMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = single
    result.scalars.return_value.all.return_value = items or []
    result.all.return_value = rows or []
    session.execute = AsyncMock(return_value=result)
    # session.add() is synchronous in SQLAlchemy
    session.add = MagicMock()
    return session


def make_mock_storage(fail=False) -> MagicMock:
    """Storage double whose uploads succeed (or raise) without touching S3."""
    from producer_api.services.storage import StorageError, StorageService

    storage = MagicMock()
    storage.build_document_prefix.side_effect = StorageService.build_document_prefix

    async def fake_upload(file_data, *, prefix, filename, content_type):
        if fail:
            raise StorageError("bucket unavailable")
        return make_file_upload(object_key=f"{prefix}/1_{filename}", file_name=filename)

    storage.upload_file = AsyncMock(side_effect=fake_upload)
    return storage


def login_admin(client, email="reviewer@example.com", password="secret") -> None:
    """Open an admin session on the client's cookie jar."""
    resp = client.post("/api/admin/login", json={"email": email, "password": password})
    assert resp.status_code == 200
