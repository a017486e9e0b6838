# This project was developed with assistance from AI tools.
"""In-memory collaborators for functional tests.

``InMemorySession`` answers the handful of statement shapes the application
service issues (by-id lookup, optionally filtered list, grouped status
count) so whole request flows can run without PostgreSQL. ``InMemoryStorage``
keeps uploaded bytes in a dict and can be told to fail.
"""

import uuid
from datetime import UTC, datetime

from producer_db import Application
from producer_db.enums import ApplicationStatus

from producer_api.schemas.document import FileUpload
from producer_api.services.storage import StorageError, StorageService


class _Result:
    def __init__(self, rows):
        self._rows = list(rows)

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)


class InMemorySession:
    """Stand-in for ``AsyncSession`` backed by a dict of Application rows."""

    def __init__(self):
        self.records: dict[str, Application] = {}
        self.commits = 0

    def add(self, obj: Application) -> None:
        if obj.id is None:
            obj.id = str(uuid.uuid4())
        if obj.status is None:
            obj.status = ApplicationStatus.PENDING
        self.records[obj.id] = obj

    async def commit(self) -> None:
        self.commits += 1

    async def refresh(self, obj) -> None:
        return None

    async def rollback(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def execute(self, stmt):
        params = stmt.compile().params
        if stmt.column_descriptions[0]["type"] is not Application:
            counts: dict[ApplicationStatus, int] = {}
            for app in self.records.values():
                counts[app.status] = counts.get(app.status, 0) + 1
            return _Result(counts.items())
        if "id_1" in params:
            app = self.records.get(params["id_1"])
            return _Result([app] if app is not None else [])
        apps = list(self.records.values())
        if "status_1" in params:
            apps = [a for a in apps if a.status == params["status_1"]]
        apps.sort(key=lambda a: a.submission_date, reverse=True)
        return _Result(apps)

    def seed(self, **fields) -> Application:
        """Insert a record directly, bypassing the intake flow."""
        fields.setdefault("status", ApplicationStatus.PENDING)
        fields.setdefault("submission_date", datetime.now(UTC))
        app = Application(**fields)
        self.add(app)
        return app


class InMemoryStorage:
    """Blob store double with the ``StorageService`` upload surface."""

    base_url = "http://minio.test/producer-documents"
    build_document_prefix = staticmethod(StorageService.build_document_prefix)

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.fail = False

    async def upload_file(self, file_data, *, prefix, filename, content_type) -> FileUpload:
        if self.fail:
            raise StorageError("bucket unavailable")
        key = StorageService.build_object_key(prefix, filename)
        self.objects[key] = file_data
        return FileUpload(
            url=f"{self.base_url}/{key}",
            file_name=filename,
            object_key=key,
            uploaded_at=datetime.now(UTC),
            file_size=len(file_data),
        )
