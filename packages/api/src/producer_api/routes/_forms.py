# This project was developed with assistance from AI tools.
"""Shared multipart helpers for the page and JSON submission routes."""

from fastapi import UploadFile

from ..services.intake import DocumentFile


async def read_document(upload: UploadFile | None) -> DocumentFile | None:
    """Read an uploaded file into memory; None when the slot was left empty."""
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    return DocumentFile(
        filename=upload.filename,
        content_type=upload.content_type or "",
        data=data,
    )
