# This project was developed with assistance from AI tools.
"""Document upload schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class FileUpload(BaseModel):
    """Result of storing one document in the blob store."""

    model_config = ConfigDict(frozen=True)

    url: str
    file_name: str
    object_key: str
    uploaded_at: datetime
    file_size: int
