# This project was developed with assistance from AI tools.
"""Problem Details (RFC 7807) body returned by every JSON error."""

from http import HTTPStatus

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body for the JSON API; page routes render notices instead."""

    type: str = Field(default="about:blank", description="Problem type URI; always about:blank here.")
    title: str = Field(description="Standard reason phrase for the status code.")
    status: int = Field(description="Mirrors the response status code.")
    detail: str = Field(default="", description="What went wrong with this particular request.")
    request_id: str = Field(
        default="",
        description="Echoes X-Request-ID when the caller sent one, otherwise a fresh uuid4.",
    )
    instance: str = Field(default="", description="Path of the request that failed.")

    @classmethod
    def for_status(
        cls,
        status_code: int,
        detail: str,
        request_id: str,
        instance: str = "",
    ) -> "ErrorResponse":
        try:
            title = HTTPStatus(status_code).phrase
        except ValueError:
            title = "Error"
        return cls(
            title=title,
            status=status_code,
            detail=detail,
            request_id=request_id,
            instance=instance,
        )
