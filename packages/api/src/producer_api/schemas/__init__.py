# This project was developed with assistance from AI tools.
"""Shared schema components."""

from producer_db.enums import ApplicationStatus
from pydantic import BaseModel


class StatusCounts(BaseModel):
    """Per-status totals shown on the review dashboard."""

    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0

    @classmethod
    def from_counts(cls, counts: dict[ApplicationStatus, int]) -> "StatusCounts":
        return cls(
            total=sum(counts.values()),
            pending=counts.get(ApplicationStatus.PENDING, 0),
            approved=counts.get(ApplicationStatus.APPROVED, 0),
            rejected=counts.get(ApplicationStatus.REJECTED, 0),
        )
