# This project was developed with assistance from AI tools.
"""
Domain enums for the producer onboarding lifecycle.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class ApplicationStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def terminal_statuses(cls) -> frozenset["ApplicationStatus"]:
        """Statuses an application never leaves."""
        return frozenset({cls.APPROVED, cls.REJECTED})

    @classmethod
    def valid_transitions(cls) -> dict["ApplicationStatus", frozenset["ApplicationStatus"]]:
        """Allowed status transitions in the review lifecycle."""
        return {
            cls.PENDING: frozenset({cls.APPROVED, cls.REJECTED}),
            cls.APPROVED: frozenset(),
            cls.REJECTED: frozenset(),
        }

    def can_transition_to(self, new_status: "ApplicationStatus") -> bool:
        return new_status in self.valid_transitions()[self]


class DocumentKind(str, enum.Enum):
    AADHAAR = "aadhaar"
    LAND_RECORD = "land_record"

    @property
    def label(self) -> str:
        return _DOCUMENT_LABELS[self]


_DOCUMENT_LABELS = {
    DocumentKind.AADHAAR: "Aadhaar card",
    DocumentKind.LAND_RECORD: "Land record document",
}
