# This project was developed with assistance from AI tools.
"""
Producer onboarding -- domain models

A single durable entity: the producer's onboarding application, with its
review outcome and links to the two uploaded documents.
"""

import uuid

from sqlalchemy import Column, DateTime, Enum, String, Text, func

from .database import Base
from .enums import ApplicationStatus


def _new_id() -> str:
    return str(uuid.uuid4())


class Application(Base):
    """Producer onboarding application."""

    __tablename__ = "applications"

    id = Column(String(36), primary_key=True, default=_new_id)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    cooperative_name = Column(String(255), nullable=False)
    status = Column(
        Enum(ApplicationStatus, name="application_status", native_enum=False),
        nullable=False,
        default=ApplicationStatus.PENDING,
        index=True,
    )
    submission_date = Column(DateTime(timezone=True), nullable=False, index=True)
    review_date = Column(DateTime(timezone=True), nullable=True)
    reviewed_by = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    aadhaar_file_url = Column(Text, nullable=True)
    aadhaar_file_name = Column(String(255), nullable=True)
    land_record_file_url = Column(Text, nullable=True)
    land_record_file_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def is_pending(self) -> bool:
        return self.status == ApplicationStatus.PENDING

    @property
    def is_submission_complete(self) -> bool:
        """Both document URLs linked (checked by the form flow, not the store)."""
        return bool(self.aadhaar_file_url and self.land_record_file_url)

    def __repr__(self):
        return f"<Application(id={self.id}, status='{self.status}')>"
