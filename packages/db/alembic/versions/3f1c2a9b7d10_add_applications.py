# This project was developed with assistance from AI tools.
"""add applications

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-12 09:14:22.481305

"""

import sqlalchemy as sa
from alembic import op

revision = "3f1c2a9b7d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "applications",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("cooperative_name", sa.String(255), nullable=False),
        sa.Column("status", sa.String(8), nullable=False, server_default="PENDING"),
        sa.Column("submission_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("review_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("aadhaar_file_url", sa.Text(), nullable=True),
        sa.Column("aadhaar_file_name", sa.String(255), nullable=True),
        sa.Column("land_record_file_url", sa.Text(), nullable=True),
        sa.Column("land_record_file_name", sa.String(255), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED')", name="ck_applications_status"
        ),
    )
    op.create_index("ix_applications_email", "applications", ["email"])
    op.create_index("ix_applications_status", "applications", ["status"])
    op.create_index("ix_applications_submission_date", "applications", ["submission_date"])


def downgrade() -> None:
    op.drop_index("ix_applications_submission_date", table_name="applications")
    op.drop_index("ix_applications_status", table_name="applications")
    op.drop_index("ix_applications_email", table_name="applications")
    op.drop_table("applications")
