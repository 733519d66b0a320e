"""Create account, company, job and application tables.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Tables in FK order: users, skills, candidate_profiles, candidate_skills,
companies, jobs, job_skills, applications.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_DEFAULT_UUID = sa.text("gen_random_uuid()")


def _id_column() -> sa.Column:
    return sa.Column("id", sa.UUID(), primary_key=True, server_default=_DEFAULT_UUID)


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="CANDIDATE"),
        *_timestamp_columns(),
        sa.CheckConstraint("role IN ('CANDIDATE', 'EMPLOYER')", name="ck_users_role"),
    )

    op.create_table(
        "skills",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        "candidate_profiles",
        _id_column(),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("headline", sa.String(255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("cpf", sa.String(14), nullable=True, unique=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        *_timestamp_columns(),
    )

    op.create_table(
        "candidate_skills",
        _id_column(),
        sa.Column(
            "candidate_id",
            sa.UUID(),
            sa.ForeignKey("candidate_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "skill_id",
            sa.UUID(),
            sa.ForeignKey("skills.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("level", sa.Integer(), nullable=False, server_default="3"),
        sa.UniqueConstraint("candidate_id", "skill_id", name="uq_candidate_skill"),
    )

    op.create_table(
        "companies",
        _id_column(),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("website", sa.String(2048), nullable=True),
        sa.Column("about", sa.Text(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        *_timestamp_columns(),
    )

    op.create_table(
        "jobs",
        _id_column(),
        sa.Column(
            "company_id",
            sa.UUID(),
            sa.ForeignKey("companies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("employment", sa.String(50), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index("idx_jobs_company_id", "jobs", ["company_id"])

    op.create_table(
        "job_skills",
        _id_column(),
        sa.Column(
            "job_id",
            sa.UUID(),
            sa.ForeignKey("jobs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "skill_id",
            sa.UUID(),
            sa.ForeignKey("skills.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("must", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("job_id", "skill_id", name="uq_job_skill"),
    )

    op.create_table(
        "applications",
        _id_column(),
        sa.Column(
            "job_id",
            sa.UUID(),
            sa.ForeignKey("jobs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "candidate_id",
            sa.UUID(),
            sa.ForeignKey("candidate_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="SUBMITTED"),
        *_timestamp_columns(),
        sa.UniqueConstraint("job_id", "candidate_id", name="uq_application_job_candidate"),
        sa.CheckConstraint(
            "status IN ('SUBMITTED', 'REVIEWING', 'REJECTED', 'HIRED')",
            name="ck_applications_status",
        ),
    )
    op.create_index("idx_applications_candidate_id", "applications", ["candidate_id"])


def downgrade() -> None:
    op.drop_index("idx_applications_candidate_id")
    op.drop_table("applications")
    op.drop_table("job_skills")
    op.drop_index("idx_jobs_company_id")
    op.drop_table("jobs")
    op.drop_table("companies")
    op.drop_table("candidate_skills")
    op.drop_table("candidate_profiles")
    op.drop_table("skills")
    op.drop_table("users")
