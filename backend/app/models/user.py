"""User model - authentication foundation.

No FK dependencies. A user is either a CANDIDATE (owns one CandidateProfile)
or an EMPLOYER (owns one Company).
"""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.models.candidate import CandidateProfile
    from app.models.company import Company

ROLE_CANDIDATE = "CANDIDATE"
ROLE_EMPLOYER = "EMPLOYER"
USER_ROLES = (ROLE_CANDIDATE, ROLE_EMPLOYER)


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """User account for authentication.

    Attributes:
        id: UUID primary key.
        email: Unique email address, stored lower-cased.
        password_hash: bcrypt hash.
        role: CANDIDATE or EMPLOYER.
        created_at: Account creation timestamp (from TimestampMixin).
        updated_at: Last modification timestamp (from TimestampMixin).
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ROLE_CANDIDATE,
    )

    __table_args__ = (
        CheckConstraint(
            "role IN ('CANDIDATE', 'EMPLOYER')",
            name="ck_users_role",
        ),
    )

    candidate_profile: Mapped["CandidateProfile | None"] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )
    company: Mapped["Company | None"] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )
