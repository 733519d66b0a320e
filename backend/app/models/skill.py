"""Skill model - shared vocabulary for candidate skills and job requirements."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, UUIDPrimaryKeyMixin


class Skill(Base, UUIDPrimaryKeyMixin):
    """A named skill (e.g. "React"). Names are unique."""

    __tablename__ = "skills"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )
