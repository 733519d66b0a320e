"""SQLAlchemy ORM models for RAVYZ.

All models are exported from this module for convenient imports:
    from app.models import User, CandidateProfile, Job, ...

Models are organized by domain:
- user.py: User (no FK dependencies)
- skill.py: Skill (shared vocabulary)
- candidate.py: CandidateProfile, CandidateSkill
- company.py: Company
- job.py: Job, JobSkill
- application.py: Application
"""

from app.models.application import Application
from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from app.models.candidate import CandidateProfile, CandidateSkill
from app.models.company import Company
from app.models.job import Job, JobSkill
from app.models.skill import Skill
from app.models.user import User

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    # Accounts
    "User",
    "CandidateProfile",
    "CandidateSkill",
    "Company",
    # Jobs
    "Skill",
    "Job",
    "JobSkill",
    "Application",
]
