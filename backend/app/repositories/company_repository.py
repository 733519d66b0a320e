"""Repository for employer companies."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company

DEFAULT_COMPANY_NAME = "Company"

# Security: Never add 'id' or 'user_id' (ownership).
_UPDATABLE_FIELDS: frozenset[str] = frozenset({"name", "website", "about", "location"})


class CompanyRepository:
    """Stateless repository for Company table operations."""

    @staticmethod
    async def get_by_user_id(db: AsyncSession, user_id: uuid.UUID) -> Company | None:
        stmt = select(Company).where(Company.user_id == user_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(db: AsyncSession, *, user_id: uuid.UUID, name: str) -> Company:
        """Create a stub company for a newly registered employer."""
        company = Company(user_id=user_id, name=name)
        db.add(company)
        await db.flush()
        return company

    @staticmethod
    async def upsert(
        db: AsyncSession,
        user_id: uuid.UUID,
        /,
        **kwargs: str | None,
    ) -> Company:
        """Update the employer's company, creating it if missing.

        None values leave the stored field untouched. A new company without
        a name gets a placeholder name.

        Raises:
            ValueError: If an unknown field name is passed.
        """
        invalid = set(kwargs) - _UPDATABLE_FIELDS
        if invalid:
            msg = f"Cannot update fields: {', '.join(sorted(invalid))}"
            raise ValueError(msg)

        values = {key: value for key, value in kwargs.items() if value is not None}
        company = await CompanyRepository.get_by_user_id(db, user_id)
        if company is None:
            values.setdefault("name", DEFAULT_COMPANY_NAME)
            company = Company(user_id=user_id, **values)
            db.add(company)
        else:
            for key, value in values.items():
                setattr(company, key, value)

        await db.flush()
        await db.refresh(company)
        return company
