"""Repository for the shared skill vocabulary."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.skill import Skill


class SkillRepository:
    """Stateless repository for Skill table operations."""

    @staticmethod
    async def get_or_create_many(db: AsyncSession, names: Iterable[str]) -> list[Skill]:
        """Resolve skill names to rows, creating missing ones.

        Names are stripped; blanks and duplicates are dropped. Order of first
        appearance is preserved.

        Args:
            db: Async database session.
            names: Skill names as entered by the user.

        Returns:
            One Skill per distinct non-blank name.
        """
        wanted: list[str] = []
        for name in names:
            cleaned = name.strip()
            if cleaned and cleaned not in wanted:
                wanted.append(cleaned)
        if not wanted:
            return []

        result = await db.execute(select(Skill).where(Skill.name.in_(wanted)))
        existing = {skill.name: skill for skill in result.scalars()}

        missing = [Skill(name=name) for name in wanted if name not in existing]
        if missing:
            db.add_all(missing)
            await db.flush()
            existing.update({skill.name: skill for skill in missing})

        return [existing[name] for name in wanted]
