"""Repository for OrgJoinCode entity."""

from datetime import datetime
from uuid import UUID

from sqlmodel import select

from src.app.models import OrgJoinCode
from src.app.repositories.base import BaseRepository


class JoinCodeRepository(BaseRepository[OrgJoinCode]):
    """Repository for organization invite codes."""

    model = OrgJoinCode

    async def get_by_code(self, code: str) -> OrgJoinCode | None:
        """Get a join code by its (normalized) code, expired or not."""
        result = await self.session.execute(select(OrgJoinCode).where(OrgJoinCode.code == code))
        return result.scalar_one_or_none()

    async def create(
        self,
        org_id: UUID,
        code: str,
        expires_at: datetime,
        created_by: UUID,
    ) -> OrgJoinCode:
        """Insert a join code (flushes; a duplicate code raises IntegrityError)."""
        join_code = OrgJoinCode(
            org_id=org_id,
            code=code,
            expires_at=expires_at,
            created_by=created_by,
        )
        self.add(join_code)
        await self.session.flush()
        return join_code
