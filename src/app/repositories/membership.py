"""Repository for UserOrganization entity."""

from uuid import UUID

from sqlmodel import select

from src.app.models import UserOrganization
from src.app.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[UserOrganization]):
    """Repository for user-organization memberships."""

    model = UserOrganization

    async def get_membership(self, user_id: UUID, organization_id: UUID) -> UserOrganization | None:
        """Get membership for a user in an organization."""
        result = await self.session.execute(
            select(UserOrganization).where(
                UserOrganization.user_id == user_id,
                UserOrganization.organization_id == organization_id,
            )
        )
        return result.scalar_one_or_none()

    async def create_membership(
        self,
        user_id: UUID,
        organization_id: UUID,
        role: str,
    ) -> UserOrganization:
        """Insert a membership (flushes; a duplicate raises IntegrityError)."""
        membership = UserOrganization(
            user_id=user_id,
            organization_id=organization_id,
            role=role,
        )
        self.add(membership)
        await self.session.flush()
        return membership
