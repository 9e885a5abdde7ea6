"""Repository for User entity."""

from uuid import UUID

from sqlmodel import select

from src.app.models import User
from src.app.models.base import utc_now
from src.app.repositories.base import BaseRepository

# Matches users.first_name / users.last_name
NAME_MAX_LENGTH = 100


def _clip_name(name: str) -> str:
    return name[:NAME_MAX_LENGTH]


class UserRepository(BaseRepository[User]):
    """Repository for application user profiles."""

    model = User

    async def get_onboarded(self, user_id: UUID) -> bool | None:
        """Get the onboarded flag, or None when the profile row does not exist."""
        result = await self.session.execute(select(User.onboarded).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        user_id: UUID,
        email: str,
        first_name: str = "",
        last_name: str = "",
    ) -> User:
        """Get the profile row for an identity, creating it when missing (flushes)."""
        user = await self.get_by_id(user_id)
        if user is None:
            user = User(
                id=user_id,
                email=email,
                first_name=_clip_name(first_name),
                last_name=_clip_name(last_name),
            )
            self.add(user)
            await self.session.flush()
        return user

    async def assign_organization(
        self,
        user: User,
        org_id: UUID,
        role: str,
        first_name: str,
        last_name: str,
    ) -> User:
        """Attach a user to an organization and mark them onboarded (flushes).

        Names come from identity metadata and are clipped to the column width.
        """
        user.org_id = org_id
        user.role = role
        user.first_name = _clip_name(first_name)
        user.last_name = _clip_name(last_name)
        user.onboarded = True
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.flush()
        return user
