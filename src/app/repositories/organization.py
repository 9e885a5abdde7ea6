"""Repository for Organization entity."""

from src.app.models import Organization
from src.app.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    """Repository for organizations."""

    model = Organization

    async def create(
        self,
        name: str,
        phone: str,
        website: str | None = None,
        address: str | None = None,
        emergency_phone: str | None = None,
    ) -> Organization:
        """Insert an organization and flush to obtain its id."""
        org = Organization(
            name=name,
            website=website,
            org_address=address,
            phone=phone,
            meta={"emergency_phone": emergency_phone},
        )
        self.add(org)
        await self.session.flush()
        return org
