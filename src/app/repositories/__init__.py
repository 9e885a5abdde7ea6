"""Repository layer - data access abstraction."""

from src.app.repositories.base import BaseRepository
from src.app.repositories.join_code import JoinCodeRepository
from src.app.repositories.membership import MembershipRepository
from src.app.repositories.organization import OrganizationRepository
from src.app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "JoinCodeRepository",
    "MembershipRepository",
    "OrganizationRepository",
    "UserRepository",
]
