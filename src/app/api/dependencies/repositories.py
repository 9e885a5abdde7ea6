"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.app.api.dependencies.db import DBSession
from src.app.repositories import (
    JoinCodeRepository,
    MembershipRepository,
    OrganizationRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    """Get user repository with request session."""
    return UserRepository(session)


def get_organization_repository(session: DBSession) -> OrganizationRepository:
    """Get organization repository with request session."""
    return OrganizationRepository(session)


def get_join_code_repository(session: DBSession) -> JoinCodeRepository:
    """Get join code repository with request session."""
    return JoinCodeRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    """Get membership repository with request session."""
    return MembershipRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
OrganizationRepo = Annotated[OrganizationRepository, Depends(get_organization_repository)]
JoinCodeRepo = Annotated[JoinCodeRepository, Depends(get_join_code_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
