"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.app.api.dependencies.auth import IdentityProvider
from src.app.api.dependencies.db import DBSession
from src.app.api.dependencies.repositories import (
    JoinCodeRepo,
    MembershipRepo,
    OrganizationRepo,
    UserRepo,
)
from src.app.services.auth_service import AuthService
from src.app.services.onboarding_service import OnboardingService


def get_auth_service(identity: IdentityProvider, user_repo: UserRepo) -> AuthService:
    """Get auth service."""
    return AuthService(identity, user_repo)


def get_onboarding_service(
    user_repo: UserRepo,
    org_repo: OrganizationRepo,
    join_code_repo: JoinCodeRepo,
    membership_repo: MembershipRepo,
    session: DBSession,
) -> OnboardingService:
    """Get onboarding service; all repositories share the request session."""
    return OnboardingService(user_repo, org_repo, join_code_repo, membership_repo, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
OnboardingServiceDep = Annotated[OnboardingService, Depends(get_onboarding_service)]
