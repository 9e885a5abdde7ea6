"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.app.api.dependencies.auth import (
    CurrentIdentity,
    IdentityProvider,
    OptionalIdentity,
    get_current_identity,
    get_identity_provider,
    get_optional_identity,
)

# Database
from src.app.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.app.api.dependencies.repositories import (
    JoinCodeRepo,
    MembershipRepo,
    OrganizationRepo,
    UserRepo,
    get_join_code_repository,
    get_membership_repository,
    get_organization_repository,
    get_user_repository,
)

# Services
from src.app.api.dependencies.services import (
    AuthServiceDep,
    OnboardingServiceDep,
    get_auth_service,
    get_onboarding_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentIdentity",
    "IdentityProvider",
    "OptionalIdentity",
    "get_current_identity",
    "get_identity_provider",
    "get_optional_identity",
    # Repositories
    "JoinCodeRepo",
    "MembershipRepo",
    "OrganizationRepo",
    "UserRepo",
    "get_join_code_repository",
    "get_membership_repository",
    "get_organization_repository",
    "get_user_repository",
    # Services
    "AuthServiceDep",
    "OnboardingServiceDep",
    "get_auth_service",
    "get_onboarding_service",
]
