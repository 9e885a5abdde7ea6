"""Authentication dependencies.

The access token lives in an httponly cookie; the identity provider is the
source of truth for who it belongs to.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from src.app.core.identity import (
    IdentityProviderClient,
    IdentityProviderError,
    IdentityUser,
    get_identity_client,
)
from src.app.core.logging import bind_user_context, get_logger
from src.app.core.security import read_access_token

logger = get_logger(__name__)


def get_identity_provider() -> IdentityProviderClient:
    """Get the shared identity provider client (overridable in tests)."""
    return get_identity_client()


IdentityProvider = Annotated[IdentityProviderClient, Depends(get_identity_provider)]


async def get_optional_identity(
    request: Request,
    identity: IdentityProvider,
) -> IdentityUser | None:
    """Resolve the signed-in user from the session cookie, or None.

    An invalid or expired token counts as signed out; so does a provider
    outage, which is logged.
    """
    access_token = read_access_token(request)
    if not access_token:
        return None

    try:
        user = await identity.get_user(access_token)
    except IdentityProviderError as e:
        if e.status_code is None or e.status_code >= 500:
            logger.warning("Could not resolve session user", error=e.message)
        return None

    bind_user_context(user.id, email=user.email)
    return user


OptionalIdentity = Annotated[IdentityUser | None, Depends(get_optional_identity)]


async def get_current_identity(identity: OptionalIdentity) -> IdentityUser:
    """Require a signed-in user."""
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return identity


CurrentIdentity = Annotated[IdentityUser, Depends(get_current_identity)]
