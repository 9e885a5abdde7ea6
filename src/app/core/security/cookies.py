"""Session cookie helpers.

The identity provider issues the tokens; this service only carries them
between the browser and the provider in httponly cookies.
"""

from starlette.requests import Request
from starlette.responses import Response

from src.app.core.config import get_settings


def access_cookie_name() -> str:
    return f"{get_settings().session_cookie_prefix}-access-token"


def refresh_cookie_name() -> str:
    return f"{get_settings().session_cookie_prefix}-refresh-token"


def pkce_cookie_name() -> str:
    return f"{get_settings().session_cookie_prefix}-code-verifier"


def set_session_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    """Set the provider session tokens on a response."""
    settings = get_settings()
    for key, value in (
        (access_cookie_name(), access_token),
        (refresh_cookie_name(), refresh_token),
    ):
        response.set_cookie(
            key=key,
            value=value,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
            path="/",
            max_age=settings.session_cookie_max_age_seconds,
        )


def clear_session_cookies(response: Response) -> None:
    """Remove session tokens from the browser."""
    response.delete_cookie(access_cookie_name(), path="/")
    response.delete_cookie(refresh_cookie_name(), path="/")


def set_pkce_cookie(response: Response, verifier: str) -> None:
    """Store the PKCE verifier until the OAuth callback arrives."""
    settings = get_settings()
    response.set_cookie(
        key=pkce_cookie_name(),
        value=verifier,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
        max_age=600,
    )


def read_access_token(request: Request) -> str | None:
    return request.cookies.get(access_cookie_name())


def read_pkce_verifier(request: Request) -> str | None:
    return request.cookies.get(pkce_cookie_name())


def clear_pkce_cookie(response: Response) -> None:
    response.delete_cookie(pkce_cookie_name(), path="/")
