"""Identity provider client - GoTrue-compatible auth REST API.

Credentials, email confirmation and OAuth live in the hosted provider. This
module wraps the handful of endpoints the service needs and turns provider
failures into ``IdentityProviderError``.
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode
from uuid import UUID

import httpx

from src.app.core.config import get_settings
from src.app.core.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_OAUTH_PROVIDERS = frozenset({"google", "github", "azure", "gitlab"})


class IdentityProviderError(Exception):
    """Raised when the identity provider rejects a request or is unreachable."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


@dataclass(frozen=True)
class IdentityUser:
    """User as known to the identity provider."""

    id: UUID
    email: str
    user_metadata: dict[str, Any] = field(default_factory=dict)
    email_confirmed: bool = False

    @property
    def first_name(self) -> str:
        return self.user_metadata.get("first_name") or ""

    @property
    def last_name(self) -> str:
        return self.user_metadata.get("last_name") or ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "IdentityUser":
        return cls(
            id=UUID(str(payload["id"])),
            email=payload.get("email") or "",
            user_metadata=payload.get("user_metadata") or {},
            email_confirmed=bool(
                payload.get("email_confirmed_at") or payload.get("confirmed_at")
            ),
        )


@dataclass(frozen=True)
class IdentitySession:
    """Tokens issued by the provider for one signed-in user."""

    access_token: str
    refresh_token: str
    user: IdentityUser
    expires_in: int | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "IdentitySession":
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token") or "",
            user=IdentityUser.from_payload(payload["user"]),
            expires_in=payload.get("expires_in"),
        )


@dataclass(frozen=True)
class SignUpResult:
    """Outcome of a signup.

    ``session`` is only set when the provider auto-confirms emails; otherwise
    the user must follow the confirmation link first.
    """

    user: IdentityUser | None
    session: IdentitySession | None = None


def _error_message(response: httpx.Response) -> tuple[str, str | None]:
    """Extract a human-readable message and error code from a provider error."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase, None

    if not isinstance(body, dict):
        return str(body), None

    message = (
        body.get("msg")
        or body.get("message")
        or body.get("error_description")
        or body.get("error")
        or response.reason_phrase
    )
    code = body.get("error_code") or body.get("error")
    return str(message), code


class IdentityProviderClient:
    """Async client for the hosted identity provider.

    One instance (and its connection pool) is shared by the process; it holds
    no per-user state. Per-request identity is carried by the access token
    passed into each call.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout),
            headers={"apikey": api_key, "Authorization": f"Bearer {api_key}"},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: str | None = None,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException as e:
            logger.error("Identity provider timeout", path=path)
            raise IdentityProviderError("Identity provider timed out") from e
        except httpx.HTTPError as e:
            logger.error("Identity provider unreachable", path=path, error=str(e))
            raise IdentityProviderError("Identity provider unavailable") from e

        if response.is_error:
            message, code = _error_message(response)
            raise IdentityProviderError(message, status_code=response.status_code, code=code)
        return response

    async def sign_in_with_password(self, email: str, password: str) -> IdentitySession:
        """Exchange email + password for a session."""
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return IdentitySession.from_payload(response.json())

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> SignUpResult:
        """Register a new identity with attached user metadata."""
        response = await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": metadata or {}},
        )
        body = response.json()
        if body.get("access_token"):
            session = IdentitySession.from_payload(body)
            return SignUpResult(user=session.user, session=session)
        return SignUpResult(user=IdentityUser.from_payload(body) if body.get("id") else None)

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token``."""
        await self._request("POST", "/logout", access_token=access_token)

    async def get_user(self, access_token: str) -> IdentityUser:
        """Resolve the user behind an access token."""
        response = await self._request("GET", "/user", access_token=access_token)
        return IdentityUser.from_payload(response.json())

    def get_oauth_authorize_url(
        self,
        provider: str,
        redirect_to: str,
        code_challenge: str,
        query_params: dict[str, str] | None = None,
    ) -> str:
        """Build the provider authorization URL for a PKCE OAuth flow.

        No request is made; the browser is redirected to the returned URL.
        """
        if provider not in SUPPORTED_OAUTH_PROVIDERS:
            raise IdentityProviderError(f"Unsupported OAuth provider: {provider}")
        params = {
            "provider": provider,
            "redirect_to": redirect_to,
            "code_challenge": code_challenge,
            "code_challenge_method": "s256",
        }
        params.update(query_params or {})
        return f"{self._base_url}/authorize?{urlencode(params)}"

    async def exchange_code_for_session(
        self, auth_code: str, code_verifier: str
    ) -> IdentitySession:
        """Complete a PKCE OAuth flow."""
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "pkce"},
            json={"auth_code": auth_code, "code_verifier": code_verifier},
        )
        return IdentitySession.from_payload(response.json())

    async def verify_otp(self, token_hash: str, otp_type: str) -> IdentitySession:
        """Verify an emailed confirmation link (token hash) and start a session."""
        response = await self._request(
            "POST",
            "/verify",
            json={"token_hash": token_hash, "type": otp_type},
        )
        return IdentitySession.from_payload(response.json())

    async def health(self) -> bool:
        """Ping the provider health endpoint."""
        await self._request("GET", "/health")
        return True


_client: IdentityProviderClient | None = None


def get_identity_client() -> IdentityProviderClient:
    """Get or create the identity provider client singleton."""
    global _client
    if _client is None:
        settings = get_settings()
        _client = IdentityProviderClient(
            base_url=settings.identity_url,
            api_key=settings.identity_anon_key,
            timeout=settings.identity_timeout_seconds,
        )
    return _client


async def close_identity_client() -> None:
    """Close the identity provider client. Call during shutdown."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
