"""Test helpers: an in-memory identity provider and cookie utilities."""

import secrets
from typing import Any
from urllib.parse import urlencode
from uuid import uuid4

import httpx

from src.app.core.identity import (
    SUPPORTED_OAUTH_PROVIDERS,
    IdentityProviderError,
    IdentitySession,
    IdentityUser,
    SignUpResult,
)
from src.app.core.security import code_challenge_s256
from src.app.core.security.cookies import access_cookie_name


class FakeIdentityProvider:
    """Stand-in for IdentityProviderClient backed by dictionaries.

    Signups are unconfirmed until ``confirm`` (or ``verify_otp``) runs, and
    unconfirmed users cannot sign in, like a provider with email
    confirmation turned on.
    """

    base_url = "https://identity.test/auth/v1"

    def __init__(self) -> None:
        self.users: dict[str, IdentityUser] = {}
        self.passwords: dict[str, str] = {}
        self.tokens: dict[str, IdentityUser] = {}
        self.otp_hashes: dict[str, str] = {}
        self.oauth_codes: dict[str, tuple[IdentityUser, str]] = {}
        self.signed_out: list[str] = []
        self.outage = False

    def _check_available(self) -> None:
        if self.outage:
            raise IdentityProviderError("Identity provider unavailable")

    def _issue_session(self, user: IdentityUser) -> IdentitySession:
        access_token = secrets.token_urlsafe(16)
        self.tokens[access_token] = user
        return IdentitySession(
            access_token=access_token,
            refresh_token=secrets.token_urlsafe(16),
            user=user,
            expires_in=3600,
        )

    def register(
        self,
        email: str,
        password: str = "correct-horse-battery",
        first_name: str = "Ada",
        last_name: str = "Lovelace",
        confirmed: bool = True,
    ) -> IdentityUser:
        user = IdentityUser(
            id=uuid4(),
            email=email,
            user_metadata={"first_name": first_name, "last_name": last_name},
            email_confirmed=confirmed,
        )
        self.users[email] = user
        self.passwords[email] = password
        return user

    def confirm(self, email: str) -> IdentityUser:
        user = self.users[email]
        confirmed = IdentityUser(
            id=user.id,
            email=user.email,
            user_metadata=user.user_metadata,
            email_confirmed=True,
        )
        self.users[email] = confirmed
        return confirmed

    def session_for(self, user: IdentityUser) -> str:
        """Issue an access token for ``user`` without a password."""
        return self._issue_session(user).access_token

    def issue_otp(self, email: str) -> str:
        token_hash = secrets.token_hex(16)
        self.otp_hashes[token_hash] = email
        return token_hash

    def issue_oauth_code(self, user: IdentityUser, code_verifier: str) -> str:
        code = secrets.token_urlsafe(12)
        self.oauth_codes[code] = (user, code_challenge_s256(code_verifier))
        return code

    async def sign_in_with_password(self, email: str, password: str) -> IdentitySession:
        self._check_available()
        user = self.users.get(email)
        if user is None or self.passwords.get(email) != password:
            raise IdentityProviderError("Invalid login credentials", 400, "invalid_credentials")
        if not user.email_confirmed:
            raise IdentityProviderError("Email not confirmed", 400, "email_not_confirmed")
        return self._issue_session(user)

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, Any] | None = None
    ) -> SignUpResult:
        self._check_available()
        if email in self.users:
            raise IdentityProviderError("User already registered", 422, "user_already_exists")
        if len(password) < 6:
            raise IdentityProviderError(
                "Password should be at least 6 characters.", 422, "weak_password"
            )
        user = self.register(
            email,
            password,
            first_name=(metadata or {}).get("first_name", ""),
            last_name=(metadata or {}).get("last_name", ""),
            confirmed=False,
        )
        return SignUpResult(user=user)

    async def sign_out(self, access_token: str) -> None:
        self._check_available()
        if self.tokens.pop(access_token, None) is None:
            raise IdentityProviderError("Session not found", 404, "session_not_found")
        self.signed_out.append(access_token)

    async def get_user(self, access_token: str) -> IdentityUser:
        self._check_available()
        user = self.tokens.get(access_token)
        if user is None:
            raise IdentityProviderError("invalid JWT", 401, "bad_jwt")
        return user

    def get_oauth_authorize_url(
        self,
        provider: str,
        redirect_to: str,
        code_challenge: str,
        query_params: dict[str, str] | None = None,
    ) -> str:
        if provider not in SUPPORTED_OAUTH_PROVIDERS:
            raise IdentityProviderError(f"Unsupported OAuth provider: {provider}")
        params = {
            "provider": provider,
            "redirect_to": redirect_to,
            "code_challenge": code_challenge,
            "code_challenge_method": "s256",
            **(query_params or {}),
        }
        return f"{self.base_url}/authorize?{urlencode(params)}"

    async def exchange_code_for_session(
        self, auth_code: str, code_verifier: str
    ) -> IdentitySession:
        self._check_available()
        entry = self.oauth_codes.pop(auth_code, None)
        if entry is None or entry[1] != code_challenge_s256(code_verifier):
            raise IdentityProviderError("invalid flow state", 400, "flow_state_not_found")
        return self._issue_session(entry[0])

    async def verify_otp(self, token_hash: str, otp_type: str) -> IdentitySession:
        self._check_available()
        email = self.otp_hashes.pop(token_hash, None)
        if email is None:
            raise IdentityProviderError("Token has expired or is invalid", 403, "otp_expired")
        return self._issue_session(self.confirm(email))

    async def health(self) -> bool:
        self._check_available()
        return True

    async def close(self) -> None:
        return None


def session_cookie_header(access_token: str) -> dict[str, str]:
    """Request headers carrying an access token cookie."""
    return {"Cookie": f"{access_cookie_name()}={access_token}"}


def set_cookie_headers(response: httpx.Response) -> dict[str, str]:
    """Map cookie name to its raw Set-Cookie header."""
    return {
        header.split("=", 1)[0]: header for header in response.headers.get_list("set-cookie")
    }
