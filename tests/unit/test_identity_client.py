"""Unit tests for the identity provider client using httpx.MockTransport."""

import json
from uuid import uuid4

import httpx
import pytest

from src.app.core.identity import IdentityProviderClient, IdentityProviderError

pytestmark = pytest.mark.unit

BASE_URL = "https://identity.test/auth/v1"
USER_ID = str(uuid4())


def _user_payload(**overrides) -> dict:
    payload = {
        "id": USER_ID,
        "email": "ada@example.com",
        "email_confirmed_at": "2026-01-01T00:00:00Z",
        "user_metadata": {"first_name": "Ada", "last_name": "Lovelace"},
    }
    payload.update(overrides)
    return payload


def _session_payload() -> dict:
    return {
        "access_token": "access-123",
        "refresh_token": "refresh-456",
        "expires_in": 3600,
        "user": _user_payload(),
    }


def make_client(handler) -> IdentityProviderClient:
    return IdentityProviderClient(
        base_url=f"{BASE_URL}/",
        api_key="anon-key",
        transport=httpx.MockTransport(handler),
    )


async def test_sign_in_with_password_sends_grant_and_key():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_session_payload())

    client = make_client(handler)
    session = await client.sign_in_with_password("ada@example.com", "pw")
    await client.close()

    request = seen[0]
    assert request.url.path == "/auth/v1/token"
    assert request.url.params["grant_type"] == "password"
    assert request.headers["apikey"] == "anon-key"
    assert json.loads(request.content) == {"email": "ada@example.com", "password": "pw"}
    assert session.access_token == "access-123"
    assert session.user.first_name == "Ada"
    assert session.user.email_confirmed


async def test_error_body_becomes_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400, json={"error_code": "invalid_credentials", "msg": "Invalid login credentials"}
        )

    client = make_client(handler)
    with pytest.raises(IdentityProviderError) as exc_info:
        await client.sign_in_with_password("ada@example.com", "wrong")
    await client.close()

    assert exc_info.value.message == "Invalid login credentials"
    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "invalid_credentials"


async def test_oauth_style_error_description():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400, json={"error": "invalid_grant", "error_description": "Invalid flow state"}
        )

    client = make_client(handler)
    with pytest.raises(IdentityProviderError) as exc_info:
        await client.exchange_code_for_session("code", "verifier")
    await client.close()

    assert exc_info.value.message == "Invalid flow state"
    assert exc_info.value.code == "invalid_grant"


async def test_transport_failure_has_no_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(IdentityProviderError) as exc_info:
        await client.health()
    await client.close()

    assert exc_info.value.status_code is None


async def test_sign_up_without_session_returns_user_only():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["data"] == {"first_name": "Ada", "last_name": "Lovelace"}
        return httpx.Response(200, json=_user_payload(email_confirmed_at=None))

    client = make_client(handler)
    result = await client.sign_up(
        "ada@example.com", "secret123", metadata={"first_name": "Ada", "last_name": "Lovelace"}
    )
    await client.close()

    assert result.session is None
    assert result.user is not None
    assert not result.user.email_confirmed


async def test_sign_up_with_autoconfirm_returns_session():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_session_payload())

    client = make_client(handler)
    result = await client.sign_up("ada@example.com", "secret123")
    await client.close()

    assert result.session is not None
    assert result.user == result.session.user


async def test_user_requests_carry_access_token():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/logout"):
            return httpx.Response(204)
        return httpx.Response(200, json=_user_payload())

    client = make_client(handler)
    user = await client.get_user("user-token")
    await client.sign_out("user-token")
    await client.close()

    assert str(user.id) == USER_ID
    assert all(r.headers["Authorization"] == "Bearer user-token" for r in seen)
    assert seen[1].method == "POST"


async def test_verify_otp_posts_token_hash():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/auth/v1/verify"
        assert json.loads(request.content) == {"token_hash": "hash", "type": "email"}
        return httpx.Response(200, json=_session_payload())

    client = make_client(handler)
    session = await client.verify_otp("hash", "email")
    await client.close()

    assert session.refresh_token == "refresh-456"


def test_authorize_url_includes_pkce_and_extra_params():
    client = make_client(lambda request: httpx.Response(200))

    url = client.get_oauth_authorize_url(
        "google",
        redirect_to="http://localhost:8000/api/v1/auth/callback",
        code_challenge="challenge",
        query_params={"access_type": "offline", "prompt": "consent"},
    )

    parsed = httpx.URL(url)
    assert str(parsed).startswith(f"{BASE_URL}/authorize?")
    assert parsed.params["code_challenge_method"] == "s256"
    assert parsed.params["access_type"] == "offline"
    assert parsed.params["prompt"] == "consent"


def test_unsupported_oauth_provider():
    client = make_client(lambda request: httpx.Response(200))

    with pytest.raises(IdentityProviderError):
        client.get_oauth_authorize_url("myspace", redirect_to="x", code_challenge="y")
