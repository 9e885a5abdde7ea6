"""Random code and PKCE helpers."""

import base64
import secrets
from hashlib import sha256

from src.app.core.security.validators import INVITE_CODE_ALPHABET, INVITE_CODE_LENGTH


def generate_invite_code(length: int = INVITE_CODE_LENGTH) -> str:
    """Generate an invite code drawn uniformly from ``[A-Z0-9]``.

    Uses the OS CSPRNG; uniqueness is enforced by the database, not here.
    """
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


def generate_code_verifier() -> str:
    """Generate a PKCE code verifier (RFC 7636, 43-128 unreserved chars)."""
    return secrets.token_urlsafe(64)


def code_challenge_s256(verifier: str) -> str:
    """Derive the S256 PKCE code challenge for a verifier."""
    digest = sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
