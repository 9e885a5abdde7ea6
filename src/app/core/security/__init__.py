"""Security utilities - codes, cookies, headers and validators.

Re-exports all security-related functions for convenience.
"""

from src.app.core.security.cookies import (
    clear_pkce_cookie,
    clear_session_cookies,
    read_access_token,
    read_pkce_verifier,
    set_pkce_cookie,
    set_session_cookies,
)
from src.app.core.security.crypto import (
    code_challenge_s256,
    generate_code_verifier,
    generate_invite_code,
)
from src.app.core.security.headers import SecurityHeadersMiddleware
from src.app.core.security.validators import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    normalize_invite_code,
    safe_next_path,
)

__all__ = [
    # Cookies
    "clear_pkce_cookie",
    "clear_session_cookies",
    "read_access_token",
    "read_pkce_verifier",
    "set_pkce_cookie",
    "set_session_cookies",
    # Crypto
    "code_challenge_s256",
    "generate_code_verifier",
    "generate_invite_code",
    # Headers
    "SecurityHeadersMiddleware",
    # Validators
    "INVITE_CODE_ALPHABET",
    "INVITE_CODE_LENGTH",
    "normalize_invite_code",
    "safe_next_path",
]
