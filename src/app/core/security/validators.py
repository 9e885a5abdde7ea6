"""Security validators."""

import string
from typing import Final

INVITE_CODE_LENGTH: Final[int] = 8
INVITE_CODE_ALPHABET: Final[str] = string.ascii_uppercase + string.digits


def normalize_invite_code(raw: str | None) -> str:
    """Normalize a user-entered invite code for lookup.

    Surrounding whitespace is dropped and letters are uppercased. Only the
    length is enforced here; unknown characters simply never match a stored
    code, so the caller reports them as an invalid code.

    Raises:
        ValueError: If the code is missing or not exactly INVITE_CODE_LENGTH long.

    Examples:
        >>> normalize_invite_code(" ab12cd34 ")
        'AB12CD34'
        >>> normalize_invite_code("short")  # Raises ValueError
    """
    code = (raw or "").strip().upper()
    if len(code) != INVITE_CODE_LENGTH:
        raise ValueError(f"Invite code must be exactly {INVITE_CODE_LENGTH} characters")
    return code


def safe_next_path(next_path: str | None, default: str) -> str:
    """Return ``next_path`` only when it is a local absolute path.

    Blocks open redirects such as ``//evil.example`` or ``https://...``.
    """
    if not next_path or not next_path.startswith("/") or next_path.startswith("//"):
        return default
    if "\\" in next_path:
        return default
    return next_path
