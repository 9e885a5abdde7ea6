"""Property-based tests for invite code generation and validation using hypothesis."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.app.core.security import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    generate_invite_code,
    normalize_invite_code,
    safe_next_path,
)

pytestmark = pytest.mark.unit

valid_code = st.text(alphabet=INVITE_CODE_ALPHABET, min_size=8, max_size=8)


@settings(max_examples=200)
@given(st.integers())
def test_generated_codes_are_well_formed(_: int):
    """Generated codes are 8 uppercase alphanumerics."""
    code = generate_invite_code()
    assert len(code) == INVITE_CODE_LENGTH
    assert set(code) <= set(INVITE_CODE_ALPHABET)


def test_generated_codes_vary():
    """Consecutive codes are not all the same."""
    assert len({generate_invite_code() for _ in range(50)}) > 1


@given(code=valid_code, padding=st.sampled_from(["", " ", "  ", "\t"]))
def test_normalize_accepts_padded_lowercase(code: str, padding: str):
    """Lowercase entry with surrounding whitespace normalizes to the stored code."""
    assert normalize_invite_code(f"{padding}{code.lower()}{padding}") == code


@given(raw=st.text(alphabet=INVITE_CODE_ALPHABET, max_size=20).filter(lambda s: len(s) != 8))
def test_normalize_rejects_wrong_length(raw: str):
    with pytest.raises(ValueError):
        normalize_invite_code(raw)


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_normalize_rejects_missing(raw):
    with pytest.raises(ValueError):
        normalize_invite_code(raw)


def test_normalize_keeps_unknown_characters():
    """Only the length is enforced; the lookup decides validity."""
    assert normalize_invite_code("ab-cd_ef") == "AB-CD_EF"


@pytest.mark.parametrize(
    ("next_path", "expected"),
    [
        ("/dashboard", "/dashboard"),
        ("/onboarding?step=2", "/onboarding?step=2"),
        (None, "/onboarding"),
        ("", "/onboarding"),
        ("dashboard", "/onboarding"),
        ("//evil.example", "/onboarding"),
        ("https://evil.example", "/onboarding"),
        ("/\\evil.example", "/onboarding"),
    ],
)
def test_safe_next_path(next_path, expected):
    assert safe_next_path(next_path, "/onboarding") == expected
