"""Uniform result type for form actions."""

from dataclasses import dataclass
from enum import Enum

from src.app.core.identity import IdentitySession


class Route:
    """Frontend routes used as redirect targets."""

    HOME = "/"
    CHECK_EMAIL = "/auth/check-email"
    ONBOARDING = "/onboarding"
    DASHBOARD = "/dashboard"
    ERROR = "/error"


class FailureKind(str, Enum):
    """Why an action failed; decides the HTTP status of the failure body."""

    VALIDATION = "validation"  # missing or malformed input
    UNAUTHENTICATED = "unauthenticated"  # no session, bad credentials
    REJECTED = "rejected"  # business rule: expired code, already a member, ...
    BACKEND = "backend"  # provider or store failure


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a form action.

    Successful actions carry a redirect target (a frontend route or an
    absolute provider URL). Failed actions carry a user-facing message.
    """

    ok: bool
    message: str | None = None
    kind: FailureKind | None = None
    redirect_to: str | None = None
    session: IdentitySession | None = None  # tokens to hand to the browser
    clear_session: bool = False
    pkce_verifier: str | None = None

    @classmethod
    def redirect(
        cls,
        target: str,
        session: IdentitySession | None = None,
        clear_session: bool = False,
        pkce_verifier: str | None = None,
    ) -> "ActionResult":
        return cls(
            ok=True,
            redirect_to=target,
            session=session,
            clear_session=clear_session,
            pkce_verifier=pkce_verifier,
        )

    @classmethod
    def failure(cls, message: str, kind: FailureKind) -> "ActionResult":
        return cls(ok=False, message=message, kind=kind)
