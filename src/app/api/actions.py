"""Turn service action results into HTTP responses.

Successful actions become ``303 See Other`` redirects into the frontend
(or out to the identity provider); failures are raised as
``ActionFailedError`` and rendered as ``{"ok": false, "message": ...}``.
"""

from typing import Any

from fastapi import status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, ValidationError

from src.app.core.config import get_settings
from src.app.core.exceptions import UNEXPECTED_ERROR, ActionFailedError
from src.app.core.security import clear_session_cookies, set_pkce_cookie, set_session_cookies
from src.app.services.results import ActionResult, FailureKind

_STATUS_BY_KIND: dict[FailureKind, int] = {
    FailureKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    FailureKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    FailureKind.REJECTED: status.HTTP_409_CONFLICT,
    FailureKind.BACKEND: status.HTTP_502_BAD_GATEWAY,
}


def parse_form[FormT: BaseModel](model: type[FormT], message: str, **fields: Any) -> FormT:
    """Build a form model, failing the action with ``message`` when a field is out of bounds."""
    try:
        return model(**fields)
    except ValidationError as e:
        raise ActionFailedError(message, status.HTTP_400_BAD_REQUEST) from e


def frontend_url(target: str) -> str:
    """Resolve a route such as ``/dashboard`` against the frontend base URL."""
    if target.startswith("/"):
        return f"{get_settings().app_url}{target}"
    return target


def to_response(result: ActionResult) -> RedirectResponse:
    if not result.ok or not result.redirect_to:
        kind = result.kind or FailureKind.VALIDATION
        raise ActionFailedError(result.message or UNEXPECTED_ERROR, _STATUS_BY_KIND[kind])

    response = RedirectResponse(
        frontend_url(result.redirect_to), status_code=status.HTTP_303_SEE_OTHER
    )
    if result.session is not None:
        set_session_cookies(
            response, result.session.access_token, result.session.refresh_token
        )
    if result.clear_session:
        clear_session_cookies(response)
    if result.pkce_verifier:
        set_pkce_cookie(response, result.pkce_verifier)
    return response
