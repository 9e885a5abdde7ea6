"""Authentication endpoints - form actions and identity provider callbacks."""

from typing import Annotated, Any

from fastapi import APIRouter, Form, Query
from fastapi.responses import RedirectResponse
from starlette.requests import Request

from src.app.api.actions import parse_form, to_response
from src.app.api.dependencies import AuthServiceDep, CurrentIdentity
from src.app.core.rate_limit import limiter
from src.app.core.security import clear_pkce_cookie, read_access_token, read_pkce_verifier
from src.app.schemas.actions import ActionState
from src.app.schemas.auth import LoginForm, SessionRead, SignupForm
from src.app.services.auth_service import SIGNUP_NAME_TOO_LONG

router = APIRouter(prefix="/auth", tags=["auth"])

_ACTION_RESPONSES: dict[int | str, dict[str, Any]] = {
    303: {"description": "Redirect to the next frontend route"},
    400: {"model": ActionState, "description": "Missing or invalid form fields"},
    502: {"model": ActionState, "description": "Identity provider unavailable"},
}


@router.post(
    "/login",
    status_code=303,
    responses={
        **_ACTION_RESPONSES,
        401: {"model": ActionState, "description": "Incorrect email or password"},
    },
)
@limiter.limit("5/minute")
async def login(
    request: Request,
    service: AuthServiceDep,
    email: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
) -> RedirectResponse:
    """Sign in with email and password.

    Redirects to /dashboard when the user is onboarded, otherwise to
    /onboarding.
    """
    result = await service.login(LoginForm(email=email, password=password))
    return to_response(result)


@router.post(
    "/signup",
    status_code=303,
    responses={
        **_ACTION_RESPONSES,
        409: {"model": ActionState, "description": "Email already registered"},
    },
)
@limiter.limit("3/hour")
async def signup(
    request: Request,
    service: AuthServiceDep,
    first_name: Annotated[str | None, Form(alias="first-name")] = None,
    last_name: Annotated[str | None, Form(alias="last-name")] = None,
    email: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
) -> RedirectResponse:
    """Register a new account; the user must confirm their email next."""
    form = parse_form(
        SignupForm,
        SIGNUP_NAME_TOO_LONG,
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=password,
    )
    result = await service.signup(form)
    return to_response(result)


@router.post("/signout", status_code=303)
async def signout(request: Request, service: AuthServiceDep) -> RedirectResponse:
    """End the session and go back to the landing page."""
    result = await service.signout(read_access_token(request))
    return to_response(result)


@router.api_route("/google", methods=["GET", "POST"], status_code=303)
async def sign_in_with_google(service: AuthServiceDep) -> RedirectResponse:
    """Redirect to the identity provider's Google consent screen."""
    return to_response(service.sign_in_with_google())


@router.get("/callback", status_code=303)
async def oauth_callback(
    request: Request,
    service: AuthServiceDep,
    code: Annotated[str | None, Query()] = None,
    next_path: Annotated[str | None, Query(alias="next")] = None,
) -> RedirectResponse:
    """OAuth return point: exchange the code and route the user onwards."""
    result = await service.complete_oauth(code, read_pkce_verifier(request), next_path)
    response = to_response(result)
    clear_pkce_cookie(response)
    return response


@router.get("/confirm", status_code=303)
async def confirm_email(
    service: AuthServiceDep,
    token_hash: Annotated[str | None, Query()] = None,
    otp_type: Annotated[str | None, Query(alias="type")] = None,
    next_path: Annotated[str | None, Query(alias="next")] = None,
) -> RedirectResponse:
    """Target of the confirmation email link."""
    result = await service.confirm_email(token_hash, otp_type, next_path)
    return to_response(result)


@router.get("/session", response_model=SessionRead)
async def get_session_info(identity: CurrentIdentity, service: AuthServiceDep) -> SessionRead:
    """Get the signed-in user and whether onboarding is complete."""
    return await service.describe_session(identity)
