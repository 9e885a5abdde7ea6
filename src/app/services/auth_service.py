"""Authentication service - form actions backed by the identity provider.

Credentials, confirmation emails and OAuth are owned by the provider. This
service validates form input, maps provider errors to user-facing messages
and decides where the browser goes next.
"""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.core.config import get_settings
from src.app.core.identity import IdentityProviderClient, IdentityProviderError, IdentityUser
from src.app.core.logging import bind_user_context, get_logger
from src.app.core.security import code_challenge_s256, generate_code_verifier, safe_next_path
from src.app.repositories import UserRepository
from src.app.schemas.auth import LoginForm, SessionRead, SignupForm
from src.app.services.results import ActionResult, FailureKind, Route

logger = get_logger(__name__)

LOGIN_FIELDS_REQUIRED = "Email and password are required."
LOGIN_FAILED = "Incorrect email or password."
LOGIN_UNAVAILABLE = "We couldn't sign you in right now. Please try again."
SIGNUP_FIELDS_REQUIRED = "All fields are required."
ALREADY_REGISTERED = "This email is already registered. Please try logging in instead."
SIGNUP_NAME_TOO_LONG = "First and last name must be at most 100 characters."

# Provider statuses on logout that mean the session is already gone
_SIGNED_OUT_STATUSES = frozenset({401, 403, 404})


def _is_provider_outage(error: IdentityProviderError) -> bool:
    return error.status_code is None or error.status_code >= 500


def map_signup_error(message: str) -> tuple[str, FailureKind]:
    """Translate a provider signup error into a user-facing message.

    Examples:
        >>> map_signup_error("User already registered")[0]
        'This email is already registered. Please try logging in instead.'
        >>> map_signup_error("Password should be at least 6 characters")[0]
        'Password error: Password should be at least 6 characters'
    """
    lowered = message.lower()
    if "already registered" in lowered:
        return ALREADY_REGISTERED, FailureKind.REJECTED
    if "password" in lowered:
        return f"Password error: {message}", FailureKind.VALIDATION
    if "email" in lowered:
        return f"Email error: {message}", FailureKind.VALIDATION
    return f"Signup failed: {message}", FailureKind.BACKEND


class AuthService:
    """Login, signup, signout and the redirect flows around them."""

    def __init__(self, identity: IdentityProviderClient, user_repo: UserRepository):
        self.identity = identity
        self.user_repo = user_repo

    async def resolve_post_login_redirect(self, user_id: UUID) -> str:
        """Pick the landing route for a freshly authenticated user.

        Fails open: a missing profile row or a lookup error sends the user to
        onboarding rather than blocking the login.
        """
        try:
            onboarded = await self.user_repo.get_onboarded(user_id)
        except SQLAlchemyError as e:
            logger.warning(
                "Onboarding lookup failed, routing to onboarding",
                user_id=str(user_id),
                error=str(e),
            )
            return Route.ONBOARDING

        if onboarded is None:
            logger.warning("No profile row for user, routing to onboarding", user_id=str(user_id))
            return Route.ONBOARDING
        return Route.DASHBOARD if onboarded else Route.ONBOARDING

    async def login(self, form: LoginForm) -> ActionResult:
        if not form.email or not form.password:
            return ActionResult.failure(LOGIN_FIELDS_REQUIRED, FailureKind.VALIDATION)

        try:
            session = await self.identity.sign_in_with_password(form.email, form.password)
        except IdentityProviderError as e:
            if _is_provider_outage(e):
                return ActionResult.failure(LOGIN_UNAVAILABLE, FailureKind.BACKEND)
            logger.info("Login rejected", status_code=e.status_code, code=e.code)
            return ActionResult.failure(LOGIN_FAILED, FailureKind.UNAUTHENTICATED)

        target = await self.resolve_post_login_redirect(session.user.id)
        logger.info("User logged in", user_id=str(session.user.id), redirect_to=target)
        return ActionResult.redirect(target, session=session)

    async def signup(self, form: SignupForm) -> ActionResult:
        """Register an identity carrying first/last name metadata.

        The user must confirm their email before a session is usable, so
        success always lands on the check-email page.
        """
        if not (form.first_name and form.last_name and form.email and form.password):
            return ActionResult.failure(SIGNUP_FIELDS_REQUIRED, FailureKind.VALIDATION)

        try:
            result = await self.identity.sign_up(
                form.email,
                form.password,
                metadata={
                    "first_name": form.first_name,
                    "last_name": form.last_name,
                    "full_name": form.full_name,
                },
            )
        except IdentityProviderError as e:
            message, kind = map_signup_error(e.message)
            logger.info("Signup rejected", status_code=e.status_code, code=e.code)
            return ActionResult.failure(message, kind)

        logger.info(
            "User signed up",
            user_id=str(result.user.id) if result.user else None,
            auto_confirmed=result.session is not None,
        )
        return ActionResult.redirect(Route.CHECK_EMAIL, session=result.session)

    async def signout(self, access_token: str | None) -> ActionResult:
        if access_token:
            try:
                await self.identity.sign_out(access_token)
            except IdentityProviderError as e:
                if e.status_code not in _SIGNED_OUT_STATUSES:
                    logger.error("Signout failed", status_code=e.status_code, error=e.message)
                    return ActionResult.redirect(Route.ERROR)
        return ActionResult.redirect(Route.HOME, clear_session=True)

    def sign_in_with_google(self) -> ActionResult:
        """Start the Google OAuth flow (offline access, forced consent)."""
        settings = get_settings()
        verifier = generate_code_verifier()
        try:
            url = self.identity.get_oauth_authorize_url(
                "google",
                redirect_to=settings.oauth_redirect_url,
                code_challenge=code_challenge_s256(verifier),
                query_params={"access_type": "offline", "prompt": "consent"},
            )
        except IdentityProviderError as e:
            logger.error("Failed to start Google sign-in", error=e.message)
            return ActionResult.redirect(Route.ERROR)
        return ActionResult.redirect(url, pkce_verifier=verifier)

    async def complete_oauth(
        self,
        code: str | None,
        verifier: str | None,
        next_path: str | None = None,
    ) -> ActionResult:
        """Exchange the OAuth callback code for a session.

        Users who still need onboarding always land on /onboarding; onboarded
        users may be sent to a local ``next_path``.
        """
        if not code or not verifier:
            logger.warning("OAuth callback missing code or verifier", has_code=bool(code))
            return ActionResult.redirect(Route.ERROR)
        try:
            session = await self.identity.exchange_code_for_session(code, verifier)
        except IdentityProviderError as e:
            logger.error("OAuth code exchange failed", status_code=e.status_code, error=e.message)
            return ActionResult.redirect(Route.ERROR)

        target = await self.resolve_post_login_redirect(session.user.id)
        if target == Route.DASHBOARD:
            target = safe_next_path(next_path, target)
        logger.info("User logged in via OAuth", user_id=str(session.user.id), redirect_to=target)
        return ActionResult.redirect(target, session=session)

    async def confirm_email(
        self,
        token_hash: str | None,
        otp_type: str | None,
        next_path: str | None = None,
    ) -> ActionResult:
        """Verify an emailed confirmation link and sign the user in."""
        if not token_hash or not otp_type:
            return ActionResult.redirect(Route.ERROR)
        try:
            session = await self.identity.verify_otp(token_hash, otp_type)
        except IdentityProviderError as e:
            logger.warning("Email confirmation failed", status_code=e.status_code, error=e.message)
            return ActionResult.redirect(Route.ERROR)

        logger.info("Email confirmed", user_id=str(session.user.id))
        return ActionResult.redirect(safe_next_path(next_path, Route.ONBOARDING), session=session)

    async def describe_session(self, identity: IdentityUser) -> SessionRead:
        """Summarize the signed-in user and their onboarding state."""
        try:
            user = await self.user_repo.get_by_id(identity.id)
        except SQLAlchemyError as e:
            logger.warning("Profile lookup failed", user_id=str(identity.id), error=str(e))
            user = None

        if user is not None and user.org_id is not None:
            bind_user_context(identity.id, org_id=user.org_id)
        onboarded = bool(user and user.onboarded)
        return SessionRead(
            user_id=identity.id,
            email=identity.email,
            first_name=user.first_name if user and user.first_name else identity.first_name,
            last_name=user.last_name if user and user.last_name else identity.last_name,
            onboarded=onboarded,
            org_id=user.org_id if user else None,
            role=user.role if user else None,
            next=Route.DASHBOARD if onboarded else Route.ONBOARDING,
        )
