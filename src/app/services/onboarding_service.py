"""Onboarding service - create or join an organization.

Both actions run as one database transaction: either every row lands or none
does. The profile row is created lazily from the identity when it is missing.
"""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.config import get_settings
from src.app.core.identity import IdentityUser
from src.app.core.logging import bind_user_context, get_logger
from src.app.core.security import generate_invite_code, normalize_invite_code
from src.app.models import Organization, UserRole
from src.app.models.base import utc_days_from_now
from src.app.repositories import (
    JoinCodeRepository,
    MembershipRepository,
    OrganizationRepository,
    UserRepository,
)
from src.app.schemas.onboarding import CompanyCreate
from src.app.services.results import ActionResult, FailureKind, Route

logger = get_logger(__name__)

CREATE_REQUIRES_LOGIN = "You must be logged in to create a company"
JOIN_REQUIRES_LOGIN = "You must be logged in to join a company"
COMPANY_FIELDS_REQUIRED = "Company name and phone are required"
COMPANY_FIELDS_TOO_LONG = "Company details are too long. Please shorten them and try again."
CREATE_FAILED = "Failed to create organization. Please try again."
INVALID_CODE_FORMAT = "Please enter a valid 8-character invite code"
INVALID_CODE = "Invalid invite code. Please check and try again."
EXPIRED_CODE = "This invite code has expired. Please request a new one."
ORG_NOT_FOUND = "Organization not found. Please try again."
ALREADY_MEMBER = "You are already a member of this organization"
JOIN_FAILED = "Failed to join organization. Please try again."


def _is_join_code_conflict(error: IntegrityError) -> bool:
    text = str(error).lower()
    return "uq_org_join_codes_code" in text or "org_join_codes.code" in text


def _is_membership_conflict(error: IntegrityError) -> bool:
    text = str(error).lower()
    return "uq_user_organizations_user_org" in text or "user_organizations.user_id" in text


class OnboardingService:
    """Service for attaching a signed-in user to an organization."""

    def __init__(
        self,
        user_repo: UserRepository,
        org_repo: OrganizationRepository,
        join_code_repo: JoinCodeRepository,
        membership_repo: MembershipRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.org_repo = org_repo
        self.join_code_repo = join_code_repo
        self.membership_repo = membership_repo
        self.session = session

    async def create_company(
        self, identity: IdentityUser | None, company: CompanyCreate
    ) -> ActionResult:
        """Create an organization with the caller as its super admin.

        Inserts the organization, updates the caller's profile, issues a join
        code and records the membership, then redirects to the dashboard.
        """
        if identity is None:
            return ActionResult.failure(CREATE_REQUIRES_LOGIN, FailureKind.UNAUTHENTICATED)
        if not company.company_name or not company.phone:
            return ActionResult.failure(COMPANY_FIELDS_REQUIRED, FailureKind.VALIDATION)

        try:
            org = await self._provision_with_fresh_code(identity, company)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to create organization",
                user_id=str(identity.id),
                error=str(e),
            )
            return ActionResult.failure(CREATE_FAILED, FailureKind.BACKEND)

        bind_user_context(identity.id, org_id=org.id)
        logger.info("Organization created", user_id=str(identity.id))
        return ActionResult.redirect(Route.DASHBOARD)

    async def _provision_with_fresh_code(
        self, identity: IdentityUser, company: CompanyCreate
    ) -> Organization:
        """Run the create-company transaction, retrying on join code collisions.

        A colliding code rolls the whole unit back, so each attempt starts
        from a clean transaction with a new code.
        """
        attempts = get_settings().invite_code_max_attempts
        attempt = 1
        while True:
            try:
                return await self._provision_company(identity, company, generate_invite_code())
            except IntegrityError as e:
                await self.session.rollback()
                if attempt >= attempts or not _is_join_code_conflict(e):
                    raise
                logger.warning(
                    "Join code collision, retrying",
                    user_id=str(identity.id),
                    attempt=attempt,
                )
                attempt += 1

    async def _provision_company(
        self, identity: IdentityUser, company: CompanyCreate, code: str
    ) -> Organization:
        settings = get_settings()
        role = UserRole.SUPER_ADMIN.value

        org = await self.org_repo.create(
            name=company.company_name,
            phone=company.phone,
            website=company.website,
            address=company.address,
            emergency_phone=company.emergency_phone,
        )
        user = await self.user_repo.get_or_create(
            identity.id, identity.email, identity.first_name, identity.last_name
        )
        await self.user_repo.assign_organization(
            user, org.id, role, identity.first_name, identity.last_name
        )
        await self.join_code_repo.create(
            org_id=org.id,
            code=code,
            expires_at=utc_days_from_now(settings.invite_code_expire_days),
            created_by=identity.id,
        )
        await self.membership_repo.create_membership(identity.id, org.id, role)

        await self.session.commit()
        return org

    async def join_company(
        self, identity: IdentityUser | None, invite_code: str | None
    ) -> ActionResult:
        """Join an existing organization as an agent using an invite code."""
        if identity is None:
            return ActionResult.failure(JOIN_REQUIRES_LOGIN, FailureKind.UNAUTHENTICATED)

        try:
            code = normalize_invite_code(invite_code)
        except ValueError:
            return ActionResult.failure(INVALID_CODE_FORMAT, FailureKind.VALIDATION)

        role = UserRole.AGENT.value
        try:
            join_code = await self.join_code_repo.get_by_code(code)
            if join_code is None:
                return ActionResult.failure(INVALID_CODE, FailureKind.REJECTED)
            if join_code.is_expired():
                return ActionResult.failure(EXPIRED_CODE, FailureKind.REJECTED)

            org = await self.org_repo.get_by_id(join_code.org_id)
            if org is None:
                return ActionResult.failure(ORG_NOT_FOUND, FailureKind.REJECTED)

            if await self.membership_repo.get_membership(identity.id, org.id) is not None:
                return ActionResult.failure(ALREADY_MEMBER, FailureKind.REJECTED)

            user = await self.user_repo.get_or_create(
                identity.id, identity.email, identity.first_name, identity.last_name
            )
            await self.user_repo.assign_organization(
                user, org.id, role, identity.first_name, identity.last_name
            )
            await self.membership_repo.create_membership(identity.id, org.id, role)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            # Unique (user_id, organization_id) catches concurrent joins
            if _is_membership_conflict(e):
                return ActionResult.failure(ALREADY_MEMBER, FailureKind.REJECTED)
            logger.error("Failed to join organization", user_id=str(identity.id), error=str(e))
            return ActionResult.failure(JOIN_FAILED, FailureKind.BACKEND)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to join organization", user_id=str(identity.id), error=str(e))
            return ActionResult.failure(JOIN_FAILED, FailureKind.BACKEND)

        bind_user_context(identity.id, org_id=org.id)
        logger.info("User joined organization", user_id=str(identity.id))
        return ActionResult.redirect(Route.DASHBOARD)
