"""Onboarding endpoints - create a company or join one with an invite code."""

from typing import Annotated

from fastapi import APIRouter, Form
from fastapi.responses import RedirectResponse
from starlette.requests import Request

from src.app.api.actions import parse_form, to_response
from src.app.api.dependencies import OnboardingServiceDep, OptionalIdentity
from src.app.core.rate_limit import limiter
from src.app.schemas.actions import ActionState
from src.app.schemas.onboarding import CompanyCreate
from src.app.services.onboarding_service import COMPANY_FIELDS_TOO_LONG

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.post(
    "/company",
    status_code=303,
    responses={
        303: {"description": "Organization created, redirect to /dashboard"},
        400: {"model": ActionState, "description": "Company name and phone are required"},
        401: {"model": ActionState, "description": "Not signed in"},
        502: {"model": ActionState, "description": "Organization could not be created"},
    },
)
async def create_company(
    identity: OptionalIdentity,
    service: OnboardingServiceDep,
    company_name: Annotated[str | None, Form(alias="companyName")] = None,
    website: Annotated[str | None, Form()] = None,
    address: Annotated[str | None, Form()] = None,
    phone: Annotated[str | None, Form()] = None,
    emergency_phone: Annotated[str | None, Form(alias="emergencyPhone")] = None,
) -> RedirectResponse:
    """Create an organization and make the caller its super admin."""
    company = parse_form(
        CompanyCreate,
        COMPANY_FIELDS_TOO_LONG,
        company_name=company_name,
        website=website,
        address=address,
        phone=phone,
        emergency_phone=emergency_phone,
    )
    result = await service.create_company(identity, company)
    return to_response(result)


@router.post(
    "/join",
    status_code=303,
    responses={
        303: {"description": "Joined, redirect to /dashboard"},
        400: {"model": ActionState, "description": "Malformed invite code"},
        401: {"model": ActionState, "description": "Not signed in"},
        409: {"model": ActionState, "description": "Unknown or expired code, or already a member"},
        502: {"model": ActionState, "description": "Membership could not be recorded"},
    },
)
@limiter.limit("10/minute")
async def join_company(
    request: Request,
    identity: OptionalIdentity,
    service: OnboardingServiceDep,
    invite_code: Annotated[str | None, Form(alias="inviteCode")] = None,
) -> RedirectResponse:
    """Join an organization as an agent using its 8-character invite code."""
    result = await service.join_company(identity, invite_code)
    return to_response(result)
