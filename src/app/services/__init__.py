from src.app.services.auth_service import AuthService
from src.app.services.onboarding_service import OnboardingService
from src.app.services.results import ActionResult, FailureKind, Route

__all__ = ["ActionResult", "AuthService", "FailureKind", "OnboardingService", "Route"]
