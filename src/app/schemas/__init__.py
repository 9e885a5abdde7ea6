from src.app.schemas.actions import ActionState
from src.app.schemas.auth import LoginForm, SessionRead, SignupForm
from src.app.schemas.onboarding import CompanyCreate

__all__ = [
    # Actions
    "ActionState",
    # Auth
    "LoginForm",
    "SessionRead",
    "SignupForm",
    # Onboarding
    "CompanyCreate",
]
