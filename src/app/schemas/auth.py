from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class LoginForm(BaseModel):
    email: str | None = None
    password: str | None = None

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str | None) -> str | None:
        return v.strip() if v else v


class SignupForm(BaseModel):
    """Signup fields; emptiness is checked by the action, not here."""

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = None
    password: str | None = None

    @field_validator("first_name", "last_name", "email", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class SessionRead(BaseModel):
    """Current identity plus where the frontend should send it."""

    user_id: UUID
    email: str
    first_name: str
    last_name: str
    onboarded: bool
    org_id: UUID | None = None
    role: str | None = None
    next: str
