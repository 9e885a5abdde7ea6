"""User profile and organization membership models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now


class User(SQLModel, table=True):
    """Application-side profile of an identity provider user.

    ``id`` is the identity provider's user id; this table never stores credentials.
    """

    __tablename__ = "users"

    id: UUID = Field(primary_key=True)
    email: str = Field(max_length=255, index=True)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    org_id: UUID | None = Field(default=None, foreign_key="orgs.id", index=True)
    role: str | None = Field(default=None, max_length=50)
    onboarded: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class UserOrganization(SQLModel, table=True):
    """Membership of a user in an organization.

    At most one row per (user, organization); the unique constraint is the
    source of truth for "already a member".
    """

    __tablename__ = "user_organizations"
    __table_args__ = (
        UniqueConstraint("user_id", "organization_id", name="uq_user_organizations_user_org"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    organization_id: UUID = Field(foreign_key="orgs.id", index=True)
    role: str = Field(max_length=50)
    joined_at: datetime = Field(default_factory=utc_now)
