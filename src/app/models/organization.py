"""Organization and join code models."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now


class Organization(SQLModel, table=True):
    """Organization (company) created during onboarding."""

    __tablename__ = "orgs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200)
    website: str | None = Field(default=None, max_length=500)
    org_address: str | None = Field(default=None, max_length=500)
    phone: str = Field(max_length=50)
    meta: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False),
    )
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def emergency_phone(self) -> str | None:
        return (self.meta or {}).get("emergency_phone")


class OrgJoinCode(SQLModel, table=True):
    """Shareable invite code granting membership in an organization."""

    __tablename__ = "org_join_codes"
    __table_args__ = (UniqueConstraint("code", name="uq_org_join_codes_code"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    org_id: UUID = Field(foreign_key="orgs.id", index=True)
    code: str = Field(max_length=8)
    expires_at: datetime
    created_by: UUID = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)

    def is_expired(self, now: datetime | None = None) -> bool:
        """True when ``expires_at`` lies in the past."""
        return self.expires_at < (now or utc_now())
