"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, OrganizationFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_days_ago, utc_now
from tests.factories.organization import OrganizationFactory, OrgJoinCodeFactory
from tests.factories.user import UserFactory, UserOrganizationFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_days_ago",
    "utc_now",
    # Organization
    "OrganizationFactory",
    "OrgJoinCodeFactory",
    # User
    "UserFactory",
    "UserOrganizationFactory",
]
