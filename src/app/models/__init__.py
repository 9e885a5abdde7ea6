"""Model exports.

Import from here: `from src.app.models import User, Organization`
"""

from src.app.models.enums import UserRole
from src.app.models.organization import Organization, OrgJoinCode
from src.app.models.user import User, UserOrganization

__all__ = [
    # Enums
    "UserRole",
    # Models
    "Organization",
    "OrgJoinCode",
    "User",
    "UserOrganization",
]
