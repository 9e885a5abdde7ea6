"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Role of a user within their organization."""

    SUPER_ADMIN = "super_admin"
    AGENT = "agent"
