"""User account status."""

from enum import StrEnum


class UserStatus(StrEnum):
    """Lifecycle status of a console user."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"
