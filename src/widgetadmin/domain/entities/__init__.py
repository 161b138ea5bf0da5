"""Domain entities."""

from widgetadmin.domain.entities.principal import Principal
from widgetadmin.domain.entities.role import Role, validate_role_name
from widgetadmin.domain.entities.user import User

__all__ = [
    "Principal",
    "Role",
    "User",
    "validate_role_name",
]
