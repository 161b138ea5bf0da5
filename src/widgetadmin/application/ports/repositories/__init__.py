"""Repository ports."""

from widgetadmin.application.ports.repositories.role_repository import RoleRepository
from widgetadmin.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "RoleRepository",
    "UserRepository",
]
