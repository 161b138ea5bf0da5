"""Role DTOs."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from widgetadmin.domain.entities import Role
from widgetadmin.domain.exceptions import ValidationError
from widgetadmin.domain.value_objects import PermissionSet


@dataclass
class RoleInput:
    """Desired state of a role, as submitted by the role editor.

    ``permissions`` is the complete grant set and must always be sent; an
    explicit empty list is a legal role. ``description`` may be omitted
    (None), in which case an update keeps the stored one.
    """

    name: str
    description: str | None
    permissions: PermissionSet

    @classmethod
    def from_media(cls, body: Any) -> "RoleInput":
        """Parse a JSON body; the name is validated later by the use case."""
        if not isinstance(body, dict):
            raise ValidationError("Request body must be an object")
        if "permissions" not in body:
            raise ValidationError("Permissions are required", field="permissions")
        permissions = body["permissions"]
        if not isinstance(permissions, list):
            raise ValidationError("Permissions must be a list", field="permissions")
        name = body.get("name")
        description = body.get("description")
        if description is not None and not isinstance(description, str):
            raise ValidationError("Description must be a string", field="description")
        return cls(
            name=name if isinstance(name, str) else "",
            description=description,
            permissions=PermissionSet.from_grouped(permissions),
        )


@dataclass
class RoleOutput:
    """Role with the number of users currently assigned to it."""

    id: UUID
    name: str
    description: str
    permissions: PermissionSet
    is_system: bool
    user_count: int

    @classmethod
    def from_role(cls, role: Role, user_count: int) -> "RoleOutput":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            permissions=role.permissions,
            is_system=role.is_system,
            user_count=user_count,
        )

    def to_media(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "permissions": self.permissions.to_grouped(),
            "permission_count": self.permissions.count_grants(),
            "is_system": self.is_system,
            "user_count": self.user_count,
        }
