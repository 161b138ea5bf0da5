"""Role entity for RBAC."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from widgetadmin.domain.exceptions import ValidationError
from widgetadmin.domain.value_objects import PermissionSet

ROLE_NAME_MAX_LENGTH = 255


@dataclass
class Role:
    """Role - named bundle of permissions, replaced as a whole on edit."""

    id: UUID
    name: str
    description: str
    permissions: PermissionSet = field(default_factory=PermissionSet)
    is_system: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


def validate_role_name(name: str | None) -> str:
    """Return the stripped role name or raise ValidationError."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Role name is required", field="name")
    if len(cleaned) > ROLE_NAME_MAX_LENGTH:
        raise ValidationError(
            f"Role name must be at most {ROLE_NAME_MAX_LENGTH} characters",
            field="name",
        )
    return cleaned
