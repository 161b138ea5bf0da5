"""User DTOs."""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from widgetadmin.domain.entities import Role, User
from widgetadmin.domain.exceptions import ValidationError
from widgetadmin.domain.value_objects import UserStatus

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _parse_uuid(value: Any, field: str) -> UUID | None:
    if value in (None, ""):
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field}", field=field) from None


@dataclass
class UserInput:
    """Desired state of a user (subject is only used on create)."""

    subject: str
    name: str
    email: str
    role_id: UUID | None
    status: UserStatus
    is_admin: bool

    @classmethod
    def from_media(cls, body: Any) -> "UserInput":
        if not isinstance(body, dict):
            raise ValidationError("Request body must be an object")
        name = _text(body.get("name"))
        if not name:
            raise ValidationError("Name is required", field="name")
        email = _text(body.get("email")).lower()
        if not _EMAIL_RE.match(email):
            raise ValidationError("A valid email is required", field="email")
        try:
            status = UserStatus(body.get("status") or UserStatus.ACTIVE)
        except ValueError:
            raise ValidationError("Unknown status", field="status") from None
        is_admin = body.get("is_admin", False)
        if not isinstance(is_admin, bool):
            raise ValidationError("is_admin must be a boolean", field="is_admin")
        return cls(
            subject=_text(body.get("subject")) or email,
            name=name,
            email=email,
            role_id=_parse_uuid(body.get("role_id"), "role_id"),
            status=status,
            is_admin=is_admin,
        )


@dataclass
class UserOutput:
    """User with the resolved role."""

    id: UUID
    subject: str
    name: str
    email: str
    status: UserStatus
    is_admin: bool
    role: Role | None
    created_at: datetime
    updated_at: datetime
    last_active_at: datetime | None

    @classmethod
    def from_user(cls, user: User, role: Role | None) -> "UserOutput":
        return cls(
            id=user.id,
            subject=user.subject,
            name=user.name,
            email=user.email,
            status=user.status,
            is_admin=user.is_admin,
            role=role,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_active_at=user.last_active_at,
        )

    def to_media(self) -> dict[str, Any]:
        role = None
        if self.role is not None:
            role = {
                "id": str(self.role.id),
                "name": self.role.name,
                "description": self.role.description,
                "permissions": self.role.permissions.to_grouped(),
            }
        return {
            "id": str(self.id),
            "subject": self.subject,
            "name": self.name,
            "email": self.email,
            "status": self.status.value,
            "is_admin": self.is_admin,
            "role": role,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "last_active_at": (
                self.last_active_at.isoformat() if self.last_active_at else None
            ),
        }
