"""User entity - console account holding at most one role."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from widgetadmin.domain.value_objects import UserStatus


@dataclass
class User:
    """Console user. ``subject`` is the identity provider's subject claim."""

    id: UUID
    subject: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    role_id: UUID | None = None
    status: UserStatus = UserStatus.ACTIVE
    is_admin: bool = False
    last_active_at: datetime | None = None
