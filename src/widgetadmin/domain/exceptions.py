"""Domain exceptions."""

from uuid import UUID


class WidgetAdminError(Exception):
    """Base exception for WidgetAdmin."""

    pass


class PermissionDenied(WidgetAdminError):
    """Principal does not have permission for the requested action."""

    pass


class SystemRoleProtected(PermissionDenied):
    """Seeded system roles cannot be modified or deleted."""

    pass


class NotFound(WidgetAdminError):
    """Requested entity was not found."""

    def __init__(self, entity: str, key: str) -> None:
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class ValidationError(WidgetAdminError):
    """Validation failed for input data."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class Conflict(WidgetAdminError):
    """Write collides with existing state (e.g. duplicate name)."""

    pass


class RoleInUse(Conflict):
    """Role is still assigned to users and cannot be deleted.

    ``user_count`` is None when the refusal came from the database foreign
    key rather than from counting assignments.
    """

    def __init__(self, role_id: UUID, user_count: int | None = None) -> None:
        message = "Cannot delete a role with assigned users"
        if user_count is not None:
            message = f"{message} ({user_count} assigned)"
        super().__init__(message)
        self.role_id = role_id
        self.user_count = user_count


class PrincipalUnresolved(WidgetAdminError):
    """Current principal is still resolving or could not be resolved."""

    pass
