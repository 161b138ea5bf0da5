"""Authorization evaluator - pure allow/deny decision."""

import structlog

from widgetadmin.domain.entities import Principal
from widgetadmin.domain.exceptions import PermissionDenied
from widgetadmin.domain.value_objects import Action, Resource

logger = structlog.get_logger(__name__)


def authorize(principal: Principal | None, resource: Resource, action: Action) -> bool:
    """Decide whether the principal may perform action on resource.

    The admin flag short-circuits before any role lookup. A principal
    without a role is authorized for nothing. Grants are purely additive.
    """
    if principal is None:
        return False
    if principal.is_admin:
        return True
    if principal.role is None:
        return False
    return principal.role.permissions.has_permission(resource, action)


def ensure_authorized(principal: Principal | None, resource: Resource, action: Action) -> None:
    """Raise PermissionDenied unless authorize() allows."""
    if not authorize(principal, resource, action):
        logger.debug(
            "authorization_denied",
            subject=principal.subject if principal else None,
            resource=resource.value,
            action=action.value,
        )
        raise PermissionDenied(f"Not allowed to {action.value} {resource.value}")
