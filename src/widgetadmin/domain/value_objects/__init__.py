"""Domain value objects."""

from widgetadmin.domain.value_objects.permission_catalog import (
    DEFAULT_CATALOG,
    Action,
    PermissionCatalog,
    Resource,
    all_actions,
    all_resources,
)
from widgetadmin.domain.value_objects.permission_set import (
    PermissionSet,
    parse_action,
    parse_resource,
)
from widgetadmin.domain.value_objects.user_status import UserStatus

__all__ = [
    "DEFAULT_CATALOG",
    "Action",
    "PermissionCatalog",
    "PermissionSet",
    "Resource",
    "UserStatus",
    "all_actions",
    "all_resources",
    "parse_action",
    "parse_resource",
]
