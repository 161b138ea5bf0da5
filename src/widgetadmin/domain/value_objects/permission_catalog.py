"""Closed catalog of resources and actions subject to access control."""

from dataclasses import dataclass
from enum import StrEnum


class Resource(StrEnum):
    """Areas of the admin console."""

    DASHBOARD = "dashboard"
    WIDGET = "widget"
    MODELS = "models"
    PROMPTS = "prompts"
    ANALYTICS = "analytics"
    SETTINGS = "settings"
    USERS = "users"


class Action(StrEnum):
    """Operations performable on a resource."""

    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    EXPORT = "export"
    CONFIGURE = "configure"


def all_resources() -> tuple[Resource, ...]:
    """Every resource, in declaration order."""
    return tuple(Resource)


def all_actions() -> tuple[Action, ...]:
    """Every action, in declaration order."""
    return tuple(Action)


@dataclass(frozen=True)
class PermissionCatalog:
    """Resources and actions that bulk edits range over."""

    resources: tuple[Resource, ...]
    actions: tuple[Action, ...]


DEFAULT_CATALOG = PermissionCatalog(resources=all_resources(), actions=all_actions())
