"""Permission set - resource to granted actions mapping with bulk-edit operations.

A PermissionSet never stores a resource with an empty action set: a resource
without grants is simply absent. Every mutator returns a new set and leaves
the receiver untouched, so edits compose by sequential application.

The "select all" predicates (``has_all_actions_for_resource`` and
``has_action_across_all_resources``) are recomputed from the grants on every
call; there is no stored checkbox state to drift out of sync.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from widgetadmin.domain.exceptions import ValidationError
from widgetadmin.domain.value_objects.permission_catalog import (
    DEFAULT_CATALOG,
    Action,
    PermissionCatalog,
    Resource,
)


class PermissionSet:
    """Immutable mapping of Resource -> frozenset[Action]."""

    __slots__ = ("_grants",)

    def __init__(
        self, grants: Mapping[Resource, Iterable[Action]] | None = None
    ) -> None:
        normalized: dict[Resource, frozenset[Action]] = {}
        for resource, actions in (grants or {}).items():
            frozen = frozenset(Action(a) for a in actions)
            if frozen:
                normalized[Resource(resource)] = frozen
        self._grants = normalized

    @classmethod
    def empty(cls) -> "PermissionSet":
        return cls()

    @classmethod
    def from_grants(cls, grants: Iterable[tuple[Resource, Action]]) -> "PermissionSet":
        """Build from (resource, action) pairs."""
        collected: dict[Resource, set[Action]] = {}
        for resource, action in grants:
            collected.setdefault(resource, set()).add(action)
        return cls(collected)

    @classmethod
    def from_grouped(cls, items: Iterable[Mapping[str, Any]]) -> "PermissionSet":
        """Parse the grouped wire form ``[{"resource": ..., "actions": [...]}]``.

        Duplicate resources are merged; entries with no actions are dropped.
        Unknown resources or actions raise ValidationError.
        """
        collected: dict[Resource, set[Action]] = {}
        for item in items:
            if not isinstance(item, Mapping):
                raise ValidationError("Permission entry must be an object", field="permissions")
            resource = parse_resource(item.get("resource"))
            actions = item.get("actions")
            if actions is None:
                actions = []
            if isinstance(actions, str) or not isinstance(actions, Iterable):
                raise ValidationError("Permission actions must be a list", field="permissions")
            bucket = collected.setdefault(resource, set())
            bucket.update(parse_action(a) for a in actions)
        return cls(collected)

    def to_grouped(self) -> list[dict[str, Any]]:
        """Grouped wire form, resources and actions in catalog order."""
        return [
            {
                "resource": resource.value,
                "actions": [a.value for a in Action if a in self._grants[resource]],
            }
            for resource in Resource
            if resource in self._grants
        ]

    def has_permission(self, resource: Resource, action: Action) -> bool:
        """True iff the action is granted on the resource."""
        actions = self._grants.get(resource)
        return actions is not None and action in actions

    def toggle_action(self, resource: Resource, action: Action) -> "PermissionSet":
        """Revoke the grant if present, otherwise add it."""
        grants = dict(self._grants)
        current = grants.get(resource, frozenset())
        if action in current:
            remaining = current - {action}
            if remaining:
                grants[resource] = remaining
            else:
                del grants[resource]
        else:
            grants[resource] = current | {action}
        return PermissionSet(grants)

    def has_all_actions_for_resource(
        self, resource: Resource, catalog: PermissionCatalog = DEFAULT_CATALOG
    ) -> bool:
        """Row "select all" state."""
        actions = self._grants.get(resource, frozenset())
        return all(a in actions for a in catalog.actions)

    def set_all_actions_for_resource(
        self,
        resource: Resource,
        grant: bool,
        catalog: PermissionCatalog = DEFAULT_CATALOG,
    ) -> "PermissionSet":
        """Grant every catalog action on the resource, or drop the resource."""
        grants = dict(self._grants)
        if grant:
            grants[resource] = grants.get(resource, frozenset()) | frozenset(catalog.actions)
        else:
            grants.pop(resource, None)
        return PermissionSet(grants)

    def has_action_across_all_resources(
        self, action: Action, catalog: PermissionCatalog = DEFAULT_CATALOG
    ) -> bool:
        """Column "select all" state."""
        return all(self.has_permission(r, action) for r in catalog.resources)

    def set_action_across_all_resources(
        self,
        action: Action,
        grant: bool,
        catalog: PermissionCatalog = DEFAULT_CATALOG,
    ) -> "PermissionSet":
        """Grant or revoke one action on every catalog resource."""
        grants = dict(self._grants)
        for resource in catalog.resources:
            current = grants.get(resource, frozenset())
            if grant:
                grants[resource] = current | {action}
            elif action in current:
                remaining = current - {action}
                if remaining:
                    grants[resource] = remaining
                else:
                    del grants[resource]
        return PermissionSet(grants)

    def count_grants(self) -> int:
        """Total (resource, action) pairs, for display."""
        return sum(len(actions) for actions in self._grants.values())

    def actions_for(self, resource: Resource) -> frozenset[Action]:
        return self._grants.get(resource, frozenset())

    def resources(self) -> frozenset[Resource]:
        return frozenset(self._grants)

    def grants(self) -> Iterator[tuple[Resource, Action]]:
        """Iterate (resource, action) pairs in catalog order."""
        for resource in Resource:
            actions = self._grants.get(resource)
            if not actions:
                continue
            for action in Action:
                if action in actions:
                    yield resource, action

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._grants)

    def __len__(self) -> int:
        return len(self._grants)

    def __contains__(self, resource: object) -> bool:
        return resource in self._grants

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionSet):
            return NotImplemented
        return self._grants == other._grants

    def __hash__(self) -> int:
        return hash(frozenset(self._grants.items()))

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{r.value}: {sorted(a.value for a in actions)}"
            for r, actions in self._grants.items()
        )
        return f"PermissionSet({{{inner}}})"


def parse_resource(value: object) -> Resource:
    """Resource from a boundary string; ValidationError if outside the catalog."""
    try:
        return Resource(value)
    except ValueError:
        raise ValidationError(f"Unknown resource: {value}", field="permissions") from None


def parse_action(value: object) -> Action:
    """Action from a boundary string; ValidationError if outside the catalog."""
    try:
        return Action(value)
    except ValueError:
        raise ValidationError(f"Unknown action: {value}", field="permissions") from None
