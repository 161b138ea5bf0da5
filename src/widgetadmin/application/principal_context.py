"""Principal context - resolves who is asking and answers authorization predicates.

The context fetches the principal once and then answers every check with the
pure evaluator. Until resolution succeeds every predicate denies, but
``decide`` reports PENDING rather than DENY so callers can tell "still
checking" (or "could not check") apart from "checked and denied".
"""

from enum import StrEnum

import structlog

from widgetadmin.application.ports import PrincipalFetcher
from widgetadmin.domain.entities import Principal
from widgetadmin.domain.exceptions import PermissionDenied, PrincipalUnresolved
from widgetadmin.domain.services import authorize
from widgetadmin.domain.value_objects import DEFAULT_CATALOG, Action, PermissionCatalog, Resource

logger = structlog.get_logger(__name__)


class ResolutionState(StrEnum):
    """Where principal resolution stands."""

    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


class Decision(StrEnum):
    """Outcome of a check: allow, deny, or not yet known."""

    ALLOW = "allow"
    DENY = "deny"
    PENDING = "pending"


class _FixedFetcher:
    """Fetcher that always answers with one known principal."""

    def __init__(self, principal: Principal) -> None:
        self._principal = principal

    async def fetch(self, subject: str) -> Principal:
        return self._principal


class PrincipalContext:
    """Per-session authorization surface built on authorize()."""

    def __init__(self, fetcher: PrincipalFetcher, subject: str) -> None:
        self._fetcher = fetcher
        self._subject = subject
        self._principal: Principal | None = None
        self._state = ResolutionState.PENDING
        self._error: Exception | None = None

    @classmethod
    def resolved(cls, principal: Principal) -> "PrincipalContext":
        """Context for an already known principal; refresh() returns it again."""
        ctx = cls(fetcher=_FixedFetcher(principal), subject=principal.subject)
        ctx._principal = principal
        ctx._state = ResolutionState.RESOLVED
        return ctx

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def error(self) -> Exception | None:
        return self._error

    @property
    def is_admin(self) -> bool:
        return self._principal is not None and self._principal.is_admin

    async def resolve(self) -> ResolutionState:
        """Fetch the principal once; later calls return the settled state."""
        if self._state is ResolutionState.PENDING:
            await self._fetch()
        return self._state

    async def refresh(self) -> ResolutionState:
        """Re-fetch after a role change."""
        self._principal = None
        self._state = ResolutionState.PENDING
        self._error = None
        await self._fetch()
        return self._state

    async def _fetch(self) -> None:
        try:
            principal = await self._fetcher.fetch(self._subject)
        except Exception as e:
            self._principal = None
            self._error = e
            self._state = ResolutionState.FAILED
            logger.warning(
                "principal_resolution_failed",
                subject=self._subject,
                error=repr(e),
            )
            return
        self._principal = principal
        self._state = ResolutionState.RESOLVED
        logger.debug(
            "principal_resolved",
            subject=self._subject,
            role=principal.role.name if principal.role else None,
            is_admin=principal.is_admin,
        )

    def decide(self, resource: Resource, action: Action) -> Decision:
        if self._state is not ResolutionState.RESOLVED:
            return Decision.PENDING
        if authorize(self._principal, resource, action):
            return Decision.ALLOW
        return Decision.DENY

    def has_permission(self, resource: Resource, action: Action) -> bool:
        return self.decide(resource, action) is Decision.ALLOW

    def can_view(self, resource: Resource) -> bool:
        return self.has_permission(resource, Action.VIEW)

    def can_create(self, resource: Resource) -> bool:
        return self.has_permission(resource, Action.CREATE)

    def can_edit(self, resource: Resource) -> bool:
        return self.has_permission(resource, Action.EDIT)

    def can_delete(self, resource: Resource) -> bool:
        return self.has_permission(resource, Action.DELETE)

    def can_configure(self, resource: Resource) -> bool:
        return self.has_permission(resource, Action.CONFIGURE)

    def can_export(self, resource: Resource) -> bool:
        return self.has_permission(resource, Action.EXPORT)

    def capabilities(
        self, catalog: PermissionCatalog = DEFAULT_CATALOG
    ) -> dict[str, list[str]]:
        """Allowed actions per resource; empty lists until resolved."""
        return {
            resource.value: [
                action.value
                for action in catalog.actions
                if self.has_permission(resource, action)
            ]
            for resource in catalog.resources
        }

    def require(self, resource: Resource, action: Action) -> Principal:
        """Final gate before acting: the resolved principal, or raise."""
        decision = self.decide(resource, action)
        if decision is Decision.PENDING:
            raise PrincipalUnresolved(
                f"Principal for {self._subject} is {self._state.value}"
            )
        if decision is Decision.DENY:
            raise PermissionDenied(f"Not allowed to {action.value} {resource.value}")
        return self._principal  # type: ignore[return-value]
