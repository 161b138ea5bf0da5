"""Create role use case."""

from datetime import UTC, datetime
from uuid import uuid4

import structlog

from widgetadmin.application.dto.role_dto import RoleInput, RoleOutput
from widgetadmin.domain.entities import Principal, Role, validate_role_name
from widgetadmin.domain.exceptions import Conflict
from widgetadmin.domain.services import ensure_authorized
from widgetadmin.domain.value_objects import Action, Resource

logger = structlog.get_logger(__name__)


class CreateRoleUseCase:
    """Create a role from a complete name/description/permissions submission."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Principal | None, data: RoleInput) -> RoleOutput:
        """Validate locally, re-check authorization, then persist."""
        name = validate_role_name(data.name)
        ensure_authorized(actor, Resource.USERS, Action.CREATE)

        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise Conflict(f"Role name already exists: {name}")

            now = datetime.now(UTC)
            role = Role(
                id=uuid4(),
                name=name,
                description=(data.description or "").strip(),
                permissions=data.permissions,
                is_system=False,
                created_at=now,
                updated_at=now,
            )
            stored = await uow.roles.create(role)

        logger.info(
            "role_created",
            role_id=str(stored.id),
            name=stored.name,
            grants=stored.permissions.count_grants(),
            actor=actor.subject if actor else None,
        )
        return RoleOutput.from_role(stored, user_count=0)
