"""Update role use case."""

from datetime import UTC, datetime
from uuid import UUID

import structlog

from widgetadmin.application.dto.role_dto import RoleInput, RoleOutput
from widgetadmin.domain.entities import Principal, Role, validate_role_name
from widgetadmin.domain.exceptions import Conflict, NotFound, SystemRoleProtected
from widgetadmin.domain.services import ensure_authorized
from widgetadmin.domain.value_objects import Action, Resource

logger = structlog.get_logger(__name__)


class UpdateRoleUseCase:
    """Replace a role's name, description and permissions as a whole."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, actor: Principal | None, role_id: UUID, data: RoleInput
    ) -> RoleOutput:
        """Last write wins; no merge with concurrent edits."""
        name = validate_role_name(data.name)
        ensure_authorized(actor, Resource.USERS, Action.EDIT)

        async with self._uow_factory() as uow:
            existing = await uow.roles.get_by_id(role_id)
            if not existing:
                raise NotFound("Role", str(role_id))
            if existing.is_system:
                raise SystemRoleProtected("System roles cannot be modified")

            clash = await uow.roles.get_by_name(name)
            if clash and clash.id != role_id:
                raise Conflict(f"Role name already exists: {name}")

            replacement = Role(
                id=existing.id,
                name=name,
                description=(
                    data.description.strip()
                    if data.description is not None
                    else existing.description
                ),
                permissions=data.permissions,
                is_system=False,
                created_at=existing.created_at,
                updated_at=datetime.now(UTC),
            )
            stored = await uow.roles.update(replacement)
            user_count = await uow.users.count_by_role(role_id)

        logger.info(
            "role_updated",
            role_id=str(role_id),
            name=stored.name,
            grants=stored.permissions.count_grants(),
            actor=actor.subject if actor else None,
        )
        return RoleOutput.from_role(stored, user_count=user_count)
