"""Delete role use case."""

from uuid import UUID

import structlog

from widgetadmin.domain.entities import Principal
from widgetadmin.domain.exceptions import NotFound, RoleInUse, SystemRoleProtected
from widgetadmin.domain.services import ensure_authorized
from widgetadmin.domain.value_objects import Action, Resource

logger = structlog.get_logger(__name__)


class DeleteRoleUseCase:
    """Delete a role that no user references."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Principal | None, role_id: UUID) -> None:
        """Refuse while users are assigned; never cascades to users."""
        ensure_authorized(actor, Resource.USERS, Action.DELETE)

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            if role.is_system:
                raise SystemRoleProtected("System roles cannot be deleted")

            assigned = await uow.users.count_by_role(role_id)
            if assigned > 0:
                logger.info(
                    "role_delete_refused",
                    role_id=str(role_id),
                    assigned_users=assigned,
                )
                raise RoleInUse(role_id, assigned)

            await uow.roles.delete(role_id)

        logger.info(
            "role_deleted",
            role_id=str(role_id),
            name=role.name,
            actor=actor.subject if actor else None,
        )
