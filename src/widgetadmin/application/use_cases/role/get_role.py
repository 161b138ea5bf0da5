"""Get and list role use cases."""

from uuid import UUID

from widgetadmin.application.dto.role_dto import RoleOutput
from widgetadmin.domain.entities import Principal
from widgetadmin.domain.exceptions import NotFound
from widgetadmin.domain.services import ensure_authorized
from widgetadmin.domain.value_objects import Action, Resource


class GetRoleUseCase:
    """Get role by id."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Principal | None, role_id: UUID) -> RoleOutput:
        ensure_authorized(actor, Resource.USERS, Action.VIEW)

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            user_count = await uow.users.count_by_role(role_id)
        return RoleOutput.from_role(role, user_count=user_count)


class ListRolesUseCase:
    """List all roles with their user counts, ordered by name."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Principal | None) -> list[RoleOutput]:
        ensure_authorized(actor, Resource.USERS, Action.VIEW)

        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
            items = [
                RoleOutput.from_role(role, user_count=await uow.users.count_by_role(role.id))
                for role in roles
            ]
        items.sort(key=lambda r: r.name.lower())
        return items
