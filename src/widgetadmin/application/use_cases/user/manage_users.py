"""User management use cases - list, get, create, update, delete."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

import structlog

from widgetadmin.application.dto.user_dto import UserInput, UserOutput
from widgetadmin.domain.entities import Principal, Role, User
from widgetadmin.domain.exceptions import Conflict, NotFound, PermissionDenied
from widgetadmin.domain.services import ensure_authorized
from widgetadmin.domain.value_objects import Action, Resource, UserStatus

logger = structlog.get_logger(__name__)


async def _resolve_role(uow, role_id: UUID | None) -> Role | None:
    if role_id is None:
        return None
    role = await uow.roles.get_by_id(role_id)
    if not role:
        raise NotFound("Role", str(role_id))
    return role


def _ensure_may_grant_admin(actor: Principal | None, requested: bool, current: bool) -> None:
    """Only admins may set or clear the admin flag."""
    if requested != current and not (actor and actor.is_admin):
        raise PermissionDenied("Only administrators can change the admin flag")


class ListUsersUseCase:
    """List all users with their roles."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Principal | None) -> list[UserOutput]:
        ensure_authorized(actor, Resource.USERS, Action.VIEW)

        async with self._uow_factory() as uow:
            users = await uow.users.list_all()
            roles = {r.id: r for r in await uow.roles.list_all()}
        return [UserOutput.from_user(u, roles.get(u.role_id)) for u in users]


class GetUserUseCase:
    """Get user by id."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Principal | None, user_id: UUID) -> UserOutput:
        ensure_authorized(actor, Resource.USERS, Action.VIEW)

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", str(user_id))
            role = await uow.roles.get_by_id(user.role_id) if user.role_id else None
        return UserOutput.from_user(user, role)


class CreateUserUseCase:
    """Create a console user, optionally with a role."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Principal | None, data: UserInput) -> UserOutput:
        ensure_authorized(actor, Resource.USERS, Action.CREATE)
        _ensure_may_grant_admin(actor, data.is_admin, False)

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(data.email):
                raise Conflict(f"Email already in use: {data.email}")
            if await uow.users.get_by_subject(data.subject):
                raise Conflict(f"Subject already in use: {data.subject}")
            role = await _resolve_role(uow, data.role_id)

            now = datetime.now(UTC)
            user = User(
                id=uuid4(),
                subject=data.subject,
                name=data.name,
                email=data.email,
                role_id=data.role_id,
                status=data.status,
                is_admin=data.is_admin,
                created_at=now,
                updated_at=now,
            )
            await uow.users.create(user)

        logger.info(
            "user_created",
            user_id=str(user.id),
            role_id=str(user.role_id) if user.role_id else None,
            actor=actor.subject if actor else None,
        )
        return UserOutput.from_user(user, role)


class UpdateUserUseCase:
    """Replace a user's name, email, status, role and admin flag."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, actor: Principal | None, user_id: UUID, data: UserInput
    ) -> UserOutput:
        ensure_authorized(actor, Resource.USERS, Action.EDIT)

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", str(user_id))
            _ensure_may_grant_admin(actor, data.is_admin, user.is_admin)

            clash = await uow.users.get_by_email(data.email)
            if clash and clash.id != user_id:
                raise Conflict(f"Email already in use: {data.email}")
            role = await _resolve_role(uow, data.role_id)

            user.name = data.name
            user.email = data.email
            user.status = data.status
            user.role_id = data.role_id
            user.is_admin = data.is_admin
            user.updated_at = datetime.now(UTC)
            await uow.users.update(user)

        logger.info(
            "user_updated",
            user_id=str(user_id),
            actor=actor.subject if actor else None,
        )
        return UserOutput.from_user(user, role)


class AssignRoleUseCase:
    """Assign a role to a user, or clear it with role_id=None."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, actor: Principal | None, user_id: UUID, role_id: UUID | None
    ) -> UserOutput:
        ensure_authorized(actor, Resource.USERS, Action.EDIT)

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", str(user_id))
            role = await _resolve_role(uow, role_id)
            user.role_id = role_id
            user.updated_at = datetime.now(UTC)
            await uow.users.update(user)

        logger.info(
            "user_role_assigned",
            user_id=str(user_id),
            role_id=str(role_id) if role_id else None,
            actor=actor.subject if actor else None,
        )
        return UserOutput.from_user(user, role)


class DeleteUserUseCase:
    """Delete a user."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Principal | None, user_id: UUID) -> None:
        ensure_authorized(actor, Resource.USERS, Action.DELETE)

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", str(user_id))
            await uow.users.delete(user_id)

        logger.info(
            "user_deleted",
            user_id=str(user_id),
            actor=actor.subject if actor else None,
        )


class UpdateUserStatusUseCase:
    """Change only a user's status (active, inactive, pending)."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, actor: Principal | None, user_id: UUID, status: UserStatus
    ) -> UserOutput:
        ensure_authorized(actor, Resource.USERS, Action.EDIT)

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", str(user_id))
            previous = user.status
            user.status = status
            user.updated_at = datetime.now(UTC)
            await uow.users.update(user)
            role = await uow.roles.get_by_id(user.role_id) if user.role_id else None

        logger.info(
            "user_status_changed",
            user_id=str(user_id),
            previous=previous.value,
            status=status.value,
            actor=actor.subject if actor else None,
        )
        return UserOutput.from_user(user, role)
