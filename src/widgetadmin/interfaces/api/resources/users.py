"""User API resources."""

from uuid import UUID

import falcon.asgi

from widgetadmin.application.dto.user_dto import UserInput
from widgetadmin.application.use_cases.user.manage_users import (
    AssignRoleUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserStatusUseCase,
    UpdateUserUseCase,
)
from widgetadmin.domain.exceptions import ValidationError, WidgetAdminError
from widgetadmin.domain.value_objects import UserStatus
from widgetadmin.interfaces.api.errors import current_principal, write_error


def _parse_user_id(user_id: str, resp: falcon.asgi.Response) -> UUID | None:
    try:
        return UUID(user_id)
    except ValueError:
        resp.status = falcon.HTTP_400
        resp.media = {"error": "Invalid user ID"}
        return None


class UsersResource:
    """GET/POST /v1/users - list and create users."""

    def __init__(self, list_users: ListUsersUseCase, create_user: CreateUserUseCase) -> None:
        self._list = list_users
        self._create = create_user

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List users with their roles."""
        ctx = current_principal(req, resp)
        if not ctx:
            return

        try:
            users = await self._list.execute(ctx.principal)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = {"items": [u.to_media() for u in users]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create user."""
        ctx = current_principal(req, resp)
        if not ctx:
            return

        try:
            body = await req.get_media()
            user = await self._create.execute(ctx.principal, UserInput.from_media(body))
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = user.to_media()
        resp.status = falcon.HTTP_201


class UserResource:
    """GET/PUT/DELETE /v1/users/{user_id}."""

    def __init__(
        self,
        get_user: GetUserUseCase,
        update_user: UpdateUserUseCase,
        delete_user: DeleteUserUseCase,
    ) -> None:
        self._get = get_user
        self._update = update_user
        self._delete = delete_user

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        """Get user by id."""
        ctx = current_principal(req, resp)
        if not ctx:
            return
        uid = _parse_user_id(user_id, resp)
        if uid is None:
            return

        try:
            user = await self._get.execute(ctx.principal, uid)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = user.to_media()
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        """Replace user details, role and admin flag."""
        ctx = current_principal(req, resp)
        if not ctx:
            return
        uid = _parse_user_id(user_id, resp)
        if uid is None:
            return

        try:
            body = await req.get_media()
            user = await self._update.execute(ctx.principal, uid, UserInput.from_media(body))
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = user.to_media()
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        """Delete user."""
        ctx = current_principal(req, resp)
        if not ctx:
            return
        uid = _parse_user_id(user_id, resp)
        if uid is None:
            return

        try:
            await self._delete.execute(ctx.principal, uid)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.status = falcon.HTTP_204


class UserRoleResource:
    """PUT /v1/users/{user_id}/role - assign or clear a user's role."""

    def __init__(self, assign_role: AssignRoleUseCase) -> None:
        self._assign = assign_role

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        """Body: {"role_id": "<uuid>"} or {"role_id": null}."""
        ctx = current_principal(req, resp)
        if not ctx:
            return
        uid = _parse_user_id(user_id, resp)
        if uid is None:
            return

        try:
            body = await req.get_media()
            if not isinstance(body, dict) or "role_id" not in body:
                raise ValidationError("role_id is required", field="role_id")
            raw = body["role_id"]
            try:
                role_id = UUID(str(raw)) if raw else None
            except (TypeError, ValueError):
                raise ValidationError("Invalid role_id", field="role_id") from None
            user = await self._assign.execute(ctx.principal, uid, role_id)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = user.to_media()
        resp.status = falcon.HTTP_200


class UserStatusResource:
    """PATCH /v1/users/{user_id}/status - activate, deactivate or mark pending."""

    def __init__(self, update_status: UpdateUserStatusUseCase) -> None:
        self._update_status = update_status

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        """Body: {"status": "active" | "inactive" | "pending"}."""
        ctx = current_principal(req, resp)
        if not ctx:
            return
        uid = _parse_user_id(user_id, resp)
        if uid is None:
            return

        try:
            body = await req.get_media()
            raw = body.get("status") if isinstance(body, dict) else None
            try:
                status = UserStatus(raw)
            except ValueError:
                raise ValidationError("Unknown status", field="status") from None
            user = await self._update_status.execute(ctx.principal, uid, status)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = user.to_media()
        resp.status = falcon.HTTP_200
