"""Role API resources."""

from uuid import UUID

import falcon.asgi

from widgetadmin.application.dto.role_dto import RoleInput
from widgetadmin.application.use_cases.role.create_role import CreateRoleUseCase
from widgetadmin.application.use_cases.role.delete_role import DeleteRoleUseCase
from widgetadmin.application.use_cases.role.get_role import GetRoleUseCase, ListRolesUseCase
from widgetadmin.application.use_cases.role.update_role import UpdateRoleUseCase
from widgetadmin.domain.exceptions import WidgetAdminError
from widgetadmin.interfaces.api.errors import current_principal, write_error


class RolesResource:
    """GET/POST /v1/roles - list and create roles."""

    def __init__(
        self,
        list_roles: ListRolesUseCase,
        create_role: CreateRoleUseCase,
    ) -> None:
        self._list = list_roles
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List roles with permissions and user counts."""
        ctx = current_principal(req, resp)
        if not ctx:
            return

        try:
            roles = await self._list.execute(ctx.principal)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = {"items": [r.to_media() for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create role from name, description and grouped permissions."""
        ctx = current_principal(req, resp)
        if not ctx:
            return

        try:
            body = await req.get_media()
            data = RoleInput.from_media(body)
            role = await self._create.execute(ctx.principal, data)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = role.to_media()
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PUT/DELETE /v1/roles/{role_id}."""

    def __init__(
        self,
        get_role: GetRoleUseCase,
        update_role: UpdateRoleUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self._get = get_role
        self._update = update_role
        self._delete = delete_role

    @staticmethod
    def _parse_id(role_id: str, resp: falcon.asgi.Response) -> UUID | None:
        try:
            return UUID(role_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid role ID"}
            return None

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        """Get role by id."""
        ctx = current_principal(req, resp)
        if not ctx:
            return
        rid = self._parse_id(role_id, resp)
        if rid is None:
            return

        try:
            role = await self._get.execute(ctx.principal, rid)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = role.to_media()
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        """Replace role name, description and permissions."""
        ctx = current_principal(req, resp)
        if not ctx:
            return
        rid = self._parse_id(role_id, resp)
        if rid is None:
            return

        try:
            body = await req.get_media()
            data = RoleInput.from_media(body)
            role = await self._update.execute(ctx.principal, rid, data)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.media = role.to_media()
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        """Delete role; 409 while users are assigned to it."""
        ctx = current_principal(req, resp)
        if not ctx:
            return
        rid = self._parse_id(role_id, resp)
        if rid is None:
            return

        try:
            await self._delete.execute(ctx.principal, rid)
        except WidgetAdminError as e:
            write_error(resp, e)
            return

        resp.status = falcon.HTTP_204
