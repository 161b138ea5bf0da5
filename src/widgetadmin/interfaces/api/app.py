"""Falcon ASGI application."""

import falcon
import falcon.asgi
import structlog
from falcon.asgi import App

from widgetadmin.interfaces.api.resources.health import HealthResource
from widgetadmin.interfaces.api.resources.me import CurrentPrincipalResource
from widgetadmin.interfaces.api.resources.permissions import PermissionsResource
from widgetadmin.interfaces.api.resources.roles import RoleResource, RolesResource
from widgetadmin.interfaces.api.resources.users import (
    UserResource,
    UserRoleResource,
    UserStatusResource,
    UsersResource,
)

logger = structlog.get_logger(__name__)


async def _log_exception(req, resp, ex, params) -> None:
    logger.exception(
        "unhandled_exception",
        method=req.method,
        path=req.path,
        error=repr(ex),
    )
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    roles_resource: RolesResource,
    role_resource: RoleResource,
    users_resource: UsersResource,
    user_resource: UserResource,
    user_role_resource: UserRoleResource,
    user_status_resource: UserStatusResource,
    permissions_resource: PermissionsResource,
    me_resource: CurrentPrincipalResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, _log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/me", me_resource)
    app.add_route("/v1/permissions", permissions_resource)
    app.add_route("/v1/permissions/grouped", permissions_resource, suffix="grouped")
    app.add_route("/v1/roles", roles_resource)
    app.add_route("/v1/roles/{role_id}", role_resource)
    app.add_route("/v1/users", users_resource)
    app.add_route("/v1/users/{user_id}", user_resource)
    app.add_route("/v1/users/{user_id}/role", user_role_resource)
    app.add_route("/v1/users/{user_id}/status", user_status_resource)
    return app
