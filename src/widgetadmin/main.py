"""Application entry point and composition root."""

import structlog

from widgetadmin import __version__
from widgetadmin.application.use_cases.role.create_role import CreateRoleUseCase
from widgetadmin.application.use_cases.role.delete_role import DeleteRoleUseCase
from widgetadmin.application.use_cases.role.get_role import GetRoleUseCase, ListRolesUseCase
from widgetadmin.application.use_cases.role.update_role import UpdateRoleUseCase
from widgetadmin.application.use_cases.user.manage_users import (
    AssignRoleUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserStatusUseCase,
    UpdateUserUseCase,
)
from widgetadmin.config import get_settings
from widgetadmin.infrastructure.auth.keycloak_provider import KeycloakProvider
from widgetadmin.infrastructure.logging import setup_logging
from widgetadmin.infrastructure.persistence.postgres.connection import create_pool
from widgetadmin.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from widgetadmin.infrastructure.principal.principal_fetcher import (
    RepositoryPrincipalFetcher,
)
from widgetadmin.interfaces.api.app import create_app
from widgetadmin.interfaces.api.middleware.auth import AuthMiddleware
from widgetadmin.interfaces.api.middleware.cors import CORSMiddleware
from widgetadmin.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from widgetadmin.interfaces.api.middleware.principal import PrincipalMiddleware
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


def create_widgetadmin_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        statement_timeout_ms=settings.db_statement_timeout_ms or None,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("keycloak_disabled", fallback_header="X-User-Subject")

    principal_fetcher = RepositoryPrincipalFetcher(
        uow_factory, timeout=settings.principal_fetch_timeout
    )

    roles_resource = RolesResource(
        ListRolesUseCase(unit_of_work_factory=uow_factory),
        CreateRoleUseCase(unit_of_work_factory=uow_factory),
    )
    role_resource = RoleResource(
        GetRoleUseCase(unit_of_work_factory=uow_factory),
        UpdateRoleUseCase(unit_of_work_factory=uow_factory),
        DeleteRoleUseCase(unit_of_work_factory=uow_factory),
    )
    users_resource = UsersResource(
        ListUsersUseCase(unit_of_work_factory=uow_factory),
        CreateUserUseCase(unit_of_work_factory=uow_factory),
    )
    user_resource = UserResource(
        GetUserUseCase(unit_of_work_factory=uow_factory),
        UpdateUserUseCase(unit_of_work_factory=uow_factory),
        DeleteUserUseCase(unit_of_work_factory=uow_factory),
    )
    user_role_resource = UserRoleResource(
        AssignRoleUseCase(unit_of_work_factory=uow_factory),
    )

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    app = create_app(
        roles_resource=roles_resource,
        role_resource=role_resource,
        users_resource=users_resource,
        user_resource=user_resource,
        user_role_resource=user_role_resource,
        user_status_resource=UserStatusResource(
            UpdateUserStatusUseCase(unit_of_work_factory=uow_factory),
        ),
        permissions_resource=PermissionsResource(),
        me_resource=CurrentPrincipalResource(),
        health_resource=HealthResource(pool),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
            PrincipalMiddleware(principal_fetcher),
        ],
    )
    logger.info("app_created", version=__version__, environment=settings.environment)
    return app


def main() -> None:
    """CLI entry point - run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_widgetadmin_app(),
        host="0.0.0.0",
        port=8000,
        log_config=None,
        reload=False,
        log_level=settings.log_level.lower(),
    )
