"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

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
from widgetadmin.domain.value_objects import Action, PermissionSet, Resource
from widgetadmin.infrastructure.principal.principal_fetcher import RepositoryPrincipalFetcher
from widgetadmin.interfaces.api.app import create_app
from widgetadmin.interfaces.api.middleware.auth import AuthMiddleware
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

from tests.conftest import USER_MANAGER_GRANTS, FakeUnitOfWork, make_role, make_user


class _FailingFetcher:
    async def fetch(self, subject: str):
        raise ConnectionError("database unavailable")


def as_subject(subject: str) -> dict[str, str]:
    """Headers that authenticate as subject in development mode."""
    return {"X-User-Subject": subject}


@pytest.fixture
def seeded_uow(fake_uow: FakeUnitOfWork) -> FakeUnitOfWork:
    """Admin, a user manager and a users viewer, plus one system role."""
    fake_uow.roles.add_role(make_role("Administrator", is_system=True))
    manager_role = fake_uow.roles.add_role(make_role("User Manager", USER_MANAGER_GRANTS))
    viewer_role = fake_uow.roles.add_role(
        make_role("User Viewer", PermissionSet({Resource.USERS: {Action.VIEW}}))
    )
    fake_uow.users.add_user(make_user("root", is_admin=True))
    fake_uow.users.add_user(make_user("manager", role=manager_role))
    fake_uow.users.add_user(make_user("viewer", role=viewer_role))
    return fake_uow


def build_app(uow_factory, fetcher=None):
    """Falcon ASGI app wired like production, over the fake Unit of Work."""
    return create_app(
        roles_resource=RolesResource(
            ListRolesUseCase(unit_of_work_factory=uow_factory),
            CreateRoleUseCase(unit_of_work_factory=uow_factory),
        ),
        role_resource=RoleResource(
            GetRoleUseCase(unit_of_work_factory=uow_factory),
            UpdateRoleUseCase(unit_of_work_factory=uow_factory),
            DeleteRoleUseCase(unit_of_work_factory=uow_factory),
        ),
        users_resource=UsersResource(
            ListUsersUseCase(unit_of_work_factory=uow_factory),
            CreateUserUseCase(unit_of_work_factory=uow_factory),
        ),
        user_resource=UserResource(
            GetUserUseCase(unit_of_work_factory=uow_factory),
            UpdateUserUseCase(unit_of_work_factory=uow_factory),
            DeleteUserUseCase(unit_of_work_factory=uow_factory),
        ),
        user_role_resource=UserRoleResource(AssignRoleUseCase(unit_of_work_factory=uow_factory)),
        user_status_resource=UserStatusResource(
            UpdateUserStatusUseCase(unit_of_work_factory=uow_factory)
        ),
        permissions_resource=PermissionsResource(),
        me_resource=CurrentPrincipalResource(),
        health_resource=HealthResource(),
        middleware=[
            AuthMiddleware(),
            PrincipalMiddleware(fetcher or RepositoryPrincipalFetcher(uow_factory)),
        ],
    )


@pytest.fixture
def client(seeded_uow, uow_factory) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(build_app(uow_factory))


@pytest.fixture
def failing_client(uow_factory) -> TestClient:
    """Client whose principal lookups always fail."""
    return TestClient(build_app(uow_factory, fetcher=_FailingFetcher()))
