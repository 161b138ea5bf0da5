"""Unit tests for user management use cases."""

from uuid import uuid4

import pytest

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
from widgetadmin.domain.exceptions import Conflict, NotFound, PermissionDenied
from widgetadmin.domain.value_objects import UserStatus

from tests.conftest import FakeUnitOfWork, make_role, make_user


def _input(email: str = "carol@example.com", role_id=None, is_admin: bool = False, **kwargs) -> UserInput:
    return UserInput(
        subject=kwargs.get("subject", email),
        name=kwargs.get("name", "Carol"),
        email=email,
        role_id=role_id,
        status=kwargs.get("status", UserStatus.ACTIVE),
        is_admin=is_admin,
    )


@pytest.mark.asyncio
async def test_create_user_with_role(fake_uow: FakeUnitOfWork, uow_factory, user_manager_principal) -> None:
    role = fake_uow.roles.add_role(make_role("Support"))
    result = await CreateUserUseCase(unit_of_work_factory=uow_factory).execute(
        user_manager_principal, _input(role_id=role.id)
    )
    assert result.role == role
    assert (await fake_uow.users.get_by_subject("carol@example.com")).role_id == role.id


@pytest.mark.asyncio
async def test_create_user_unknown_role_not_found(uow_factory, admin_principal) -> None:
    with pytest.raises(NotFound):
        await CreateUserUseCase(unit_of_work_factory=uow_factory).execute(
            admin_principal, _input(role_id=uuid4())
        )


@pytest.mark.asyncio
async def test_create_user_duplicate_email_conflicts(fake_uow: FakeUnitOfWork, uow_factory, admin_principal) -> None:
    fake_uow.users.add_user(make_user("carol", email="carol@example.com"))
    with pytest.raises(Conflict):
        await CreateUserUseCase(unit_of_work_factory=uow_factory).execute(admin_principal, _input())


@pytest.mark.asyncio
async def test_create_user_duplicate_subject_conflicts(fake_uow: FakeUnitOfWork, uow_factory, admin_principal) -> None:
    fake_uow.users.add_user(make_user("kc-123", email="other@example.com"))
    with pytest.raises(Conflict):
        await CreateUserUseCase(unit_of_work_factory=uow_factory).execute(
            admin_principal, _input(subject="kc-123")
        )


@pytest.mark.asyncio
async def test_non_admin_cannot_create_admin(uow_factory, user_manager_principal) -> None:
    with pytest.raises(PermissionDenied):
        await CreateUserUseCase(unit_of_work_factory=uow_factory).execute(
            user_manager_principal, _input(is_admin=True)
        )


@pytest.mark.asyncio
async def test_admin_can_create_admin(uow_factory, admin_principal) -> None:
    result = await CreateUserUseCase(unit_of_work_factory=uow_factory).execute(
        admin_principal, _input(is_admin=True)
    )
    assert result.is_admin


@pytest.mark.asyncio
async def test_update_user_fields(fake_uow: FakeUnitOfWork, uow_factory, user_manager_principal) -> None:
    user = fake_uow.users.add_user(make_user("carol", email="carol@example.com"))
    result = await UpdateUserUseCase(unit_of_work_factory=uow_factory).execute(
        user_manager_principal,
        user.id,
        _input(name="Carol B", status=UserStatus.INACTIVE),
    )
    assert result.name == "Carol B"
    assert result.status is UserStatus.INACTIVE
    assert result.subject == "carol"


@pytest.mark.asyncio
async def test_non_admin_cannot_clear_admin_flag(fake_uow: FakeUnitOfWork, uow_factory, user_manager_principal) -> None:
    user = fake_uow.users.add_user(make_user("root", is_admin=True, email="carol@example.com"))
    with pytest.raises(PermissionDenied):
        await UpdateUserUseCase(unit_of_work_factory=uow_factory).execute(
            user_manager_principal, user.id, _input(is_admin=False)
        )


@pytest.mark.asyncio
async def test_update_user_email_clash_conflicts(fake_uow: FakeUnitOfWork, uow_factory, admin_principal) -> None:
    fake_uow.users.add_user(make_user("dave", email="dave@example.com"))
    user = fake_uow.users.add_user(make_user("carol", email="carol@example.com"))
    with pytest.raises(Conflict):
        await UpdateUserUseCase(unit_of_work_factory=uow_factory).execute(
            admin_principal, user.id, _input(email="dave@example.com")
        )


@pytest.mark.asyncio
async def test_assign_and_clear_role(fake_uow: FakeUnitOfWork, uow_factory, user_manager_principal) -> None:
    role = fake_uow.roles.add_role(make_role("Support"))
    user = fake_uow.users.add_user(make_user("carol"))
    use_case = AssignRoleUseCase(unit_of_work_factory=uow_factory)

    assigned = await use_case.execute(user_manager_principal, user.id, role.id)
    assert assigned.role == role
    assert await fake_uow.users.count_by_role(role.id) == 1

    cleared = await use_case.execute(user_manager_principal, user.id, None)
    assert cleared.role is None
    assert await fake_uow.users.count_by_role(role.id) == 0


@pytest.mark.asyncio
async def test_assign_role_denied_for_viewer(fake_uow: FakeUnitOfWork, uow_factory, viewer_principal) -> None:
    role = fake_uow.roles.add_role(make_role("Support"))
    user = fake_uow.users.add_user(make_user("carol"))
    with pytest.raises(PermissionDenied):
        await AssignRoleUseCase(unit_of_work_factory=uow_factory).execute(
            viewer_principal, user.id, role.id
        )


@pytest.mark.asyncio
async def test_list_and_get_users(fake_uow: FakeUnitOfWork, uow_factory, viewer_principal) -> None:
    role = fake_uow.roles.add_role(make_role("Support"))
    user = fake_uow.users.add_user(make_user("carol", role=role))
    fake_uow.users.add_user(make_user("dave"))

    listed = await ListUsersUseCase(unit_of_work_factory=uow_factory).execute(viewer_principal)
    assert {u.subject for u in listed} == {"carol", "dave"}

    fetched = await GetUserUseCase(unit_of_work_factory=uow_factory).execute(viewer_principal, user.id)
    assert fetched.role == role


@pytest.mark.asyncio
async def test_get_missing_user_not_found(uow_factory, viewer_principal) -> None:
    with pytest.raises(NotFound):
        await GetUserUseCase(unit_of_work_factory=uow_factory).execute(viewer_principal, uuid4())


@pytest.mark.asyncio
async def test_delete_user(fake_uow: FakeUnitOfWork, uow_factory, user_manager_principal) -> None:
    user = fake_uow.users.add_user(make_user("carol"))
    await DeleteUserUseCase(unit_of_work_factory=uow_factory).execute(user_manager_principal, user.id)
    assert await fake_uow.users.get_by_id(user.id) is None


@pytest.mark.asyncio
async def test_delete_user_denied_for_viewer(fake_uow: FakeUnitOfWork, uow_factory, viewer_principal) -> None:
    user = fake_uow.users.add_user(make_user("carol"))
    with pytest.raises(PermissionDenied):
        await DeleteUserUseCase(unit_of_work_factory=uow_factory).execute(viewer_principal, user.id)


@pytest.mark.asyncio
async def test_update_status_only(fake_uow: FakeUnitOfWork, uow_factory, user_manager_principal) -> None:
    role = fake_uow.roles.add_role(make_role("Support"))
    user = fake_uow.users.add_user(make_user("carol", role=role))
    result = await UpdateUserStatusUseCase(unit_of_work_factory=uow_factory).execute(
        user_manager_principal, user.id, UserStatus.INACTIVE
    )
    assert result.status is UserStatus.INACTIVE
    assert result.role == role
    assert result.name == user.name


@pytest.mark.asyncio
async def test_update_status_denied_for_viewer(fake_uow: FakeUnitOfWork, uow_factory, viewer_principal) -> None:
    user = fake_uow.users.add_user(make_user("carol"))
    with pytest.raises(PermissionDenied):
        await UpdateUserStatusUseCase(unit_of_work_factory=uow_factory).execute(
            viewer_principal, user.id, UserStatus.INACTIVE
        )
    assert user.status is UserStatus.ACTIVE


@pytest.mark.asyncio
async def test_update_status_missing_user(uow_factory, admin_principal) -> None:
    with pytest.raises(NotFound):
        await UpdateUserStatusUseCase(unit_of_work_factory=uow_factory).execute(
            admin_principal, uuid4(), UserStatus.PENDING
        )
