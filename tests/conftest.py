"""Pytest fixtures for WidgetAdmin tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from widgetadmin.domain.entities import Principal, Role, User
from widgetadmin.domain.value_objects import Action, PermissionSet, Resource, UserStatus


# --- Fake repositories ---


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Role] = {}

    async def get_by_id(self, role_id: UUID) -> Role | None:
        return self._by_id.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        for role in self._by_id.values():
            if role.name.lower() == name.lower():
                return role
        return None

    async def list_all(self) -> list[Role]:
        return list(self._by_id.values())

    async def create(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def update(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def delete(self, role_id: UUID) -> None:
        self._by_id.pop(role_id, None)

    def add_role(self, role: Role) -> Role:
        """Helper to add role for tests."""
        self._by_id[role.id] = role
        return role


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, User] = {}
        self.touched: list[UUID] = []

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._by_id.get(user_id)

    async def get_by_subject(self, subject: str) -> User | None:
        return next((u for u in self._by_id.values() if u.subject == subject), None)

    async def get_by_email(self, email: str) -> User | None:
        return next((u for u in self._by_id.values() if u.email == email), None)

    async def list_all(self) -> list[User]:
        return list(self._by_id.values())

    async def count_by_role(self, role_id: UUID) -> int:
        return sum(1 for u in self._by_id.values() if u.role_id == role_id)

    async def create(self, user: User) -> User:
        self._by_id[user.id] = user
        return user

    async def update(self, user: User) -> None:
        self._by_id[user.id] = user

    async def delete(self, user_id: UUID) -> None:
        self._by_id.pop(user_id, None)

    async def touch(self, user_id: UUID, at: datetime) -> None:
        self.touched.append(user_id)
        user = self._by_id.get(user_id)
        if user:
            user.last_active_at = at

    def add_user(self, user: User) -> User:
        """Helper to add user for tests."""
        self._by_id[user.id] = user
        return user


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.roles = FakeRoleRepository()
        self.users = FakeUserRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def shared_factory(uow: FakeUnitOfWork):
    """Factory that yields the same UnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Builders ---


def make_role(
    name: str = "Support",
    permissions: PermissionSet | None = None,
    is_system: bool = False,
) -> Role:
    now = datetime.now(UTC)
    return Role(
        id=uuid4(),
        name=name,
        description=f"{name} role",
        permissions=permissions or PermissionSet(),
        is_system=is_system,
        created_at=now,
        updated_at=now,
    )


def make_user(
    subject: str = "user-1",
    role: Role | None = None,
    is_admin: bool = False,
    email: str | None = None,
) -> User:
    now = datetime.now(UTC)
    return User(
        id=uuid4(),
        subject=subject,
        name=subject.title(),
        email=email or f"{subject}@example.com",
        role_id=role.id if role else None,
        status=UserStatus.ACTIVE,
        is_admin=is_admin,
        created_at=now,
        updated_at=now,
    )


USER_MANAGER_GRANTS = PermissionSet(
    {Resource.USERS: {Action.VIEW, Action.CREATE, Action.EDIT, Action.DELETE}}
)


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return shared_factory(fake_uow)


@pytest.fixture
def admin_principal() -> Principal:
    """Admin with no role at all - the flag alone grants everything."""
    return Principal(subject="root", role=None, is_admin=True)


@pytest.fixture
def user_manager_principal() -> Principal:
    """Non-admin whose role can fully manage users and roles."""
    return Principal(subject="manager", role=make_role("User Manager", USER_MANAGER_GRANTS))


@pytest.fixture
def viewer_principal() -> Principal:
    """Non-admin who may only view users."""
    return Principal(
        subject="viewer",
        role=make_role("User Viewer", PermissionSet({Resource.USERS: {Action.VIEW}})),
    )


@pytest.fixture
def roleless_principal() -> Principal:
    """Authenticated, but no role assigned yet."""
    return Principal(subject="newcomer")
