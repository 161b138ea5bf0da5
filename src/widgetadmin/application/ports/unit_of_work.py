"""Unit of Work port - transactional boundary around role and user access."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from widgetadmin.application.ports.repositories.role_repository import RoleRepository
from widgetadmin.application.ports.repositories.user_repository import UserRepository


class UnitOfWork(Protocol):
    """Role and user repositories sharing one transaction."""

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def users(self) -> UserRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Opens a UnitOfWork for ``async with factory() as uow``.

    Leaving the block normally commits; leaving it by an exception rolls back.
    A role replacement (row update plus full grant rewrite) is therefore
    all-or-nothing.
    """

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
