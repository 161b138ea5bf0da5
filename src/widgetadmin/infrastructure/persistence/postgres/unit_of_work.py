"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from widgetadmin.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from widgetadmin.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)

logger = structlog.get_logger(__name__)


class PostgresUnitOfWork:
    """Repositories bound to one pooled connection and its open transaction."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn
        self._roles = PostgresRoleRepository(conn)
        self._users = PostgresUserRepository(conn)

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    async def commit(self) -> None:
        await self._conn.commit()

    async def rollback(self) -> None:
        await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool):
    """Create UnitOfWork factory (async context manager).

    Commits when the block exits normally. Any exception, including domain
    errors raised mid-way (Conflict, RoleInUse), rolls the transaction back
    before the connection returns to the pool.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with pool.connection() as conn:
            uow = PostgresUnitOfWork(conn)
            try:
                yield uow
            except BaseException as e:
                await uow.rollback()
                logger.debug("uow_rolled_back", error=type(e).__name__)
                raise
            await uow.commit()

    return factory
