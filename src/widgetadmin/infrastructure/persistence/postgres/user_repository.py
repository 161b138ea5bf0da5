"""PostgreSQL user repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from widgetadmin.domain.entities import User
from widgetadmin.domain.exceptions import Conflict
from widgetadmin.domain.value_objects import UserStatus

_USER_COLUMNS = (
    "id, subject, name, email, role_id, status, is_admin, "
    "created_at, updated_at, last_active_at"
)


def _user_from_row(r: tuple) -> User:
    return User(
        id=r[0],
        subject=r[1],
        name=r[2],
        email=r[3],
        role_id=r[4],
        status=UserStatus(r[5]),
        is_admin=r[6],
        created_at=r[7],
        updated_at=r[8],
        last_active_at=r[9],
    )


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        return _user_from_row(r) if r else None

    async def get_by_subject(self, subject: str) -> User | None:
        """Get user by identity provider subject."""
        cur = await self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM app_user WHERE subject = %s",
            (subject,),
        )
        r = await cur.fetchone()
        return _user_from_row(r) if r else None

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email."""
        cur = await self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM app_user WHERE email = %s",
            (email,),
        )
        r = await cur.fetchone()
        return _user_from_row(r) if r else None

    async def list_all(self) -> list[User]:
        """List all users, newest first."""
        cur = await self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM app_user ORDER BY created_at DESC"
        )
        rows = await cur.fetchall()
        return [_user_from_row(r) for r in rows]

    async def count_by_role(self, role_id: UUID) -> int:
        """Number of users referencing the role."""
        cur = await self._conn.execute(
            "SELECT count(*) FROM app_user WHERE role_id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        return r[0]

    async def create(self, user: User) -> User:
        """Create user."""
        try:
            await self._conn.execute(
                f"INSERT INTO app_user ({_USER_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    user.id,
                    user.subject,
                    user.name,
                    user.email,
                    user.role_id,
                    user.status.value,
                    user.is_admin,
                    user.created_at,
                    user.updated_at,
                    user.last_active_at,
                ),
            )
        except UniqueViolation as e:
            raise Conflict(f"User already exists: {user.email}") from e
        return user

    async def update(self, user: User) -> None:
        """Update user."""
        try:
            await self._conn.execute(
                "UPDATE app_user SET name=%s, email=%s, role_id=%s, status=%s, "
                "is_admin=%s, updated_at=%s WHERE id=%s",
                (
                    user.name,
                    user.email,
                    user.role_id,
                    user.status.value,
                    user.is_admin,
                    user.updated_at,
                    user.id,
                ),
            )
        except UniqueViolation as e:
            raise Conflict(f"User already exists: {user.email}") from e

    async def delete(self, user_id: UUID) -> None:
        """Delete user."""
        await self._conn.execute(
            "DELETE FROM app_user WHERE id = %s",
            (user_id,),
        )

    async def touch(self, user_id: UUID, at: datetime) -> None:
        """Record activity."""
        await self._conn.execute(
            "UPDATE app_user SET last_active_at = %s WHERE id = %s",
            (at, user_id),
        )
