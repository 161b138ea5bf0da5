"""PostgreSQL role repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import ForeignKeyViolation, UniqueViolation

from widgetadmin.domain.entities import Role
from widgetadmin.domain.exceptions import Conflict, RoleInUse
from widgetadmin.domain.value_objects import Action, PermissionSet, Resource

_ROLE_COLUMNS = "id, name, description, is_system, created_at, updated_at"


def _role_from_row(r: tuple, permissions: PermissionSet) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        description=r[2] or "",
        permissions=permissions,
        is_system=r[3],
        created_at=r[4],
        updated_at=r[5],
    )


class PostgresRoleRepository:
    """Role repository implementation. Grants live in role_permission rows."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _permissions_for(self, role_id: UUID) -> PermissionSet:
        cur = await self._conn.execute(
            "SELECT resource, action FROM role_permission WHERE role_id = %s",
            (role_id,),
        )
        rows = await cur.fetchall()
        return PermissionSet.from_grants((Resource(r[0]), Action(r[1])) for r in rows)

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"SELECT {_ROLE_COLUMNS} FROM role WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _role_from_row(r, await self._permissions_for(r[0]))

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name (case-insensitive)."""
        cur = await self._conn.execute(
            f"SELECT {_ROLE_COLUMNS} FROM role WHERE lower(name) = lower(%s)",
            (name,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _role_from_row(r, await self._permissions_for(r[0]))

    async def list_all(self) -> list[Role]:
        """List all roles with their grants."""
        cur = await self._conn.execute(f"SELECT {_ROLE_COLUMNS} FROM role ORDER BY name")
        rows = await cur.fetchall()
        cur = await self._conn.execute("SELECT role_id, resource, action FROM role_permission")
        grants: dict[UUID, list[tuple[Resource, Action]]] = {}
        for role_id, resource, action in await cur.fetchall():
            grants.setdefault(role_id, []).append((Resource(resource), Action(action)))
        return [
            _role_from_row(r, PermissionSet.from_grants(grants.get(r[0], [])))
            for r in rows
        ]

    async def create(self, role: Role) -> Role:
        """Create role and its grants."""
        try:
            await self._conn.execute(
                f"INSERT INTO role ({_ROLE_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s)",
                (
                    role.id,
                    role.name,
                    role.description,
                    role.is_system,
                    role.created_at,
                    role.updated_at,
                ),
            )
        except UniqueViolation as e:
            raise Conflict(f"Role name already exists: {role.name}") from e
        await self._write_grants(role)
        return role

    async def update(self, role: Role) -> Role:
        """Replace role fields and its full grant set."""
        try:
            await self._conn.execute(
                "UPDATE role SET name=%s, description=%s, updated_at=%s WHERE id=%s",
                (role.name, role.description, role.updated_at, role.id),
            )
        except UniqueViolation as e:
            raise Conflict(f"Role name already exists: {role.name}") from e
        await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s",
            (role.id,),
        )
        await self._write_grants(role)
        return role

    async def delete(self, role_id: UUID) -> None:
        """Delete role. The app_user foreign key refuses referenced roles."""
        try:
            await self._conn.execute(
                "DELETE FROM role WHERE id = %s",
                (role_id,),
            )
        except ForeignKeyViolation as e:
            raise RoleInUse(role_id) from e

    async def _write_grants(self, role: Role) -> None:
        rows = [(role.id, r.value, a.value) for r, a in role.permissions.grants()]
        if not rows:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO role_permission (role_id, resource, action) VALUES (%s, %s, %s)",
                rows,
            )
