"""User repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from widgetadmin.domain.entities import User


class UserRepository(Protocol):
    """Port for user persistence."""

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_subject(self, subject: str) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def list_all(self) -> list[User]: ...

    async def count_by_role(self, role_id: UUID) -> int: ...

    async def create(self, user: User) -> User: ...

    async def update(self, user: User) -> None: ...

    async def delete(self, user_id: UUID) -> None: ...

    async def touch(self, user_id: UUID, at: datetime) -> None: ...
