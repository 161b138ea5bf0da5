"""Principal fetcher implementation - resolves subject via user and role tables."""

import asyncio
from datetime import UTC, datetime

from widgetadmin.domain.entities import Principal


class RepositoryPrincipalFetcher:
    """Loads the user's role and admin flag through the Unit of Work."""

    def __init__(self, unit_of_work_factory: type, timeout: float | None = None) -> None:
        self._uow_factory = unit_of_work_factory
        self._timeout = timeout

    async def fetch(self, subject: str) -> Principal:
        """Resolve subject; unknown subjects get a principal with no role."""
        async with asyncio.timeout(self._timeout):
            async with self._uow_factory() as uow:
                user = await uow.users.get_by_subject(subject)
                if not user:
                    return Principal(subject=subject)

                role = None
                if user.role_id is not None:
                    role = await uow.roles.get_by_id(user.role_id)
                await uow.users.touch(user.id, datetime.now(UTC))

                return Principal(subject=subject, role=role, is_admin=user.is_admin)
