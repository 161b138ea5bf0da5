"""Principal fetcher port - resolves who is asking."""

from typing import Protocol

from widgetadmin.domain.entities import Principal


class PrincipalFetcher(Protocol):
    """Port resolving an authenticated subject to its authorization inputs."""

    async def fetch(self, subject: str) -> Principal: ...
