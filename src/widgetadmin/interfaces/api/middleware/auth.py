"""Auth middleware - establishes the authenticated subject."""

from dataclasses import dataclass

import falcon.asgi

DEV_SUBJECT_HEADER = "X-User-Subject"


@dataclass
class RequestUser:
    """Authenticated user from request context."""

    subject: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Sets req.context.user from a Keycloak bearer token.

    Without a Keycloak provider (development) the subject is taken from the
    X-User-Subject header instead. Unauthenticated requests get None.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        if self._keycloak is None:
            subject = (req.get_header(DEV_SUBJECT_HEADER) or "").strip()
            if subject:
                req.context.user = RequestUser(subject=subject)
            return

        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer "):
            identity = self._keycloak.authenticate(auth[7:])
            if identity:
                req.context.user = RequestUser(
                    subject=identity.subject,
                    email=identity.email,
                    username=identity.username,
                )
