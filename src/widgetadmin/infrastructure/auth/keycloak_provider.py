"""Keycloak OIDC provider - authenticates bearer tokens.

Authentication only establishes the subject. What the subject may do is
decided by the principal fetcher and the authorization evaluator.
"""

from dataclasses import dataclass

import structlog
from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = structlog.get_logger(__name__)


@dataclass
class AuthenticatedIdentity:
    """Identity asserted by an active access token."""

    subject: str
    email: str | None
    username: str | None


class KeycloakProvider:
    """Keycloak OIDC - introspects access tokens."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def authenticate(self, token: str) -> AuthenticatedIdentity | None:
        """Introspect token; None for inactive or unverifiable tokens."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("token_introspection_failed", error=str(e))
            return None
        if not token_info.get("active") or not token_info.get("sub"):
            return None
        return AuthenticatedIdentity(
            subject=token_info["sub"],
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
        )
