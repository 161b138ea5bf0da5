"""Principal - the actor being authorized."""

from dataclasses import dataclass

from widgetadmin.domain.entities.role import Role


@dataclass(frozen=True)
class Principal:
    """Resolved authorization inputs: the user's role plus the admin flag.

    ``is_admin`` is a per-user escalation, independent of the role.
    """

    subject: str
    role: Role | None = None
    is_admin: bool = False
