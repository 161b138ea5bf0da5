"""Domain services."""

from widgetadmin.domain.services.authorization import authorize, ensure_authorized

__all__ = ["authorize", "ensure_authorized"]
