"""Mapping of domain errors and principal state to HTTP responses."""

import falcon.asgi

from widgetadmin.application.principal_context import PrincipalContext, ResolutionState
from widgetadmin.domain.exceptions import (
    Conflict,
    NotFound,
    PermissionDenied,
    PrincipalUnresolved,
    ValidationError,
    WidgetAdminError,
)


def current_principal(
    req: falcon.asgi.Request, resp: falcon.asgi.Response
) -> PrincipalContext | None:
    """Resolved principal context, or None with 401/503 already set on resp."""
    ctx = getattr(req.context, "principal", None)
    if ctx is None:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
        return None
    if ctx.state is not ResolutionState.RESOLVED:
        resp.status = falcon.HTTP_503
        resp.media = {"error": "Principal could not be resolved", "state": ctx.state.value}
        resp.set_header("Retry-After", "1")
        return None
    return ctx


def write_error(resp: falcon.asgi.Response, error: WidgetAdminError) -> None:
    """Set status and body for a domain error."""
    if isinstance(error, ValidationError):
        resp.status = falcon.HTTP_422
        resp.media = {"error": str(error), "field": error.field}
    elif isinstance(error, PermissionDenied):
        resp.status = falcon.HTTP_403
        resp.media = {"error": str(error) or "Permission denied"}
    elif isinstance(error, NotFound):
        resp.status = falcon.HTTP_404
        resp.media = {"error": str(error)}
    elif isinstance(error, Conflict):
        resp.status = falcon.HTTP_409
        resp.media = {"error": str(error)}
    elif isinstance(error, PrincipalUnresolved):
        resp.status = falcon.HTTP_503
        resp.media = {"error": str(error)}
    else:
        resp.status = falcon.HTTP_400
        resp.media = {"error": str(error)}
