"""Current principal endpoint - what the console UI may render."""

import falcon.asgi


class CurrentPrincipalResource:
    """GET /v1/me - resolution state, role and per-resource capabilities.

    Unlike the other resources this answers even when the principal is
    pending or failed, so the UI can show a loading or retry state instead
    of an access-denied screen.
    """

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        ctx = getattr(req.context, "principal", None)
        if ctx is None:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        principal = ctx.principal
        role = None
        if principal is not None and principal.role is not None:
            role = {
                "id": str(principal.role.id),
                "name": principal.role.name,
                "description": principal.role.description,
                "permissions": principal.role.permissions.to_grouped(),
            }

        resp.media = {
            "subject": ctx.subject,
            "state": ctx.state.value,
            "is_admin": ctx.is_admin,
            "role": role,
            "capabilities": ctx.capabilities(),
        }
        resp.status = falcon.HTTP_200
