"""Permission catalog API resources."""

import falcon.asgi

from widgetadmin.domain.value_objects import all_actions, all_resources
from widgetadmin.interfaces.api.errors import current_principal


class PermissionsResource:
    """GET /v1/permissions and /v1/permissions/grouped - the closed catalog."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Flat catalog: every (resource, action) pair."""
        if not current_principal(req, resp):
            return
        resp.media = {
            "items": [
                {"resource": r.value, "action": a.value}
                for r in all_resources()
                for a in all_actions()
            ]
        }
        resp.status = falcon.HTTP_200

    async def on_get_grouped(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Catalog grouped by resource, the shape the role editor renders."""
        if not current_principal(req, resp):
            return
        actions = [a.value for a in all_actions()]
        resp.media = {
            "items": [{"resource": r.value, "actions": actions} for r in all_resources()]
        }
        resp.status = falcon.HTTP_200
