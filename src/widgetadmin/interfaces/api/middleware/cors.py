"""CORS middleware for the console front end."""

import falcon.asgi

from widgetadmin.interfaces.api.middleware.auth import DEV_SUBJECT_HEADER


class CORSMiddleware:
    """Echoes allowed origins and answers OPTIONS preflight requests."""

    def __init__(self, origins: list[str]) -> None:
        self._origins = set(origins)

    def _set_cors_headers(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        origin = req.get_header("Origin")
        if not origin or origin not in self._origins:
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        resp.set_header("Vary", "Origin")
        resp.set_header("Access-Control-Allow-Methods", "GET, POST, PUT, PATCH, DELETE, OPTIONS")
        resp.set_header(
            "Access-Control-Allow-Headers",
            f"Authorization, Content-Type, {DEV_SUBJECT_HEADER}",
        )
        resp.set_header("Access-Control-Max-Age", "86400")

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit preflight before auth runs."""
        if req.method == "OPTIONS":
            self._set_cors_headers(req, resp)
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        self._set_cors_headers(req, resp)
