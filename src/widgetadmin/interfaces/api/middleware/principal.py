"""Principal middleware - resolves the principal once per request."""

import falcon.asgi

from widgetadmin.application.ports import PrincipalFetcher
from widgetadmin.application.principal_context import PrincipalContext


class PrincipalMiddleware:
    """Builds req.context.principal for the authenticated subject.

    Must run after AuthMiddleware. Resolution failures leave the context in
    the FAILED state rather than raising.
    """

    def __init__(self, fetcher: PrincipalFetcher) -> None:
        self._fetcher = fetcher

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        user = getattr(req.context, "user", None)
        if user is None:
            req.context.principal = None
            return
        ctx = PrincipalContext(self._fetcher, user.subject)
        await ctx.resolve()
        req.context.principal = ctx
