"""CORS middleware for the client portal."""
from typing import Iterable

from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class PortalCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware restricted to the portal's origins.

    Requests under ``exempt_prefixes`` bypass it entirely and go straight to
    the route, which answers pre-flight and sets its own open headers.
    """

    def __init__(self, app: ASGIApp, exempt_prefixes: Iterable[str] = (), **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.exempt_prefixes = tuple(exempt_prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].startswith(self.exempt_prefixes):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
