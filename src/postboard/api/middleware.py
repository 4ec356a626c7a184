"""Identity middleware: annotate every request with a RequestContext."""

from __future__ import annotations

import logging
from collections.abc import Callable

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from postboard.core.context import RequestContext
from postboard.core.tokens import TokenService, get_token_service

logger = logging.getLogger(__name__)

CONTEXT_STATE_KEY = "request_context"


def context_from_header(authorization: str | None, tokens: TokenService) -> RequestContext:
    """Derive the request context from an ``Authorization`` header value.

    Anything other than a verifiable ``Bearer <token>`` yields an anonymous
    context; this function never raises for bad credentials.
    """
    if not authorization:
        return RequestContext.anonymous()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return RequestContext.anonymous()

    claims = tokens.verify(token.strip())
    if not claims:
        logger.debug("Rejected bearer token; continuing unauthenticated")
        return RequestContext.anonymous()
    return RequestContext.authenticated(claims.user_id)


class IdentityMiddleware:
    """ASGI middleware storing the caller's context in ``scope["state"]``.

    It only annotates requests; operations decide whether an anonymous
    caller is acceptable.
    """

    def __init__(
        self,
        app: ASGIApp,
        token_service_factory: Callable[[], TokenService] = get_token_service,
    ) -> None:
        self.app = app
        self.token_service_factory = token_service_factory

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket"):
            headers = Headers(scope=scope)
            context = context_from_header(
                headers.get("authorization"),
                self.token_service_factory(),
            )
            scope.setdefault("state", {})[CONTEXT_STATE_KEY] = context
        await self.app(scope, receive, send)
