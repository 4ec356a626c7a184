"""Shared API dependencies for request context and common services."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from postboard.api.middleware import CONTEXT_STATE_KEY
from postboard.core.context import RequestContext
from postboard.core.tokens import TokenService, get_token_service
from postboard.db.session import get_db
from postboard.services.broadcast import PostBroadcaster, get_broadcaster
from postboard.services.images import ImageStore, get_image_store

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_request_context(request: Request) -> RequestContext:
    """Return the context attached by the identity middleware.

    Requests that bypassed the middleware are treated as anonymous.
    """
    return getattr(request.state, CONTEXT_STATE_KEY, RequestContext.anonymous())


RequestContextDep = Annotated[RequestContext, Depends(get_request_context)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
BroadcasterDep = Annotated[PostBroadcaster, Depends(get_broadcaster)]
ImageStoreDep = Annotated[ImageStore, Depends(get_image_store)]
