# src/postboard/api/v1/endpoints/query.py
"""Single endpoint dispatching named query and mutation operations.

Request body: ``{"operation": "<name>", "variables": {...}}``. Variables use
the camelCase names of the public schema (``postId``, ``postInput`` ...).
Every operation except ``login`` and ``createUser`` requires a bearer token.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import pydantic
from fastapi import APIRouter
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from postboard.api.errors import problems_from_pydantic
from postboard.api.v1.dependencies import (
    BroadcasterDep,
    ImageStoreDep,
    RequestContextDep,
    SessionDep,
    TokenServiceDep,
)
from postboard.core.context import RequestContext
from postboard.core.errors import FieldProblem, ValidationError
from postboard.core.tokens import TokenService
from postboard.schemas.common import ApiModel
from postboard.schemas.post import PostInput, PostUpdateInput
from postboard.schemas.user import SignupRequest
from postboard.services import account_service, feed_service
from postboard.services.broadcast import PostBroadcaster
from postboard.services.images import ImageStore

router = APIRouter(tags=["query"])


class QueryRequest(BaseModel):
    """A named operation and its variables."""

    operation: str = Field(..., description="Operation name, e.g. 'posts' or 'createPost'")
    variables: dict[str, Any] = Field(default_factory=dict)


class QueryResponse(BaseModel):
    data: Any


@dataclass(frozen=True)
class OperationCall:
    """Everything an operation handler may need for one request."""

    db: Session
    ctx: RequestContext
    tokens: TokenService
    broadcaster: PostBroadcaster
    images: ImageStore


class LoginArgs(ApiModel):
    email: str
    password: str


class CreateUserArgs(ApiModel):
    user_input: SignupRequest


class PostsArgs(ApiModel):
    page: int | None = None


class PostIdArgs(ApiModel):
    post_id: str


class CreatePostArgs(ApiModel):
    post_input: PostInput


class UpdatePostArgs(ApiModel):
    post_id: str
    post_input: PostUpdateInput


class NoArgs(ApiModel):
    pass


class UpdateStatusArgs(ApiModel):
    status: str


Handler = Callable[[OperationCall, Any], Awaitable[Any]]


def _dump(model: BaseModel) -> Any:
    return model.model_dump(mode="json", by_alias=True)


async def _login(call: OperationCall, args: LoginArgs) -> Any:
    return _dump(account_service.login(call.db, call.tokens, args.email, args.password))


async def _create_user(call: OperationCall, args: CreateUserArgs) -> Any:
    data = args.user_input
    user = account_service.signup(call.db, data.email, data.password, data.name)
    return _dump(account_service.to_user_view(user))


async def _posts(call: OperationCall, args: PostsArgs) -> Any:
    page = feed_service.list_posts(call.db, args.page, ctx=call.ctx, require_auth=True)
    return _dump(page)


async def _post(call: OperationCall, args: PostIdArgs) -> Any:
    return _dump(feed_service.get_post(call.db, args.post_id, ctx=call.ctx, require_auth=True))


async def _create_post(call: OperationCall, args: CreatePostArgs) -> Any:
    data = args.post_input
    post = await feed_service.create_post(
        call.db, call.ctx, call.broadcaster, data.title, data.content, data.image_url
    )
    return _dump(post)


async def _update_post(call: OperationCall, args: UpdatePostArgs) -> Any:
    data = args.post_input
    post = await feed_service.update_post(
        call.db,
        call.ctx,
        call.broadcaster,
        call.images,
        args.post_id,
        data.title,
        data.content,
        data.image_url,
    )
    return _dump(post)


async def _delete_post(call: OperationCall, args: PostIdArgs) -> Any:
    return await feed_service.delete_post(
        call.db, call.ctx, call.broadcaster, call.images, args.post_id
    )


async def _user(call: OperationCall, args: NoArgs) -> Any:
    return _dump(account_service.to_user_view(account_service.get_user(call.db, call.ctx)))


async def _update_status(call: OperationCall, args: UpdateStatusArgs) -> Any:
    user = account_service.update_status(call.db, call.ctx, args.status)
    return _dump(account_service.to_user_view(user))


OPERATIONS: dict[str, tuple[type[BaseModel], Handler]] = {
    "login": (LoginArgs, _login),
    "createUser": (CreateUserArgs, _create_user),
    "posts": (PostsArgs, _posts),
    "post": (PostIdArgs, _post),
    "createPost": (CreatePostArgs, _create_post),
    "updatePost": (UpdatePostArgs, _update_post),
    "deletePost": (PostIdArgs, _delete_post),
    "user": (NoArgs, _user),
    "updateStatus": (UpdateStatusArgs, _update_status),
}


def parse_arguments(operation: str, variables: dict[str, Any]) -> tuple[BaseModel, Handler]:
    """Resolve an operation name and validate its variables.

    Raises:
        ValidationError: For unknown operations or malformed variables.
    """
    entry = OPERATIONS.get(operation)
    if entry is None:
        raise ValidationError(
            [FieldProblem("operation", f"Unknown operation '{operation}'")],
            "Unknown operation",
        )
    args_model, handler = entry
    try:
        args = args_model.model_validate(variables)
    except pydantic.ValidationError as exc:
        raise ValidationError(problems_from_pydantic(list(exc.errors())), "Invalid Input") from exc
    return args, handler


@router.post("/query", response_model=QueryResponse, summary="Run a named operation")
async def run_operation(
    payload: QueryRequest,
    db: SessionDep,
    ctx: RequestContextDep,
    tokens: TokenServiceDep,
    broadcaster: BroadcasterDep,
    images: ImageStoreDep,
) -> QueryResponse:
    """Dispatch ``payload.operation`` and wrap its result in ``data``."""
    args, handler = parse_arguments(payload.operation, payload.variables)
    call = OperationCall(db=db, ctx=ctx, tokens=tokens, broadcaster=broadcaster, images=images)
    return QueryResponse(data=await handler(call, args))
