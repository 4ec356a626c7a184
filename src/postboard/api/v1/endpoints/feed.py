# src/postboard/api/v1/endpoints/feed.py
"""Feed endpoints for the Postboard API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from postboard.api.v1.dependencies import (
    BroadcasterDep,
    ImageStoreDep,
    RequestContextDep,
    SessionDep,
)
from postboard.core.errors import ApiError, FieldProblem, ValidationError
from postboard.schemas.common import MessageResponse
from postboard.schemas.post import PostListResponse, PostResponse
from postboard.services import feed_service
from postboard.services.images import ImageStore

router = APIRouter(prefix="/feed", tags=["feed"])

TitleForm = Annotated[str, Form()]
ContentForm = Annotated[str, Form()]
ImageFile = Annotated[UploadFile | None, File(description="PNG or JPEG image")]


async def _store_upload(images: ImageStore, image: UploadFile | None) -> str | None:
    return await images.save(image) if image is not None else None


def _missing_image(message: str) -> ValidationError:
    return ValidationError([FieldProblem("image", message)], message)


@router.get("/posts", response_model=PostListResponse)
async def list_posts(
    db: SessionDep,
    page: int = Query(1, ge=1, description="1-based page number"),
) -> PostListResponse:
    """List posts newest first; open to anonymous callers."""
    result = feed_service.list_posts(db, page)
    return PostListResponse(
        message="Fetched posts",
        posts=result.posts,
        total_items=result.total_items,
    )


@router.post("/posts", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    title: TitleForm,
    content: ContentForm,
    db: SessionDep,
    ctx: RequestContextDep,
    broadcaster: BroadcasterDep,
    images: ImageStoreDep,
    image: ImageFile = None,
) -> PostResponse:
    """Create a post from a multipart form carrying its image file."""
    ctx.require_user_id()
    image_url = await _store_upload(images, image)
    if image_url is None:
        raise _missing_image("No image provided.")

    try:
        post = await feed_service.create_post(db, ctx, broadcaster, title, content, image_url)
    except ApiError:
        images.clear(image_url)
        raise
    return PostResponse(message="Post created successfully!", post=post)


@router.get("/posts/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, db: SessionDep) -> PostResponse:
    return PostResponse(message="Post fetched!", post=feed_service.get_post(db, post_id))


@router.put("/posts/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    title: TitleForm,
    content: ContentForm,
    db: SessionDep,
    ctx: RequestContextDep,
    broadcaster: BroadcasterDep,
    images: ImageStoreDep,
    image: ImageFile = None,
    current_image: Annotated[str | None, Form(alias="imageUrl")] = None,
) -> PostResponse:
    """Update a post owned by the caller.

    A new ``image`` file replaces the stored image; otherwise ``imageUrl``
    names the image to keep. One of the two must be given.
    """
    ctx.require_user_id()
    uploaded = await _store_upload(images, image)
    image_url = uploaded or current_image
    if not image_url:
        raise _missing_image("No file picked")

    try:
        post = await feed_service.update_post(
            db, ctx, broadcaster, images, post_id, title, content, image_url
        )
    except ApiError:
        if uploaded:
            images.clear(uploaded)
        raise
    return PostResponse(message="Post updated successfully!", post=post)


@router.delete("/posts/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    db: SessionDep,
    ctx: RequestContextDep,
    broadcaster: BroadcasterDep,
    images: ImageStoreDep,
) -> MessageResponse:
    """Delete a post owned by the caller, along with its image."""
    await feed_service.delete_post(db, ctx, broadcaster, images, post_id)
    return MessageResponse(message="Deleted post.")
