"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from .common import ApiModel


class PostInput(ApiModel):
    """Schema for creating a new post.

    ``image_url`` is the path returned by the image upload endpoint.
    """

    title: str
    content: str
    image_url: str = Field(..., description="Path of a previously uploaded image")


class PostUpdateInput(ApiModel):
    """Schema for updating a post; omit ``image_url`` to keep the current image."""

    title: str
    content: str
    image_url: str | None = Field(None, description="New image path, or null to keep")


class CreatorView(ApiModel):
    """Denormalized summary of a post's owner."""

    id: str
    name: str


class PostView(ApiModel):
    """Schema for post information returned by the API."""

    id: str
    title: str
    content: str
    image_url: str
    creator: CreatorView
    created_at: datetime
    updated_at: datetime


class PostPage(ApiModel):
    """One page of the feed plus the total post count."""

    posts: list[PostView]
    total_items: int


class PostResponse(ApiModel):
    message: str
    post: PostView


class PostListResponse(ApiModel):
    message: str
    posts: list[PostView]
    total_items: int


class PostEvent(ApiModel):
    """Broadcast payload describing a post lifecycle change."""

    action: Literal["create", "update", "delete"]
    post: PostView | str
