"""Feed operations: paginated listing and the post lifecycle.

Every mutating operation checks, in order: authentication (before touching
the store), existence, ownership, then input validation. Successful
mutations are announced through the post broadcaster.
"""
from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from postboard.core.context import RequestContext
from postboard.core.errors import (
    AuthenticationError,
    AuthorizationError,
    FieldProblem,
    NotFoundError,
    ValidationError,
)
from postboard.core.settings import settings
from postboard.models import Post, User
from postboard.schemas.post import CreatorView, PostEvent, PostPage, PostView
from postboard.services.broadcast import PostBroadcaster
from postboard.services.images import ImageStore

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 5
# Largest key or offset the database accepts (signed 64-bit).
MAX_DB_INTEGER = 2**63 - 1

__all__ = [
    "list_posts",
    "create_post",
    "get_post",
    "update_post",
    "delete_post",
    "to_post_view",
]


def to_post_view(post: Post, creator: User) -> PostView:
    """Combine a post with its owner into the API view."""
    return PostView(
        id=str(post.id),
        title=post.title,
        content=post.content,
        image_url=post.image_url,
        creator=CreatorView(id=str(creator.id), name=creator.name),
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _text_problems(title: str, content: str) -> list[FieldProblem]:
    problems: list[FieldProblem] = []
    if len(title.strip()) < MIN_TEXT_LENGTH:
        problems.append(FieldProblem("title", "Title is invalid"))
    if len(content.strip()) < MIN_TEXT_LENGTH:
        problems.append(FieldProblem("content", "Content is invalid"))
    return problems


def _load_post(db: Session, post_id: int | str) -> Post:
    try:
        key = int(post_id)
    except (TypeError, ValueError):
        raise NotFoundError("No post found") from None
    if not 1 <= key <= MAX_DB_INTEGER:
        raise NotFoundError("No post found")
    post = db.get(Post, key, options=[joinedload(Post.creator)])
    if post is None:
        raise NotFoundError("No post found")
    return post


def _owned_post(db: Session, ctx: RequestContext, post_id: int | str) -> Post:
    user_id = ctx.require_user_id()
    post = _load_post(db, post_id)
    if post.creator_id != user_id:
        logger.info("User %s denied access to post %s", user_id, post.id)
        raise AuthorizationError("Not authorized")
    return post


def list_posts(
    db: Session,
    page: int | None = None,
    *,
    ctx: RequestContext | None = None,
    require_auth: bool = False,
    per_page: int | None = None,
) -> PostPage:
    """Return one page of posts, newest first, with creators joined.

    Args:
        db: Database session.
        page: 1-based page number; None or 0 means the first page.
        ctx: Request context, consulted only when ``require_auth`` is set.
        require_auth: Reject anonymous callers.
        per_page: Page size override; defaults to ``settings.posts_per_page``.
    """
    if require_auth:
        (ctx or RequestContext.anonymous()).require_user_id()

    page = page or 1
    if page < 1:
        raise ValidationError([FieldProblem("page", "Page must be a positive integer")])
    size = per_page or settings.posts_per_page

    offset = (page - 1) * size
    total_items = db.scalar(select(func.count()).select_from(Post)) or 0
    if offset > MAX_DB_INTEGER:
        # Past any page the store could ever hold.
        posts = []
    else:
        posts = db.scalars(
            select(Post)
            .options(joinedload(Post.creator))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(size)
        ).all()

    return PostPage(
        posts=[to_post_view(post, post.creator) for post in posts],
        total_items=int(total_items),
    )


def get_post(
    db: Session,
    post_id: int | str,
    *,
    ctx: RequestContext | None = None,
    require_auth: bool = False,
) -> PostView:
    """Fetch a single post with its owner."""
    if require_auth:
        (ctx or RequestContext.anonymous()).require_user_id()
    post = _load_post(db, post_id)
    return to_post_view(post, post.creator)


async def create_post(
    db: Session,
    ctx: RequestContext,
    broadcaster: PostBroadcaster,
    title: str,
    content: str,
    image_url: str,
) -> PostView:
    """Persist a new post for the calling user and announce it.

    Raises:
        AuthenticationError: If the request is anonymous or the user vanished.
        ValidationError: Listing every problem with title, content and image.
    """
    user_id = ctx.require_user_id()

    problems = _text_problems(title, content)
    if not image_url or not image_url.strip():
        problems.append(FieldProblem("imageUrl", "Image is required"))
    if problems:
        raise ValidationError(problems, "Invalid Input")

    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Invalid user")

    post = Post(title=title.strip(), content=content.strip(), image_url=image_url.strip())
    user.posts.append(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s", user.id, post.id)

    view = to_post_view(post, user)
    await broadcaster.publish(PostEvent(action="create", post=view))
    return view


async def update_post(
    db: Session,
    ctx: RequestContext,
    broadcaster: PostBroadcaster,
    images: ImageStore,
    post_id: int | str,
    title: str,
    content: str,
    image_url: str | None = None,
) -> PostView:
    """Overwrite a post's title and content, and its image when one is given.

    A supplied ``image_url`` that differs from the stored one causes the old
    file to be deleted (best effort) before the reference is replaced.

    Raises:
        AuthenticationError: If the request is anonymous.
        NotFoundError: If the post does not exist.
        AuthorizationError: If the caller does not own the post.
        ValidationError: If the new values fail the creation checks.
    """
    post = _owned_post(db, ctx, post_id)

    problems = _text_problems(title, content)
    if image_url is not None and not image_url.strip():
        problems.append(FieldProblem("imageUrl", "Image is required"))
    if problems:
        raise ValidationError(problems, "Invalid Input")

    post.title = title.strip()
    post.content = content.strip()
    if image_url is not None:
        image_url = image_url.strip()
        if image_url != post.image_url:
            images.clear(post.image_url)
            post.image_url = image_url

    db.commit()
    db.refresh(post)
    logger.info("Updated post %s", post.id)

    view = to_post_view(post, post.creator)
    await broadcaster.publish(PostEvent(action="update", post=view))
    return view


async def delete_post(
    db: Session,
    ctx: RequestContext,
    broadcaster: PostBroadcaster,
    images: ImageStore,
    post_id: int | str,
) -> bool:
    """Remove a post, its image and its entry in the owner's post set.

    Raises:
        AuthenticationError: If the request is anonymous.
        NotFoundError: If the post does not exist.
        AuthorizationError: If the caller does not own the post.
    """
    post = _owned_post(db, ctx, post_id)
    deleted_id = str(post.id)
    creator = post.creator

    images.clear(post.image_url)
    if post in creator.posts:
        creator.posts.remove(post)
    db.delete(post)
    db.commit()
    logger.info("Deleted post %s", deleted_id)

    await broadcaster.publish(PostEvent(action="delete", post=deleted_id))
    return True
