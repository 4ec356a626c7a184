# src/postboard/models/user.py
"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.db.session import Base
from postboard.db.time import utcnow

if TYPE_CHECKING:
    from .post import Post

DEFAULT_STATUS = "I am new!"


class User(Base):
    """Account identified by a unique email and a bcrypt password hash."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    # bcrypt hash; the plaintext is never stored.
    password: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, default=DEFAULT_STATUS)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    posts: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="creator",
        cascade="all, delete-orphan",
        order_by="Post.id",
    )

    @property
    def post_ids(self) -> list[int]:
        """Return identifiers of the posts owned by this user."""
        return [post.id for post in self.posts]
