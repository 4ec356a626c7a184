# src/postboard/models/__init__.py
"""SQLAlchemy models for the Postboard application."""

from .post import Post
from .user import DEFAULT_STATUS, User

__all__ = ["DEFAULT_STATUS", "Post", "User"]
