"""Business logic services for the Postboard application."""

from .broadcast import PostBroadcaster, get_broadcaster
from .images import ImageStore, get_image_store

__all__ = [
    "ImageStore",
    "PostBroadcaster",
    "get_broadcaster",
    "get_image_store",
]
