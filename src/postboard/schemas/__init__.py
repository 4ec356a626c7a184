"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ApiModel, MessageResponse
from .post import (
    CreatorView,
    PostEvent,
    PostInput,
    PostListResponse,
    PostPage,
    PostResponse,
    PostUpdateInput,
    PostView,
)
from .user import (
    AuthData,
    LoginRequest,
    SignupRequest,
    SignupResponse,
    StatusResponse,
    StatusUpdateRequest,
    UserView,
)

__all__ = [
    "ApiModel", "MessageResponse",
    "CreatorView", "PostEvent", "PostInput", "PostListResponse", "PostPage",
    "PostResponse", "PostUpdateInput", "PostView",
    "AuthData", "LoginRequest", "SignupRequest", "SignupResponse",
    "StatusResponse", "StatusUpdateRequest", "UserView",
]
