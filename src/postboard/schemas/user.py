"""Account-related Pydantic schemas."""

from pydantic import Field

from .common import ApiModel


class SignupRequest(ApiModel):
    """Schema for account registration.

    Field checks (email format, password length) are performed by the account
    service so that every problem is reported in a single error.
    """

    email: str = Field(..., description="Unique email address")
    name: str = Field(..., description="Display name")
    password: str = Field(..., description="Plaintext password, at least 5 characters")


class LoginRequest(ApiModel):
    """Schema for login submissions."""

    email: str
    password: str


class AuthData(ApiModel):
    """Token issued after a successful login."""

    token: str = Field(..., description="Signed bearer token, valid for one hour")
    user_id: str = Field(..., description="Identifier of the authenticated user")


class SignupResponse(ApiModel):
    message: str
    user_id: str


class StatusUpdateRequest(ApiModel):
    status: str = Field(..., description="New free-text status line")


class StatusResponse(ApiModel):
    message: str
    status: str


class UserView(ApiModel):
    """Public view of an account; never includes the password hash."""

    id: str
    email: str
    name: str
    status: str
    posts: list[str] = Field(default_factory=list, description="Identifiers of owned posts")
