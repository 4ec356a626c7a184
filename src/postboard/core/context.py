"""Per-request identity passed from the middleware into every operation."""

from __future__ import annotations

from dataclasses import dataclass

from postboard.core.errors import AuthenticationError


@dataclass(frozen=True)
class RequestContext:
    """Authentication state derived once per request; never persisted."""

    is_auth: bool = False
    user_id: int | None = None

    @classmethod
    def anonymous(cls) -> RequestContext:
        return cls()

    @classmethod
    def authenticated(cls, user_id: int) -> RequestContext:
        return cls(is_auth=True, user_id=user_id)

    def require_user_id(self) -> int:
        """Return the caller's user id or raise if the request is anonymous."""
        if not self.is_auth or self.user_id is None:
            raise AuthenticationError("Not authenticated.")
        return self.user_id
