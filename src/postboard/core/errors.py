"""Error taxonomy shared by services and the API boundary.

Each variant carries its HTTP status code and, where relevant, a typed
payload. Services raise these; ``postboard.api.errors`` turns them into
``{"message": ..., "data": ...}`` responses.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar

__all__ = [
    "ApiError",
    "FieldProblem",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]


@dataclass(frozen=True)
class FieldProblem:
    """A single validation failure tied to an input field."""

    field: str
    message: str


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = "An error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def data(self) -> Any:
        """Return the JSON-serialisable payload attached to the error."""
        return None


class ValidationError(ApiError):
    """Input failed one or more checks; carries every problem found."""

    status_code = 422
    default_message = "Invalid input."

    def __init__(self, problems: list[FieldProblem], message: str | None = None) -> None:
        super().__init__(message)
        self.problems = list(problems)

    @property
    def data(self) -> list[dict[str, str]]:
        return [asdict(problem) for problem in self.problems]


class AuthenticationError(ApiError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    default_message = "Not authenticated."


class AuthorizationError(ApiError):
    """Valid identity that does not own the target resource."""

    status_code = 403
    default_message = "Not authorized."


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found."


class ConflictError(ApiError):
    status_code = 409
    default_message = "Resource already exists."


class InternalError(ApiError):
    status_code = 500
