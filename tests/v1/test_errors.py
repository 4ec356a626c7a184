# tests/v1/test_errors.py
"""Tests for the error boundary."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from postboard.api.errors import register_exception_handlers
from postboard.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    FieldProblem,
    InternalError,
    NotFoundError,
    ValidationError,
)


def _boundary_client(exc: Exception) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def boom() -> None:
        raise exc

    @app.get("/typed")
    async def typed(count: int) -> dict[str, int]:
        return {"count": count}

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.parametrize(
    ("error", "expected_status", "expected_message"),
    [
        (AuthenticationError(), 401, "Not authenticated."),
        (AuthorizationError(), 403, "Not authorized."),
        (NotFoundError("No post found"), 404, "No post found"),
        (ConflictError("User already exists"), 409, "User already exists"),
        (InternalError("Store unavailable"), 500, "Store unavailable"),
    ],
)
def test_typed_errors_keep_their_status(error, expected_status, expected_message) -> None:
    response = _boundary_client(error).get("/boom")
    assert response.status_code == expected_status
    assert response.json() == {"message": expected_message, "data": None}


def test_validation_error_lists_problems() -> None:
    error = ValidationError(
        [FieldProblem("title", "Title is invalid"), FieldProblem("content", "Content is invalid")],
        "Invalid Input",
    )
    response = _boundary_client(error).get("/boom")
    assert response.status_code == 422
    assert response.json() == {
        "message": "Invalid Input",
        "data": [
            {"field": "title", "message": "Title is invalid"},
            {"field": "content", "message": "Content is invalid"},
        ],
    }


def test_request_validation_uses_same_shape() -> None:
    response = _boundary_client(AuthenticationError()).get("/typed", params={"count": "many"})
    assert response.status_code == 422
    body = response.json()
    assert body["message"] == "Validation failed."
    assert [problem["field"] for problem in body["data"]] == ["count"]


def test_unclassified_error_is_generic() -> None:
    response = _boundary_client(KeyError("secret detail")).get("/boom")
    assert response.status_code == 500
    assert response.json() == {"message": "An error occurred.", "data": None}
