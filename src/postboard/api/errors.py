"""Single error boundary turning exceptions into ``{message, data}`` bodies."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from postboard.core.errors import ApiError, FieldProblem, ValidationError

logger = logging.getLogger(__name__)


def error_body(message: str, data: object = None) -> dict[str, object]:
    return {"message": message, "data": data}


def problems_from_pydantic(errors: list[dict]) -> list[FieldProblem]:
    """Flatten pydantic error entries into field problems."""
    problems: list[FieldProblem] = []
    for err in errors:
        location = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        problems.append(FieldProblem(".".join(location) or "request", str(err.get("msg", "invalid"))))
    return problems


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.data))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError(problems_from_pydantic(list(exc.errors())), "Validation failed.")
    return JSONResponse(status_code=error.status_code, content=error_body(error.message, error.data))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("An error occurred."),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error boundary on ``app``."""
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
