# src/postboard/api/v1/endpoints/auth.py
"""Account endpoints: signup, login and status."""

from __future__ import annotations

from fastapi import APIRouter, status

from postboard.api.v1.dependencies import RequestContextDep, SessionDep, TokenServiceDep
from postboard.schemas.common import MessageResponse
from postboard.schemas.user import (
    AuthData,
    LoginRequest,
    SignupRequest,
    SignupResponse,
    StatusResponse,
    StatusUpdateRequest,
)
from postboard.services import account_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.put(
    "/signup",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=SignupResponse,
)
async def signup(payload: SignupRequest, db: SessionDep) -> SignupResponse:
    """Create an account; the caller must log in separately to get a token."""
    user = account_service.signup(db, payload.email, payload.password, payload.name)
    return SignupResponse(message="User created", user_id=str(user.id))


@router.post("/login", summary="Exchange credentials for a token", response_model=AuthData)
async def login(payload: LoginRequest, db: SessionDep, tokens: TokenServiceDep) -> AuthData:
    return account_service.login(db, tokens, payload.email, payload.password)


@router.get("/status", response_model=StatusResponse)
async def get_status(db: SessionDep, ctx: RequestContextDep) -> StatusResponse:
    """Return the caller's status line."""
    return StatusResponse(message="Status fetched!", status=account_service.get_status(db, ctx))


@router.patch("/status", response_model=MessageResponse)
async def update_status(
    payload: StatusUpdateRequest,
    db: SessionDep,
    ctx: RequestContextDep,
) -> MessageResponse:
    """Replace the caller's status line."""
    account_service.update_status(db, ctx, payload.status)
    return MessageResponse(message="Status updated!")
