"""Account operations: signup, login and status management."""
from __future__ import annotations

import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from postboard.core.context import RequestContext
from postboard.core.errors import (
    AuthenticationError,
    ConflictError,
    FieldProblem,
    NotFoundError,
    ValidationError,
)
from postboard.core.security import MAX_PASSWORD_BYTES, hash_password, verify_password
from postboard.core.tokens import TokenService
from postboard.models import DEFAULT_STATUS, User
from postboard.schemas.user import AuthData, UserView

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 5

__all__ = [
    "signup",
    "login",
    "get_user",
    "get_status",
    "update_status",
    "to_user_view",
]


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _signup_problems(email: str, password: str, name: str) -> list[FieldProblem]:
    problems: list[FieldProblem] = []
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        problems.append(FieldProblem("email", "Invalid Email"))

    if len(password) < MIN_PASSWORD_LENGTH:
        problems.append(FieldProblem("password", "Password too short"))
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        problems.append(FieldProblem("password", "Password too long"))

    if not name.strip():
        problems.append(FieldProblem("name", "Name is required"))
    return problems


def signup(db: Session, email: str, password: str, name: str) -> User:
    """Create a new account.

    Raises:
        ValidationError: If the email, password or name fail their checks.
        ConflictError: If an account with this email already exists.
    """
    problems = _signup_problems(email, password, name)
    if problems:
        raise ValidationError(problems, "Invalid Input")

    email = _normalize_email(email)
    if db.query(User).filter(User.email == email).first() is not None:
        logger.info("Signup rejected: email already registered")
        raise ConflictError("User already exists")

    user = User(
        email=email,
        password=hash_password(password),
        name=name.strip(),
        status=DEFAULT_STATUS,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent signup claimed the address after the check above.
        db.rollback()
        logger.info("Signup rejected: email registered concurrently")
        raise ConflictError("User already exists") from None
    db.refresh(user)
    logger.info("Created user %s", user.id)
    return user


def login(db: Session, tokens: TokenService, email: str, password: str) -> AuthData:
    """Check credentials and issue a token.

    Raises:
        AuthenticationError: If no account matches or the password is wrong.
    """
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if user is None:
        logger.info("Login failed: unknown email")
        raise AuthenticationError("User not found")

    if not verify_password(password, user.password):
        logger.info("Login failed for user %s: wrong password", user.id)
        raise AuthenticationError("Password is incorrect")

    token = tokens.issue(user.id, user.email)
    return AuthData(token=token, user_id=str(user.id))


def get_user(db: Session, ctx: RequestContext) -> User:
    """Return the account behind an authenticated request."""
    user_id = ctx.require_user_id()
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("No user found")
    return user


def get_status(db: Session, ctx: RequestContext) -> str:
    return get_user(db, ctx).status


def update_status(db: Session, ctx: RequestContext, status: str) -> User:
    """Replace the caller's status line.

    Raises:
        AuthenticationError: If the request is anonymous.
        ValidationError: If ``status`` is blank.
        NotFoundError: If the account no longer exists.
    """
    ctx.require_user_id()
    if not status or not status.strip():
        raise ValidationError(
            [FieldProblem("status", "Status cannot be empty")], "Invalid Input"
        )

    user = get_user(db, ctx)
    user.status = status.strip()
    db.commit()
    db.refresh(user)
    return user


def to_user_view(user: User) -> UserView:
    """Convert a User ORM instance to its API view."""
    return UserView(
        id=str(user.id),
        email=user.email,
        name=user.name,
        status=user.status,
        posts=[str(post_id) for post_id in user.post_ids],
    )
