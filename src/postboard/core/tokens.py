"""Issue and verify signed, time-limited identity tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from postboard.core.settings import settings


@dataclass(frozen=True)
class TokenClaims:
    """Identity recovered from a valid token."""

    user_id: int
    email: str


class TokenService:
    """Stateless JWT signer; validity depends only on signature and expiry."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: int, email: str, *, now: datetime | None = None) -> str:
        """Create a token embedding ``user_id`` and ``email``."""
        issued_at = now or datetime.now(UTC)
        to_encode: dict[str, object] = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        encoded_jwt: str = jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        return encoded_jwt

    def verify(self, token: str) -> TokenClaims | None:
        """Return the token's claims, or None for any kind of invalid token.

        Malformed tokens, bad signatures, expired tokens and tokens without an
        integer subject are indistinguishable to the caller.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

        subject = payload.get("sub")
        if subject is None:
            return None
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            return None
        return TokenClaims(user_id=user_id, email=str(payload.get("email", "")))


def get_token_service() -> TokenService:
    """Return a token service configured from application settings."""
    return TokenService(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.token_ttl_minutes),
    )
