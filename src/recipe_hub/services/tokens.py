"""Bearer token issuing and verification (HS256 JWT)."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from recipe_hub.errors import InvalidToken, TokenExpired


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity carried by a token."""

    user_id: UUID
    expires_at: datetime


@dataclass
class TokenService:
    """Signs and validates identity tokens with a server-held secret."""

    secret: str
    expires_in: timedelta = timedelta(days=7)
    algorithm: str = "HS256"

    def issue(self, user_id: UUID, now: datetime | None = None) -> str:
        """Create a signed token for the user."""
        issued_at = now or datetime.now(tz=UTC)
        payload = {
            "userId": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Return the claims of a valid token.

        Raises ``TokenExpired`` for an expired signature and ``InvalidToken``
        for anything else that fails validation.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired(detail=str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(detail=str(exc)) from exc

        raw_user_id = payload.get("userId") or payload.get("id")
        if not raw_user_id:
            raise InvalidToken(detail="Token has no user identity claim")
        try:
            user_id = UUID(str(raw_user_id))
        except ValueError as exc:
            raise InvalidToken(detail="Token user identity is malformed") from exc
        return TokenClaims(
            user_id=user_id,
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
        )
