"""Token service: issues and validates signed bearer tokens.

Tokens are stateless JWTs signed with one process-wide secret. There is no
server-side session table, so a token stays valid until it expires; rotating
``JWT_SECRET`` invalidates every outstanding token at once.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from tasktracker.config import Settings, get_settings
from tasktracker.errors import InvalidToken
from tasktracker.models.user import User

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("sub", "email", "name", "exp")
DEFAULT_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class TokenClaims:
    """Identity data embedded in a token."""

    user_id: int
    email: str
    name: str
    expires_at: datetime


class TokenService:
    """Issue and validate time-bounded bearer tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] | None = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TokenService":
        settings = settings or get_settings()
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(minutes=settings.jwt_expiration_minutes),
        )

    def issue(self, user: User) -> str:
        """Create a signed token for the user that expires after the TTL."""
        issued_at = self.clock()
        to_encode = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def validate(self, token: str) -> TokenClaims:
        """Decode a token and check it has not expired.

        Every failure raises the same InvalidToken; the cause is only logged.
        """
        try:
            # Expiry is checked against self.clock below rather than by jose
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidToken() from None

        missing = [claim for claim in REQUIRED_CLAIMS if claim not in payload]
        if missing:
            logger.debug(f"Token rejected: missing claims {missing}")
            raise InvalidToken()

        try:
            user_id = int(payload["sub"])
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (TypeError, ValueError, OverflowError):
            logger.debug("Token rejected: malformed sub or exp claim")
            raise InvalidToken() from None

        if self.clock() >= expires_at:
            logger.debug(f"Token rejected: expired at {expires_at.isoformat()}")
            raise InvalidToken()

        return TokenClaims(
            user_id=user_id,
            email=payload["email"],
            name=payload["name"],
            expires_at=expires_at,
        )
