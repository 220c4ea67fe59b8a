"""Authorization gate run in front of every protected operation."""

import logging
from dataclasses import dataclass

from tasktracker.errors import Forbidden, InvalidToken, Unauthenticated
from tasktracker.services.tokens import TokenClaims, TokenService

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller bound to a request.

    ``user_id`` is the only scoping key the task repository trusts.
    """

    user_id: int
    email: str
    name: str

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "Identity":
        return cls(user_id=claims.user_id, email=claims.email, name=claims.name)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Pull the token out of an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME or not token.strip():
        return None
    return token.strip()


class AuthorizationGate:
    """Resolve a request's bearer token into an Identity."""

    def __init__(self, token_service: TokenService):
        self.token_service = token_service

    def authenticate(self, authorization: str | None) -> TokenClaims:
        """Validate the Authorization header value and return the token's claims.

        Raises Unauthenticated when no bearer token is present and Forbidden
        when one is present but does not validate.
        """
        token = extract_bearer_token(authorization)
        if token is None:
            raise Unauthenticated()
        return self._validate(token)

    def authorize(self, authorization: str | None) -> Identity:
        return Identity.from_claims(self.authenticate(authorization))

    def authorize_token(self, token: str) -> Identity:
        return Identity.from_claims(self._validate(token))

    def _validate(self, token: str) -> TokenClaims:
        try:
            return self.token_service.validate(token)
        except InvalidToken:
            raise Forbidden() from None
