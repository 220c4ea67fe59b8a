"""Authorization gate tests."""

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import pytest

from tasktracker.errors import Forbidden, InvalidToken, Unauthenticated
from tasktracker.services.authorization import (
    AuthorizationGate,
    Identity,
    extract_bearer_token,
)
from tasktracker.services.tokens import TokenService

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def tokens():
    return TokenService("gate-secret", clock=lambda: NOW)


@pytest.fixture
def gate(tokens):
    return AuthorizationGate(tokens)


@pytest.fixture
def token(tokens):
    return tokens.issue(SimpleNamespace(id=3, email="carol@x.com", name="Carol"))


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer   abc  ", "abc"),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer", None),
        ("Bearer   ", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    """Test pulling the token out of the Authorization header."""
    assert extract_bearer_token(header) == expected


def test_authorize_binds_identity(gate, token):
    """Test that a valid token resolves to the embedded identity."""
    identity = gate.authorize(f"Bearer {token}")

    assert identity == Identity(user_id=3, email="carol@x.com", name="Carol")


@pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer "])
def test_missing_token_is_unauthenticated(gate, header):
    """Test that requests without a bearer token are rejected up front."""
    with pytest.raises(Unauthenticated):
        gate.authorize(header)


def test_invalid_token_is_forbidden(gate):
    """Test that a present but invalid token is Forbidden."""
    with pytest.raises(Forbidden) as exc_info:
        gate.authorize("Bearer not-a-token")

    assert isinstance(exc_info.value, InvalidToken)
    assert exc_info.value.status_code == 403


def test_expired_token_is_forbidden(token):
    """Test that an expired token is rejected like any other invalid token."""
    later = TokenService("gate-secret", clock=lambda: NOW + timedelta(hours=25))

    with pytest.raises(Forbidden):
        AuthorizationGate(later).authorize(f"Bearer {token}")


def test_authenticate_returns_claims(gate, token):
    """Test that the raw claims include the expiry."""
    claims = gate.authenticate(f"Bearer {token}")

    assert claims.user_id == 3
    assert claims.expires_at == NOW + timedelta(hours=24)


def test_authorize_token_without_header(gate, token):
    """Test validating an already extracted token."""
    assert gate.authorize_token(token).user_id == 3
