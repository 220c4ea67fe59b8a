"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse

from tasktracker.api.dependencies import (
    get_authorization_gate,
    get_credential_store,
    get_current_identity,
    get_token_service,
)
from tasktracker.errors import TaskTrackerError
from tasktracker.schemas.auth import (
    AuthResponse,
    TokenClaimsResponse,
    TokenValidationResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from tasktracker.services.authorization import AuthorizationGate, Identity
from tasktracker.services.credentials import CredentialStore
from tasktracker.services.tokens import TokenService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Register a new user."""
    user = store.register(user_data.email, user_data.password, user_data.name)

    return AuthResponse(
        message="User registered successfully",
        token=tokens.issue(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with email and password."""
    user = store.verify(credentials.email, credentials.password)

    return AuthResponse(
        message="Login successful",
        token=tokens.issue(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/validate", response_model=TokenValidationResponse)
def validate_token(
    gate: Annotated[AuthorizationGate, Depends(get_authorization_gate)],
    authorization: Annotated[str | None, Header()] = None,
):
    """Check a bearer token and return its claims."""
    try:
        claims = gate.authenticate(authorization)
    except TaskTrackerError as e:
        body = TokenValidationResponse(valid=False, error=e.message)
        return JSONResponse(status_code=e.status_code, content=body.model_dump(mode="json"))

    return TokenValidationResponse(valid=True, user=TokenClaimsResponse.model_validate(claims))


@router.get("/me", response_model=UserResponse)
def get_me(
    identity: Annotated[Identity, Depends(get_current_identity)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """Get current user information."""
    return store.get(identity.user_id)


@router.post("/logout")
def logout(
    identity: Annotated[Identity, Depends(get_current_identity)],
):
    """Logout (client should discard token; it stays valid until it expires)."""
    return {"message": "Logged out successfully"}
