"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tasktracker.database import get_db
from tasktracker.errors import Unauthenticated
from tasktracker.services.authorization import AuthorizationGate, Identity
from tasktracker.services.credentials import CredentialStore
from tasktracker.services.tasks import TaskRepository
from tasktracker.services.tokens import TokenService

# Missing credentials are reported by the gate, not by HTTPBearer
security = HTTPBearer(auto_error=False)


def get_token_service() -> TokenService:
    """Get token service configured from settings."""
    return TokenService.from_settings()


def get_authorization_gate(
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthorizationGate:
    return AuthorizationGate(token_service)


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    gate: Annotated[AuthorizationGate, Depends(get_authorization_gate)],
) -> Identity:
    """Get the identity bound to the request's bearer token."""
    if credentials is None:
        raise Unauthenticated()
    return gate.authorize_token(credentials.credentials)


def get_credential_store(
    db: Annotated[Session, Depends(get_db)],
) -> CredentialStore:
    """Get credential store bound to the request's session."""
    return CredentialStore(db)


def get_task_repository(
    db: Annotated[Session, Depends(get_db)],
) -> TaskRepository:
    """Get task repository bound to the request's session."""
    return TaskRepository(db)
