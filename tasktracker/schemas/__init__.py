"""Pydantic schemas for API requests and responses."""

from tasktracker.schemas.auth import (
    AuthResponse,
    TokenClaimsResponse,
    TokenValidationResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from tasktracker.schemas.error import ErrorResponse
from tasktracker.schemas.task import TaskCreate, TaskResponse, TaskUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "TokenClaimsResponse",
    "TokenValidationResponse",
    "ErrorResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
]
