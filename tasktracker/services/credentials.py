"""Credential store: user registration and password verification."""

import logging
import re
from typing import Any

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tasktracker.errors import (
    DuplicateIdentity,
    InternalFailure,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from tasktracker.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

EMAIL_MAX_LENGTH = 100
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 20

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: Any) -> list[str]:
    """Return the reasons an email is unacceptable (empty if it is fine)."""
    if not isinstance(email, str) or not email.strip():
        return ["Email is required"]
    normalized = normalize_email(email)
    if not EMAIL_PATTERN.match(normalized):
        return ["Email is not valid (expected user@domain.com)"]
    if len(normalized) > EMAIL_MAX_LENGTH:
        return [f"Email cannot exceed {EMAIL_MAX_LENGTH} characters"]
    return []


def validate_name(name: Any) -> list[str]:
    if not isinstance(name, str) or not name.strip():
        return ["Name is required"]
    trimmed = name.strip()
    if len(trimmed) < NAME_MIN_LENGTH:
        return [f"Name must be at least {NAME_MIN_LENGTH} characters"]
    if len(trimmed) > NAME_MAX_LENGTH:
        return [f"Name cannot exceed {NAME_MAX_LENGTH} characters"]
    return []


def validate_password(password: Any) -> list[str]:
    """Check the password complexity policy.

    6-20 characters with at least one uppercase letter, one lowercase letter
    and one digit.
    """
    if not isinstance(password, str) or not password:
        return ["Password is required"]
    if len(password) < PASSWORD_MIN_LENGTH:
        return [f"Password must be at least {PASSWORD_MIN_LENGTH} characters"]
    if len(password) > PASSWORD_MAX_LENGTH:
        return [f"Password cannot exceed {PASSWORD_MAX_LENGTH} characters"]
    if not (
        any(c.isupper() for c in password)
        and any(c.islower() for c in password)
        and any(c.isdigit() for c in password)
    ):
        return [
            "Password must contain at least one uppercase letter, one lowercase letter and a number"
        ]
    return []


class CredentialStore:
    """Owns user identity records and password verification."""

    def __init__(self, db: Session):
        self.db = db

    def register(self, email: Any, password: Any, name: Any) -> User:
        """Create a user after validating and normalizing every field.

        Raises ValidationError listing every malformed field, or
        DuplicateIdentity if the normalized email is already taken.
        """
        reasons = validate_name(name) + validate_email(email) + validate_password(password)
        if reasons:
            raise ValidationError(reasons)

        normalized_email = normalize_email(email)
        if self.get_by_email(normalized_email) is not None:
            raise DuplicateIdentity()

        user = User(
            email=normalized_email,
            password_hash=get_password_hash(password),
            name=name.strip(),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            self.db.rollback()
            raise DuplicateIdentity() from None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to store user: {e}")
            raise InternalFailure() from e
        self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    def verify(self, email: Any, password: Any) -> User:
        """Return the user matching the credentials.

        Unknown email and wrong password raise the same InvalidCredentials;
        only the log records which one happened.
        """
        if not isinstance(email, str) or not isinstance(password, str):
            pwd_context.dummy_verify()
            logger.debug("Login rejected: malformed credentials")
            raise InvalidCredentials()

        user = self.get_by_email(normalize_email(email))
        if user is None:
            # Spend the same hashing time as a wrong password would
            pwd_context.dummy_verify()
            logger.debug("Login rejected: unknown email")
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            logger.debug(f"Login rejected: wrong password for user {user.id}")
            raise InvalidCredentials()
        return user

    def get(self, user_id: int) -> User:
        """Get a user by id."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFound("User")
        return user

    def get_by_email(self, email: str) -> User | None:
        """Get a user by normalized email."""
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user: {e}")
            raise InternalFailure() from e
