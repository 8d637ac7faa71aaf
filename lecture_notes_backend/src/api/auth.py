"""
Account registration, login and session-token authentication.

Sessions are opaque random tokens stored server side. Expiry is checked
lazily: an expired session is deleted the first time someone presents it.
"""
import logging
import secrets
import time
from typing import List, Optional

from passlib.context import CryptContext

from lecture_notes_database import sessions, users
from lecture_notes_database.config import get_settings
from lecture_notes_database.errors import (
    InvalidPassword,
    NotAdminError,
    NotFoundError,
    UnauthenticatedError,
)
from lecture_notes_database.filters import UserCreate, UserFilter

from .schemas import AuthResponse, UserOut

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password, hashed_password):
    # A stored value that is not a recognised hash never matches.
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False

def get_password_hash(password):
    return pwd_context.hash(password)

def generate_token() -> str:
    return secrets.token_urlsafe(32)


# PUBLIC_INTERFACE
def issue_session(db, user, ttl_seconds: Optional[int] = None, now: Optional[int] = None) -> AuthResponse:
    """Stores a new session for `user` and returns the token with the public profile."""
    if ttl_seconds is None:
        ttl_seconds = get_settings().session_ttl_seconds
    now = int(time.time()) if now is None else now
    session = sessions.create_session(
        db, user_id=user.id, token=generate_token(), expires_at=now + ttl_seconds
    )
    return AuthResponse(
        token=session.token,
        expires_at=session.expires_at,
        user=UserOut.model_validate(user),
    )


# PUBLIC_INTERFACE
def register(db, username: str, password: str, is_admin: bool = False,
             ttl_seconds: Optional[int] = None) -> AuthResponse:
    """
    Creates the account and logs it in straight away.

    A taken username violates the unique constraint and surfaces as
    UnexpectedError.
    """
    user = users.create_user(
        db,
        UserCreate(username=username, password=get_password_hash(password), is_admin=is_admin),
    )
    logger.info("Registered user %s (admin=%s)", user.username, user.is_admin)
    return issue_session(db, user, ttl_seconds=ttl_seconds)


# PUBLIC_INTERFACE
def login(db, username: str, password: str, ttl_seconds: Optional[int] = None) -> AuthResponse:
    """Raises NotFoundError for an unknown username and InvalidPassword on a bad password."""
    try:
        user = users.get_user(db, UserFilter(username=username))
    except NotFoundError:
        raise NotFoundError("user not found")
    if not verify_password(password, user.password):
        raise InvalidPassword()
    logger.info("User %s logged in", user.username)
    return issue_session(db, user, ttl_seconds=ttl_seconds)


# PUBLIC_INTERFACE
def authenticate_by_token(db, token: str, require_admin: bool = False, now: Optional[int] = None):
    """Returns the user owning `token`, evicting the session if it has expired."""
    try:
        session = sessions.get_session_by_token(db, token)
    except NotFoundError:
        raise UnauthenticatedError("invalid session token")
    now = int(time.time()) if now is None else now
    user_id = session.user_id
    if session.expires_at <= now:
        sessions.delete_session_by_token(db, token)
        logger.info("Evicted expired session of user %s", user_id)
        raise UnauthenticatedError("session expired")
    try:
        user = users.get_user(db, UserFilter(id=user_id))
    except NotFoundError:
        raise UnauthenticatedError("invalid session token")
    if require_admin and not user.is_admin:
        raise NotAdminError()
    return user


# PUBLIC_INTERFACE
def logout(db, token: str) -> None:
    sessions.delete_session_by_token(db, token)


# PUBLIC_INTERFACE
def list_users(db, form: Optional[UserFilter] = None) -> List[UserOut]:
    return [UserOut.model_validate(user) for user in users.get_users(db, form)]
