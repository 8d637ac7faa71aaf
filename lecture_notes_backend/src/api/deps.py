from functools import lru_cache
from typing import Optional

from fastapi import Cookie, Depends
from fastapi.security import OAuth2PasswordBearer

from lecture_notes_database.config import Settings, get_settings
from lecture_notes_database.db import SessionLocal
from lecture_notes_database.errors import UnauthenticatedError

from . import auth

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/users/login", auto_error=False)


# DATABASE Dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache()
def get_app_settings() -> Settings:
    return get_settings()


def get_optional_token(
    bearer: Optional[str] = Depends(oauth2_scheme),
    session_token: Optional[str] = Cookie(None),
) -> Optional[str]:
    """Bearer token from the Authorization header, else the session_token cookie."""
    return bearer or session_token


def get_token(token: Optional[str] = Depends(get_optional_token)) -> str:
    if not token:
        raise UnauthenticatedError("missing token")
    return token


def get_current_user(token: str = Depends(get_token), db=Depends(get_db)):
    return auth.authenticate_by_token(db, token)


def require_admin(token: str = Depends(get_token), db=Depends(get_db)):
    return auth.authenticate_by_token(db, token, require_admin=True)


def registration_guard(
    settings: Settings = Depends(get_app_settings),
    token: Optional[str] = Depends(get_optional_token),
    db=Depends(get_db),
):
    """Only lets admins register accounts when REGISTER_ONLY_FOR_ADMIN is set."""
    if not settings.register_only_for_admin:
        return
    if not token:
        raise UnauthenticatedError("missing token")
    auth.authenticate_by_token(db, token, require_admin=True)
