import time

import pytest

from lecture_notes_backend.src.api import auth
from lecture_notes_database import sessions
from lecture_notes_database.errors import (
    InvalidPassword,
    NotAdminError,
    NotFoundError,
    UnauthenticatedError,
    UnexpectedError,
)
from lecture_notes_database.filters import UserCreate, UserFilter
from lecture_notes_database.users import create_user, get_user

WEEK = 7 * 24 * 60 * 60


def test_register_hashes_password_and_logs_in(db_session):
    before = int(time.time())
    issued = auth.register(db_session, "dobb", "secret")
    stored = get_user(db_session, UserFilter(username="dobb"))
    assert stored.password != "secret"
    assert auth.verify_password("secret", stored.password)
    assert issued.user.username == "dobb"
    assert issued.user.is_admin is False
    assert before + WEEK <= issued.expires_at <= int(time.time()) + WEEK
    assert sessions.get_session_by_token(db_session, issued.token).user_id == stored.id

def test_register_duplicate_username(db_session):
    auth.register(db_session, "dobb", "secret")
    with pytest.raises(UnexpectedError):
        auth.register(db_session, "dobb", "other")

def test_login(db_session):
    registered = auth.register(db_session, "dobb", "secret", is_admin=True)
    issued = auth.login(db_session, "dobb", "secret")
    assert issued.token != registered.token
    assert issued.user.model_dump() == {"id": 1, "username": "dobb", "is_admin": True}

def test_login_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        auth.login(db_session, "ghost", "secret")

def test_login_wrong_password(db_session):
    auth.register(db_session, "dobb", "secret")
    with pytest.raises(InvalidPassword):
        auth.login(db_session, "dobb", "wrong")

def test_login_against_unhashed_stored_password(db_session):
    create_user(db_session, UserCreate(username="dobb", password="pass1"))
    assert auth.verify_password("pass1", "pass1") is False
    with pytest.raises(InvalidPassword):
        auth.login(db_session, "dobb", "pass1")

def test_valid_session_authenticates_and_is_kept(db_session):
    issued = auth.register(db_session, "dobb", "secret")
    user = auth.authenticate_by_token(db_session, issued.token)
    assert user.username == "dobb"
    assert sessions.get_session_by_token(db_session, issued.token)

def test_unknown_token(db_session):
    with pytest.raises(UnauthenticatedError):
        auth.authenticate_by_token(db_session, "nope")

def test_expired_session_is_evicted(db_session):
    issued = auth.register(db_session, "dobb", "secret")
    user_id = issued.user.id
    sessions.create_session(db_session, user_id, "stale", expires_at=int(time.time()) - 10)
    with pytest.raises(UnauthenticatedError):
        auth.authenticate_by_token(db_session, "stale")
    with pytest.raises(NotFoundError):
        sessions.get_session_by_token(db_session, "stale")
    # other sessions of the same user are untouched
    assert auth.authenticate_by_token(db_session, issued.token).id == user_id

def test_session_expiring_exactly_now_is_rejected(db_session):
    issued = auth.register(db_session, "dobb", "secret")
    with pytest.raises(UnauthenticatedError):
        auth.authenticate_by_token(db_session, issued.token, now=issued.expires_at)
    with pytest.raises(NotFoundError):
        sessions.get_session_by_token(db_session, issued.token)

def test_admin_required(db_session):
    regular = auth.register(db_session, "dobb", "secret")
    admin = auth.register(db_session, "root", "secret", is_admin=True)
    with pytest.raises(NotAdminError):
        auth.authenticate_by_token(db_session, regular.token, require_admin=True)
    assert auth.authenticate_by_token(db_session, admin.token, require_admin=True).is_admin

def test_logout(db_session):
    issued = auth.register(db_session, "dobb", "secret")
    auth.logout(db_session, issued.token)
    with pytest.raises(UnauthenticatedError):
        auth.authenticate_by_token(db_session, issued.token)

def test_delete_sessions_by_user(db_session):
    first = auth.register(db_session, "dobb", "secret")
    second = auth.login(db_session, "dobb", "secret")
    sessions.delete_sessions_by_user(db_session, first.user.id)
    for token in (first.token, second.token):
        with pytest.raises(NotFoundError):
            sessions.get_session_by_token(db_session, token)

def test_list_users_hides_passwords(db_session):
    auth.register(db_session, "dobb", "secret")
    listed = auth.list_users(db_session)
    assert [u.model_dump() for u in listed] == [{"id": 1, "username": "dobb", "is_admin": False}]
