import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from lecture_notes_database.errors import NotFoundError, UnexpectedError
from lecture_notes_database.models import Session

logger = logging.getLogger(__name__)


def _fail(db, action, exc):
    db.rollback()
    logger.warning("Failed to %s session: %s", action, exc)
    return UnexpectedError(f"failed to {action} session")


# PUBLIC_INTERFACE
def create_session(db, user_id: int, token: str, expires_at: int) -> Session:
    row = Session(user_id=user_id, token=token, expires_at=expires_at)
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
    except SQLAlchemyError as exc:
        raise _fail(db, "create", exc) from exc
    return row


# PUBLIC_INTERFACE
def get_session_by_token(db, token: str) -> Session:
    try:
        row = db.scalars(select(Session).where(Session.token == token).limit(1)).first()
    except SQLAlchemyError as exc:
        raise _fail(db, "fetch", exc) from exc
    if row is None:
        raise NotFoundError("session not found")
    return row


# PUBLIC_INTERFACE
def delete_session_by_token(db, token: str) -> None:
    # tokens are unique, so this removes at most one row
    try:
        db.execute(
            delete(Session)
            .where(Session.token == token)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise _fail(db, "delete", exc) from exc


# PUBLIC_INTERFACE
def delete_sessions_by_user(db, user_id: int) -> None:
    try:
        db.execute(
            delete(Session)
            .where(Session.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise _fail(db, "delete", exc) from exc
