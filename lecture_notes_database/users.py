"""Users table access. Passwords are stored as given; hashing happens upstream."""
from typing import List, Optional

from lecture_notes_database.errors import EmptyFilterError
from lecture_notes_database.filters import UserCreate, UserFilter
from lecture_notes_database.models import User
from lecture_notes_database.store import TableStore

users = TableStore(User, UserFilter, "user")


# PUBLIC_INTERFACE
def create_user(db, form: UserCreate) -> User:
    return users.insert(db, **form.model_dump())


# PUBLIC_INTERFACE
def get_users(db, form: Optional[UserFilter] = None) -> List[User]:
    return users.get_many(db, form)


# PUBLIC_INTERFACE
def get_user(db, form: UserFilter) -> User:
    """Single user lookup; an empty filter is rejected rather than matching anyone."""
    if form.is_empty():
        raise EmptyFilterError()
    return users.get_one(db, form)
