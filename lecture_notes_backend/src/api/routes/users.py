from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from lecture_notes_database.filters import OrAnd, UserFilter

from .. import auth
from ..deps import get_current_user, get_db, get_token, registration_guard, require_admin
from ..schemas import AuthResponse, LoginRequest, MessageResponse, RegisterRequest, UserOut

router = APIRouter(prefix="/users", tags=["Authentication"])


# PUBLIC_INTERFACE
@router.post("/register", response_model=AuthResponse, status_code=201, summary="Register a new user",
             dependencies=[Depends(registration_guard)])
def register(payload: RegisterRequest, db=Depends(get_db)):
    """
    Register a new user and return a fresh session token for it.
    """
    return auth.register(db, payload.username, payload.password, payload.is_admin)

# PUBLIC_INTERFACE
@router.post("/login", response_model=AuthResponse, summary="Login and get a session token")
def login(payload: LoginRequest, db=Depends(get_db)):
    return auth.login(db, payload.username, payload.password)

# PUBLIC_INTERFACE
@router.post("/logout", response_model=MessageResponse, summary="End the current session")
def logout(token: str = Depends(get_token), db=Depends(get_db)):
    auth.logout(db, token)
    return MessageResponse(message="logged out")

# PUBLIC_INTERFACE
@router.get("/me", response_model=UserOut, summary="Get current user profile")
def get_profile(current_user=Depends(get_current_user)):
    return current_user

# PUBLIC_INTERFACE
@router.get("", response_model=List[UserOut], summary="List users",
            dependencies=[Depends(require_admin)])
def list_users(
    id: Optional[int] = None,
    username: Optional[str] = None,
    or_and: OrAnd = OrAnd.AND,
    limit: Optional[int] = Query(None, ge=0),
    db=Depends(get_db),
):
    form = UserFilter(id=id, username=username, or_and=or_and, limit=limit)
    return auth.list_users(db, form)
