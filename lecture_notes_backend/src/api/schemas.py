"""Pydantic models for request bodies and responses."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from lecture_notes_database.hierarchy import SectionNode


class MessageResponse(BaseModel):
    message: str


class CreatedResponse(MessageResponse):
    id: int
    position: int


class MoveRequest(BaseModel):
    first_id: int = Field(..., description="Id of the first entity to swap")
    second_id: int = Field(..., description="Id of the second entity to swap")


class SectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    position: int


class SubsectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    position: int
    section_id: int


class NoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    url: str
    position: int
    section_id: Optional[int] = None
    subsection_id: Optional[int] = None


class RootResponse(BaseModel):
    sections: List[SectionNode]


# Users / auth

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(LoginRequest):
    is_admin: bool = False


class UserOut(BaseModel):
    """Public profile; the password hash is never serialized."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    is_admin: bool


class AuthResponse(BaseModel):
    token: str
    expires_at: int
    user: UserOut
