from typing import Annotated, List

from fastapi import APIRouter, Depends, Query

from lecture_notes_database.filters import NoteCreate, NoteFilter, NotePatch
from lecture_notes_database.store import notes

from ..deps import get_db, require_admin
from ..schemas import CreatedResponse, MessageResponse, MoveRequest, NoteOut

router = APIRouter(prefix="/notes", tags=["Notes"])


# PUBLIC_INTERFACE
@router.get("", response_model=List[NoteOut], summary="List notes")
def list_notes(form: Annotated[NoteFilter, Query()], db=Depends(get_db)):
    """
    List notes matching the query parameters. Callers sort by position.
    """
    return notes.get_many(db, form)

# PUBLIC_INTERFACE
@router.get("/{note_id}", response_model=NoteOut, summary="Get a single note")
def get_note(note_id: int, db=Depends(get_db)):
    return notes.get_by_id(db, note_id)

# PUBLIC_INTERFACE
@router.post("", response_model=CreatedResponse, status_code=201, summary="Create a note",
             dependencies=[Depends(require_admin)])
def create_note(form: NoteCreate, db=Depends(get_db)):
    """
    Create a note. With a subsection_id it goes to the end of that subsection,
    otherwise it is placed after every existing note.
    """
    row = notes.create(db, form)
    return CreatedResponse(message="created", id=row.id, position=row.position)

# PUBLIC_INTERFACE
@router.post("/move", response_model=MessageResponse, summary="Swap two notes",
             dependencies=[Depends(require_admin)])
def move_note(payload: MoveRequest, db=Depends(get_db)):
    notes.swap(db, payload.first_id, payload.second_id)
    return MessageResponse(message="moved")

# PUBLIC_INTERFACE
@router.put("/{note_id}", response_model=MessageResponse, summary="Update a note",
            dependencies=[Depends(require_admin)])
def update_note(note_id: int, patch: NotePatch, db=Depends(get_db)):
    notes.update_many(db, patch, NoteFilter(id=note_id))
    return MessageResponse(message="updated")

# PUBLIC_INTERFACE
@router.delete("/{note_id}", response_model=MessageResponse, summary="Delete a note",
               dependencies=[Depends(require_admin)])
def delete_note(note_id: int, db=Depends(get_db)):
    notes.delete_one(db, NoteFilter(id=note_id))
    return MessageResponse(message="deleted")
