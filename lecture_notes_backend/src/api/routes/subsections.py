from typing import Annotated, List

from fastapi import APIRouter, Depends, Query

from lecture_notes_database.filters import SubsectionCreate, SubsectionFilter, SubsectionPatch
from lecture_notes_database.store import subsections

from ..deps import get_db, require_admin
from ..schemas import CreatedResponse, MessageResponse, MoveRequest, SubsectionOut

router = APIRouter(prefix="/subsections", tags=["Subsections"])


# PUBLIC_INTERFACE
@router.get("", response_model=List[SubsectionOut], summary="List subsections")
def list_subsections(form: Annotated[SubsectionFilter, Query()], db=Depends(get_db)):
    return subsections.get_many(db, form)

# PUBLIC_INTERFACE
@router.get("/{subsection_id}", response_model=SubsectionOut, summary="Get a single subsection")
def get_subsection(subsection_id: int, db=Depends(get_db)):
    return subsections.get_by_id(db, subsection_id)

# PUBLIC_INTERFACE
@router.post("", response_model=CreatedResponse, status_code=201, summary="Create a subsection",
             dependencies=[Depends(require_admin)])
def create_subsection(form: SubsectionCreate, db=Depends(get_db)):
    """
    Create a subsection at the end of its section. The section must exist.
    """
    row = subsections.create(db, form)
    return CreatedResponse(message="created", id=row.id, position=row.position)

# PUBLIC_INTERFACE
@router.post("/move", response_model=MessageResponse, summary="Swap two subsections",
             dependencies=[Depends(require_admin)])
def move_subsection(payload: MoveRequest, db=Depends(get_db)):
    """
    Swap the positions of two subsections of the same section.
    """
    subsections.swap(db, payload.first_id, payload.second_id)
    return MessageResponse(message="moved")

# PUBLIC_INTERFACE
@router.put("/{subsection_id}", response_model=MessageResponse, summary="Update a subsection",
            dependencies=[Depends(require_admin)])
def update_subsection(subsection_id: int, patch: SubsectionPatch, db=Depends(get_db)):
    subsections.update_many(db, patch, SubsectionFilter(id=subsection_id))
    return MessageResponse(message="updated")

# PUBLIC_INTERFACE
@router.delete("/{subsection_id}", response_model=MessageResponse, summary="Delete a subsection",
               dependencies=[Depends(require_admin)])
def delete_subsection(subsection_id: int, db=Depends(get_db)):
    subsections.delete_one(db, SubsectionFilter(id=subsection_id))
    return MessageResponse(message="deleted")
