from typing import Annotated, List

from fastapi import APIRouter, Depends, Query

from lecture_notes_database.filters import SectionCreate, SectionFilter, SectionPatch
from lecture_notes_database.store import sections

from ..deps import get_db, require_admin
from ..schemas import CreatedResponse, MessageResponse, MoveRequest, SectionOut

router = APIRouter(prefix="/sections", tags=["Sections"])


# PUBLIC_INTERFACE
@router.get("", response_model=List[SectionOut], summary="List sections")
def list_sections(form: Annotated[SectionFilter, Query()], db=Depends(get_db)):
    """
    List sections matching the query parameters, in storage order.
    """
    return sections.get_many(db, form)

# PUBLIC_INTERFACE
@router.get("/{section_id}", response_model=SectionOut, summary="Get a single section")
def get_section(section_id: int, db=Depends(get_db)):
    return sections.get_by_id(db, section_id)

# PUBLIC_INTERFACE
@router.post("", response_model=CreatedResponse, status_code=201, summary="Create a section",
             dependencies=[Depends(require_admin)])
def create_section(form: SectionCreate, db=Depends(get_db)):
    """
    Create a section at the end of the section list.
    """
    row = sections.create(db, form)
    return CreatedResponse(message="created", id=row.id, position=row.position)

# PUBLIC_INTERFACE
@router.post("/move", response_model=MessageResponse, summary="Swap two sections",
             dependencies=[Depends(require_admin)])
def move_section(payload: MoveRequest, db=Depends(get_db)):
    sections.swap(db, payload.first_id, payload.second_id)
    return MessageResponse(message="moved")

# PUBLIC_INTERFACE
@router.put("/{section_id}", response_model=MessageResponse, summary="Update a section",
            dependencies=[Depends(require_admin)])
def update_section(section_id: int, patch: SectionPatch, db=Depends(get_db)):
    sections.update_many(db, patch, SectionFilter(id=section_id))
    return MessageResponse(message="updated")

# PUBLIC_INTERFACE
@router.delete("/{section_id}", response_model=MessageResponse, summary="Delete a section",
               dependencies=[Depends(require_admin)])
def delete_section(section_id: int, db=Depends(get_db)):
    sections.delete_one(db, SectionFilter(id=section_id))
    return MessageResponse(message="deleted")
