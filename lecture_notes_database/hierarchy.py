"""
Builds the whole sections -> subsections -> notes tree for the root view.

Three flat queries, no joins; rows are bucketed by parent id and every level
is sorted by position. Notes with neither a subsection nor a section are not
part of the tree.
"""
from collections import defaultdict
from typing import List, Optional

from pydantic import BaseModel, Field

from lecture_notes_database.store import notes, sections, subsections


class NoteNode(BaseModel):
    id: int
    name: str
    url: str
    position: int
    section_id: Optional[int] = None
    subsection_id: Optional[int] = None


class SubsectionNode(BaseModel):
    id: int
    title: str
    position: int
    section_id: int
    notes: List[NoteNode] = Field(default_factory=list)


class SectionNode(BaseModel):
    id: int
    title: str
    position: int
    subsections: List[SubsectionNode] = Field(default_factory=list)
    notes: List[NoteNode] = Field(default_factory=list)


def _by_position(items):
    return sorted(items, key=lambda item: item.position)


# PUBLIC_INTERFACE
def build_tree(db) -> List[SectionNode]:
    """Returns every section with its subsections and directly attached notes.

    Any failed fetch propagates as UnexpectedError and aborts the whole build.
    """
    section_rows = sections.get_many(db)
    subsection_rows = subsections.get_many(db)
    note_rows = notes.get_many(db)

    notes_by_subsection = defaultdict(list)
    notes_by_section = defaultdict(list)
    for row in note_rows:
        node = NoteNode(
            id=row.id,
            name=row.name,
            url=row.url,
            position=row.position,
            section_id=row.section_id,
            subsection_id=row.subsection_id,
        )
        if row.subsection_id is not None:
            notes_by_subsection[row.subsection_id].append(node)
        elif row.section_id is not None:
            notes_by_section[row.section_id].append(node)

    subsections_by_section = defaultdict(list)
    for row in subsection_rows:
        node = SubsectionNode(
            id=row.id,
            title=row.title,
            position=row.position,
            section_id=row.section_id,
            notes=_by_position(notes_by_subsection.get(row.id, [])),
        )
        subsections_by_section[row.section_id].append(node)

    tree = [
        SectionNode(
            id=row.id,
            title=row.title,
            position=row.position,
            subsections=_by_position(subsections_by_section.get(row.id, [])),
            notes=_by_position(notes_by_section.get(row.id, [])),
        )
        for row in section_rows
    ]
    return _by_position(tree)
