"""
Query condition building and the forms used by the entity stores.

A filter is a pydantic model whose entity fields are all optional. Every field
that is set turns into exactly one equality predicate, in field declaration
order, and its value is only ever bound as a parameter.
"""
from enum import Enum
from typing import Any, ClassVar, Dict, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field
from sqlalchemy import and_, or_


class OrAnd(str, Enum):
    """Combinator used to join predicates."""

    AND = "and"
    OR = "or"

    @property
    def joiner(self) -> str:
        return " AND " if self is OrAnd.AND else " OR "


class Predicate(NamedTuple):
    column: str
    value: Any

    @property
    def fragment(self) -> str:
        return f"{self.column} = ?"


# PUBLIC_INTERFACE
class RowFilter(BaseModel):
    """Base for all filters: optional field matchers plus combinator and limit."""

    CONTROL_FIELDS: ClassVar[Tuple[str, ...]] = ("or_and", "limit")

    or_and: OrAnd = Field(OrAnd.AND, description="How predicates are joined")
    limit: Optional[int] = Field(None, ge=0, description="Maximum rows affected")

    def predicates(self) -> List[Predicate]:
        """One predicate per set field, id first, scope key last."""
        result = []
        for name in type(self).model_fields:
            if name in self.CONTROL_FIELDS:
                continue
            value = getattr(self, name)
            if value is not None:
                result.append(Predicate(name, value))
        return result

    def to_conditions_params(self) -> Tuple[List[str], List[Any]]:
        predicates = self.predicates()
        return [p.fragment for p in predicates], [p.value for p in predicates]

    def is_empty(self) -> bool:
        return not self.predicates()

    def where_text(self) -> str:
        """Predicate text for logging. Empty when no field is set."""
        fragments, _ = self.to_conditions_params()
        if not fragments:
            return ""
        return "WHERE " + self.or_and.joiner.join(fragments)

    def clause(self, model):
        """SQLAlchemy boolean clause over `model`, or None when nothing is set."""
        conditions = [getattr(model, p.column) == p.value for p in self.predicates()]
        if not conditions:
            return None
        if len(conditions) == 1:
            return conditions[0]
        return and_(*conditions) if self.or_and is OrAnd.AND else or_(*conditions)

    def apply(self, statement, model):
        clause = self.clause(model)
        if clause is not None:
            statement = statement.where(clause)
        return statement


# PUBLIC_INTERFACE
class RowPatch(BaseModel):
    """Base for field-level patches: only fields that are set get written."""

    def changes(self) -> Dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }

    def is_all_none(self) -> bool:
        return not self.changes()


# Sections

class SectionFilter(RowFilter):
    id: Optional[int] = None
    title: Optional[str] = None
    position: Optional[int] = None


class SectionCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class SectionPatch(RowPatch):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    position: Optional[int] = Field(None, ge=0)


# Subsections

class SubsectionFilter(RowFilter):
    id: Optional[int] = None
    title: Optional[str] = None
    position: Optional[int] = None
    section_id: Optional[int] = None


class SubsectionCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    section_id: int


class SubsectionPatch(RowPatch):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    section_id: Optional[int] = None
    position: Optional[int] = Field(None, ge=0)


# Notes

class NoteFilter(RowFilter):
    id: Optional[int] = None
    name: Optional[str] = None
    url: Optional[str] = None
    position: Optional[int] = None
    section_id: Optional[int] = None
    subsection_id: Optional[int] = None


class NoteCreate(BaseModel):
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    section_id: Optional[int] = None
    subsection_id: Optional[int] = None


class NotePatch(RowPatch):
    name: Optional[str] = Field(None, min_length=1)
    url: Optional[str] = Field(None, min_length=1)
    section_id: Optional[int] = None
    subsection_id: Optional[int] = None
    position: Optional[int] = Field(None, ge=0)


# Users

class UserFilter(RowFilter):
    id: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    is_admin: bool = False
