"""
Filtered CRUD over a single table, and the position-ordered variant used for
sections, subsections and notes.

Every method takes the SQLAlchemy session as its first argument and commits
its own writes. Multi-step operations (create, update, swap) are several
separate round-trips and are not atomic: a concurrent writer can make a
create lose the position race (surfacing as UnexpectedError) or leave a swap
half done.
"""
import logging
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError

from lecture_notes_database.errors import (
    CantSwapAcrossScope,
    NotFoundError,
    NothingToUpdateError,
    UnexpectedError,
)
from lecture_notes_database.filters import (
    NoteFilter,
    RowFilter,
    RowPatch,
    SectionFilter,
    SubsectionFilter,
)
from lecture_notes_database.models import Note, Section, Subsection

logger = logging.getLogger(__name__)


def _limit_text(form: RowFilter) -> str:
    return "" if form.limit is None else f" LIMIT {form.limit}"


# PUBLIC_INTERFACE
class TableStore:
    """Filtered read/update/delete plus plain inserts for one ORM model."""

    def __init__(self, model, filter_cls, name: str):
        self.model = model
        self.filter_cls = filter_cls
        self.name = name

    def _fail(self, db, action: str, exc: Exception) -> UnexpectedError:
        db.rollback()
        logger.warning("Failed to %s %s: %s", action, self.name, exc)
        return UnexpectedError(f"failed to {action} {self.name}")

    def _execute(self, db, statement, action: str):
        try:
            result = db.execute(statement)
            db.commit()
        except SQLAlchemyError as exc:
            raise self._fail(db, action, exc) from exc
        return result

    def insert(self, db, **values):
        """Adds one row and returns it with its generated id loaded."""
        row = self.model(**values)
        try:
            db.add(row)
            db.commit()
            db.refresh(row)
        except SQLAlchemyError as exc:
            raise self._fail(db, "create", exc) from exc
        return row

    def get_many(self, db, form: Optional[RowFilter] = None) -> List:
        """All rows matching `form` (or up to its limit), in datastore order."""
        if form is None:
            form = self.filter_cls()
        statement = form.apply(select(self.model), self.model)
        if form.limit is not None:
            statement = statement.limit(form.limit)
        logger.debug("SELECT FROM %s %s%s", self.model.__tablename__, form.where_text(),
                     _limit_text(form))
        try:
            return list(db.scalars(statement).all())
        except SQLAlchemyError as exc:
            raise self._fail(db, "fetch", exc) from exc

    def get_one(self, db, form: RowFilter):
        rows = self.get_many(db, form.model_copy(update={"limit": 1}))
        if not rows:
            raise NotFoundError(f"{self.name} not found")
        return rows[0]

    def get_by_id(self, db, row_id: int):
        return self.get_one(db, self.filter_cls(id=row_id))

    def update_many(self, db, patch: RowPatch, form: RowFilter) -> None:
        """
        Writes the set fields of `patch` to every row matching `form`.

        Raises NothingToUpdateError before touching the datastore when the
        patch is empty, and NotFoundError when the existence probe finds no
        matching row.
        """
        if patch.is_all_none():
            raise NothingToUpdateError()
        if not self.get_many(db, form):
            raise NotFoundError(f"{self.name} not found")
        changes = patch.changes()
        statement = (
            form.apply(update(self.model), self.model)
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        logger.debug("UPDATE %s SET %s %s", self.model.__tablename__,
                     ", ".join(f"{name} = ?" for name in changes), form.where_text())
        self._execute(db, statement, "update")

    def delete_many(self, db, form: Optional[RowFilter] = None) -> None:
        """Deletes matching rows; matching nothing is not an error."""
        if form is None:
            form = self.filter_cls()
        statement = delete(self.model).execution_options(synchronize_session=False)
        clause = form.clause(self.model)
        if form.limit is None:
            if clause is not None:
                statement = statement.where(clause)
        elif db.get_bind().dialect.name == "mysql":
            if clause is not None:
                statement = statement.where(clause)
            statement = statement.with_dialect_options(mysql_limit=form.limit)
        else:
            targets = form.apply(select(self.model.id), self.model).limit(form.limit)
            statement = statement.where(self.model.id.in_(targets))
        logger.debug("DELETE FROM %s %s%s", self.model.__tablename__, form.where_text(),
                     _limit_text(form))
        self._execute(db, statement, "delete")

    def delete_one(self, db, form: RowFilter) -> None:
        self.delete_many(db, form.model_copy(update={"limit": 1}))


# PUBLIC_INTERFACE
class OrderedStore(TableStore):
    """
    A TableStore whose rows carry a scope-unique `position`.

    `scope_key` names the column positions are unique within (None means the
    whole table is one scope). A row whose scope value is None draws its
    position from the whole table.
    """

    def __init__(self, model, filter_cls, name: str, scope_key: Optional[str] = None,
                 scope_name: Optional[str] = None):
        super().__init__(model, filter_cls, name)
        self.scope_key = scope_key
        self.scope_name = scope_name

    def max_position(self, db, scope_value: Optional[int] = None) -> Optional[int]:
        """Highest position in the scope, or None if the scope is empty."""
        statement = select(func.max(self.model.position))
        if self.scope_key is not None and scope_value is not None:
            statement = statement.where(getattr(self.model, self.scope_key) == scope_value)
        try:
            return db.scalar(statement)
        except SQLAlchemyError as exc:
            raise self._fail(db, "read max position of", exc) from exc

    def next_position(self, db, scope_value: Optional[int] = None) -> int:
        current = self.max_position(db, scope_value)
        return 0 if current is None else current + 1

    def create(self, db, form):
        """Inserts a row at the end of its scope and returns it."""
        values = form.model_dump()
        scope_value = values.get(self.scope_key) if self.scope_key else None
        position = self.next_position(db, scope_value)
        row = self.insert(db, position=position, **values)
        logger.info("Created %s %s at position %s", self.name, row.id, position)
        return row

    def _set_position(self, db, row_id: int, position: int) -> None:
        statement = (
            update(self.model)
            .where(self.model.id == row_id)
            .values(position=position)
            .execution_options(synchronize_session=False)
        )
        logger.debug("UPDATE %s SET position = ? WHERE id = ?", self.model.__tablename__)
        self._execute(db, statement, "move")

    def swap(self, db, first_id: int, second_id: int) -> None:
        """
        Exchanges the positions of two rows.

        Missing rows are reported together before the scope check. The
        positions are rotated through a temporary value above the table-wide
        maximum so no intermediate write collides. A failure partway through
        is not rolled back.
        """
        missing = {}
        rows = {}
        for key, row_id in (("first_id", first_id), ("second_id", second_id)):
            try:
                rows[key] = self.get_by_id(db, row_id)
            except NotFoundError:
                missing[key] = row_id
        if missing:
            raise NotFoundError(**missing)

        first, second = rows["first_id"], rows["second_id"]
        if self.scope_key is not None:
            first_scope = getattr(first, self.scope_key)
            second_scope = getattr(second, self.scope_key)
            if (first_scope is not None and second_scope is not None
                    and first_scope != second_scope):
                raise CantSwapAcrossScope(
                    f"can't swap {self.name}s from different {self.scope_name}s"
                )

        first_position, second_position = first.position, second.position
        temp = (self.max_position(db) or 0) + 1

        self._set_position(db, first_id, temp)
        self._set_position(db, second_id, first_position)
        self._set_position(db, first_id, second_position)
        logger.info("Swapped %s %s and %s", self.name, first_id, second_id)


sections = OrderedStore(Section, SectionFilter, "section")
subsections = OrderedStore(
    Subsection, SubsectionFilter, "subsection", scope_key="section_id", scope_name="section"
)
notes = OrderedStore(
    Note, NoteFilter, "note", scope_key="subsection_id", scope_name="subsection"
)
