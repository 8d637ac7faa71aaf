from sqlalchemy import delete, select

from lecture_notes_database.filters import (
    NoteFilter,
    NotePatch,
    OrAnd,
    SectionFilter,
    SectionPatch,
    SubsectionFilter,
    UserFilter,
)
from lecture_notes_database.models import Note, Section, User


def test_one_predicate_per_set_field_in_declaration_order():
    form = NoteFilter(subsection_id=4, name="Intro", id=2, url="http://x")
    fragments, params = form.to_conditions_params()
    assert fragments == ["id = ?", "name = ?", "url = ?", "subsection_id = ?"]
    assert params == [2, "Intro", "http://x", 4]

def test_scope_key_comes_last():
    fragments, _ = SubsectionFilter(section_id=1, title="A").to_conditions_params()
    assert fragments == ["title = ?", "section_id = ?"]

def test_empty_filter_emits_no_clause():
    form = SectionFilter()
    assert form.is_empty()
    assert form.to_conditions_params() == ([], [])
    assert form.where_text() == ""
    assert form.clause(Section) is None
    statement = form.apply(select(Section), Section)
    assert "WHERE" not in str(statement)

def test_combinator_joins_predicates():
    and_form = UserFilter(username="dobb", password="pass2")
    or_form = UserFilter(username="dobb", password="pass2", or_and=OrAnd.OR)
    assert and_form.where_text() == "WHERE username = ? AND password = ?"
    assert or_form.where_text() == "WHERE username = ? OR password = ?"

def test_combinator_is_irrelevant_for_a_single_predicate():
    assert SectionFilter(id=1, or_and=OrAnd.OR).where_text() == "WHERE id = ?"

def test_values_are_bound_not_inlined():
    hostile = "x' OR '1'='1"
    statement = SectionFilter(title=hostile).apply(select(Section), Section)
    assert hostile not in str(statement)
    assert statement.compile().params == {"title_1": hostile}

def test_compiled_query_text_is_reproducible():
    form = SectionFilter(id=1, title="Algebra", or_and=OrAnd.OR)
    first = str(form.apply(select(Section), Section))
    second = str(form.apply(select(Section), Section))
    assert first == second
    assert "WHERE sections.id = :id_1 OR sections.title = :title_1" in first

def test_filter_applies_to_delete_statements():
    statement = NoteFilter(subsection_id=3).apply(delete(Note), Note)
    assert "WHERE notes.subsection_id = :subsection_id_1" in str(statement)

def test_limit_and_combinator_are_not_predicates():
    form = UserFilter(limit=1, or_and=OrAnd.OR)
    assert form.is_empty()
    assert form.clause(User) is None

def test_patch_changes_only_include_set_fields():
    assert SectionPatch().is_all_none()
    assert SectionPatch(title="New").changes() == {"title": "New"}
    assert NotePatch(position=0, url="http://y").changes() == {"url": "http://y", "position": 0}
