import pytest

from record_form import RecordForm
from record_session import RecordSession


def _form():
    session = RecordSession()
    session.load(b"Title,Abstract,Year,Venue,Notes\nA,a,2001,ICML,\nB,b,2002,NeurIPS,n\n")
    session.set_editable_fields({"Year", "Venue"})
    form = RecordForm(session)
    form.sync()
    return form, session


def test_sync_seeds_values_from_current_record():
    form, _ = _form()
    assert form.pending() == {"Year": "2001", "Venue": "ICML"}
    assert form.seeded_cursor == 1
    assert form.sync() is False


def test_selection_change_keeps_still_selected_edits():
    form, session = _form()
    form.set_value("Year", "1999")
    form.set_value("Venue", "draft")

    session.set_editable_fields({"Year", "Notes"})

    assert form.sync() is True
    assert form.pending() == {"Year": "1999", "Notes": ""}


def test_cursor_change_discards_unsaved_edits():
    form, session = _form()
    form.set_value("Year", "1999")
    session.next()
    form.sync()
    assert form.pending() == {"Year": "2002", "Venue": "NeurIPS"}


def test_reload_reseeds_even_at_same_cursor():
    form, session = _form()
    form.set_value("Year", "1999")
    session.load(b"Title,Abstract,Year\nC,c,1980\n")
    session.set_editable_fields({"Year"})
    form.sync()
    assert form.pending() == {"Year": "1980"}


def test_focus_is_clamped():
    form, session = _form()
    form.move_focus(5)
    assert form.focused_field() == "Venue"
    form.move_focus(-9)
    assert form.focused_field() == "Year"

    session.set_editable_fields(set())
    form.sync()
    assert form.focused_field() is None


def test_set_value_outside_selection_raises():
    form, _ = _form()
    with pytest.raises(KeyError):
        form.set_value("Title", "nope")


def test_is_dirty_tracks_pending_differences():
    form, _ = _form()
    assert form.is_dirty() is False
    form.set_value("Venue", "ICLR")
    assert form.is_dirty() is True
