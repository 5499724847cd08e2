from types import SimpleNamespace

import pytest

from actions import ActionDispatcher
from command_executor import HELP_LINES, CommandExecutor
from errors import CONFIRMATION, END_OF_DATA
from record_editor import RecordEditor
from record_form import RecordForm
from record_session import RecordSession


class DummyPicker:
    def __init__(self):
        self.started = 0

    def start(self):
        self.started += 1


class DummyPrompt:
    def __init__(self):
        self.calls = []

    def start(self, kind, default=None):
        self.calls.append((kind, default))


@pytest.fixture
def env():
    session = RecordSession()
    session.load(b"Title,Abstract,Year,Venue\nA,a,2001,ICML\nB,b,2002,KDD\n")
    form = RecordForm(session)
    notices = []
    messages = []
    dispatcher = ActionDispatcher(session, form, notices.append)
    editor = RecordEditor(session, form, dispatcher, lambda m, _: messages.append(m))
    picker = DummyPicker()
    prompt = DummyPrompt()
    executor = CommandExecutor(
        session, editor, picker, prompt, lambda m, _: messages.append(m), "updated_data.csv"
    )
    return SimpleNamespace(
        session=session, form=form, notices=notices, messages=messages,
        picker=picker, prompt=prompt, executor=executor,
    )


def test_explicit_navigation_and_submit_commands(env):
    env.executor.execute("fields Year")
    env.form.set_value("Year", "2020")
    env.executor.execute("submit")
    env.executor.execute("next")
    env.executor.execute("next")
    env.executor.execute("prev")
    env.executor.execute("previous")

    assert env.session.df["Year"].tolist() == ["2020", "2002"]
    assert env.session.cursor == 1
    assert env.notices == [CONFIRMATION, END_OF_DATA]


def test_fields_command_with_list_and_without(env):
    env.executor.execute("fields Venue, Year")
    assert env.session.editable_fields == ("Year", "Venue")

    env.executor.execute("fields")
    assert env.picker.started == 1


def test_fields_command_reports_invalid_names(env):
    env.executor.execute("fields Year,Nope")
    assert env.executor._last_success is False
    assert env.messages[-1] == "Unknown fields: Nope"
    assert env.session.editable_fields == ()


def test_export_command_default_and_explicit_path(env, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    env.executor.execute("export")
    assert (tmp_path / "updated_data.csv").exists()

    env.executor.execute("w 'my papers.csv'")
    assert (tmp_path / "my papers.csv").exists()
    assert env.messages[-1] == "Exported my papers.csv"


def test_open_command(env, tmp_path):
    path = tmp_path / "other.csv"
    path.write_bytes(b"Title,Abstract,Tag\nX,x,t\n")

    env.executor.execute(f"open {path}")
    assert env.session.columns == ["Title", "Abstract", "Tag"]
    assert env.picker.started == 1

    env.executor.execute("open")
    assert env.prompt.calls == [("open", str(path))]


def test_open_command_failure_is_reported(env, tmp_path):
    env.executor.execute(f"open {tmp_path / 'missing.csv'}")
    assert env.executor._last_success is False
    assert env.messages[-1].startswith("Cannot read")
    assert env.session.row_count == 2


def test_help_unknown_and_quit(env):
    assert env.executor.execute("help") == HELP_LINES
    assert env.executor.execute("frobnicate") is None
    assert env.messages[-1] == "Unknown command: frobnicate"
    env.executor.execute("q")
    assert env.executor.quit_requested is True
