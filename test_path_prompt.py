from path_prompt import PathPrompt
from record_session import RecordSession


def _prompt():
    session = RecordSession()
    messages = []
    loaded = []
    prompt = PathPrompt(session, lambda m, _: messages.append(m), on_loaded=lambda: loaded.append(True))
    return prompt, session, messages, loaded


def _type_and_enter(prompt, text):
    for ch in text:
        prompt.handle_key(ord(ch))
    prompt.handle_key(10)


def test_open_loads_file(tmp_path):
    path = tmp_path / "papers.csv"
    path.write_bytes(b"Title,Abstract,Year\nA,a,2001\nB,b,2002\n")
    prompt, session, messages, loaded = _prompt()

    prompt.start("open")
    _type_and_enter(prompt, str(path))

    assert not prompt.active
    assert session.row_count == 2
    assert loaded == [True]
    assert messages[-1] == f"Loaded {path} (2 papers)"


def test_open_failure_keeps_prompt_and_state(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_bytes(b"Title,Abstract\nA\n")
    prompt, session, messages, loaded = _prompt()

    prompt.start("open")
    _type_and_enter(prompt, str(path))

    assert prompt.active
    assert not session.is_loaded
    assert loaded == []
    assert messages[-1].startswith("Load failed:")


def test_export_writes_prefilled_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    prompt, session, messages, _ = _prompt()
    session.load(b"Title,Abstract,Year\nA,a,2001\n")

    prompt.start("export", "updated_data.csv")
    prompt.handle_key(10)

    assert not prompt.active
    assert (tmp_path / "updated_data.csv").read_bytes() == b"Title,Abstract,Year\nA,a,2001\n"
    assert messages[-1] == "Exported updated_data.csv"


def test_empty_path_and_escape():
    prompt, _, messages, _ = _prompt()
    prompt.start("export")
    prompt.handle_key(10)
    assert prompt.active
    assert messages[-1] == "Path required"

    prompt.handle_key(27)
    assert not prompt.active
    assert messages[-1] == "Export canceled"
