import pytest

from fzfcore.history import History, HistoryError

MAX_HISTORY = 50


def test_directory_is_invalid(tmp_path):
    with pytest.raises(HistoryError):
        History(str(tmp_path), MAX_HISTORY)


def test_uncreatable_path(tmp_path):
    with pytest.raises(HistoryError, match="invalid history file"):
        History(str(tmp_path / "missing" / "history"), MAX_HISTORY)


def test_append_and_read(tmp_path):
    path = str(tmp_path / "fzf-history")
    open(path, "w").close()

    h = History(path, MAX_HISTORY)
    for _ in range(MAX_HISTORY + 10):
        h.append("foobar")

    h = History(path, MAX_HISTORY)
    assert len(h.lines) == MAX_HISTORY + 1
    assert h.lines[:MAX_HISTORY] == ["foobar"] * MAX_HISTORY

    h = History(path, MAX_HISTORY)
    h.append("barfoo")
    h.append("")
    h.append("foobarbaz")

    h = History(path, MAX_HISTORY)
    assert len(h.lines) == MAX_HISTORY + 1
    assert h.lines[MAX_HISTORY - 3] == "foobar"
    assert h.lines[MAX_HISTORY - 2] == "barfoo"
    assert h.lines[MAX_HISTORY - 1] == "foobarbaz"


def test_creates_missing_file(tmp_path):
    path = tmp_path / "new-history"
    h = History(str(path), MAX_HISTORY)
    assert path.exists()
    assert path.read_text() == ""
    assert h.lines == [""]
    h.append("x")
    assert path.read_text() == "x\n"


def test_navigation(tmp_path):
    path = tmp_path / "history"
    path.write_text("a\nb\nc\n")
    h = History(str(path), MAX_HISTORY)
    assert h.lines == ["a", "b", "c", ""]
    assert h.current() == ""
    assert h.previous() == "c"
    assert h.previous() == "b"
    assert h.previous() == "a"
    assert h.previous() == "a"
    assert h.next() == "b"
    assert h.next() == "c"
    assert h.next() == ""
    assert h.next() == ""


def test_override(tmp_path):
    path = tmp_path / "history"
    path.write_text("a\nb")
    h = History(str(path), MAX_HISTORY)
    h.override("typed")
    assert h.lines[-1] == "typed"
    assert h.previous() == "b"
    h.override("edited")
    assert h.current() == "edited"
    assert h.lines[1] == "b"
    assert h.next() == "typed"
    assert h.previous() == "edited"
    assert path.read_text() == "a\nb"
    h.append("c")
    assert path.read_text() == "a\nb\nc\n"