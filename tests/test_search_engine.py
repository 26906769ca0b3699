from __future__ import annotations

from clite_engine.buffer import Document
from clite_engine.keys import BACKSPACE, DOWN, ENTER, ESC, LEFT, RIGHT, UP, KeyInput
from clite_engine.search import BACKWARD, FORWARD, SearchEngine, SearchState
from clite_engine.syntax import Highlight, select_profile


def typed(char: str) -> KeyInput:
    return KeyInput(key=char, text=char)


def make_engine(*lines: bytes, filename: str | None = None) -> SearchEngine:
    profile = select_profile(filename)
    return SearchEngine(Document.from_lines(lines, profile=profile))


def match_rows(engine: SearchEngine) -> list[int]:
    return [
        index
        for index, row in enumerate(engine.document)
        if Highlight.MATCH in row.highlight
    ]


def test_search_wraps_forward() -> None:
    engine = make_engine(b"foo", b"bar", b"foo")

    first = engine.handle_key("foo", typed("o"))
    second = engine.handle_key("foo", KeyInput(key=RIGHT))
    third = engine.handle_key("foo", KeyInput(key=DOWN))

    assert (first.row, second.row, third.row) == (0, 2, 0)
    assert third.scroll is True
    assert engine.last_match == 0


def test_search_backward_wraps_to_last_row() -> None:
    engine = make_engine(b"foo", b"bar", b"foo")

    engine.handle_key("foo", typed("o"))
    previous = engine.handle_key("foo", KeyInput(key=LEFT))

    assert previous.row == 2
    assert engine.direction == BACKWARD

    again = engine.handle_key("foo", KeyInput(key=UP))
    assert again.row == 0


def test_backward_without_prior_match_searches_forward() -> None:
    engine = make_engine(b"x", b"foo", b"foo")

    outcome = engine.handle_key("foo", KeyInput(key=UP))

    assert outcome.row == 1
    assert engine.direction == FORWARD


def test_typing_restarts_from_top() -> None:
    engine = make_engine(b"ab", b"abc", b"abcd")

    engine.handle_key("ab", typed("b"))
    engine.handle_key("ab", KeyInput(key=DOWN))
    assert engine.last_match == 1

    outcome = engine.handle_key("abc", typed("c"))

    assert outcome.row == 1


def test_overlay_marks_match_span_only() -> None:
    engine = make_engine(b"say hello", filename="x.c")

    outcome = engine.handle_key("hello", typed("o"))

    row = engine.document.row(0)
    assert row is not None
    assert outcome.render_col == 4
    assert outcome.length == 5
    assert row.highlight[:4] == [Highlight.NORMAL] * 4
    assert row.highlight[4:] == [Highlight.MATCH] * 5


def test_overlay_uses_render_columns() -> None:
    engine = make_engine(b"\tneedle")

    outcome = engine.handle_key("needle", typed("e"))

    assert outcome.render_col == 8


def test_only_one_row_carries_overlay() -> None:
    engine = make_engine(b"foo", b"foo", b"foo")

    engine.handle_key("foo", typed("o"))
    engine.handle_key("foo", KeyInput(key=DOWN))
    engine.handle_key("foo", KeyInput(key=DOWN))

    assert match_rows(engine) == [2]


def test_cancel_restores_exact_highlight() -> None:
    engine = make_engine(b'x = "foo"; // foo 1', filename="main.c")
    row = engine.document.row(0)
    assert row is not None
    before = list(row.highlight)

    engine.handle_key("foo", typed("o"))
    assert row.highlight != before

    cancelled = engine.handle_key("foo", KeyInput(key=ESC))

    assert cancelled.status == "cancel"
    assert row.highlight == before
    assert engine.saved_overlay is None

    engine.handle_key("foo", KeyInput(key=ESC))
    assert row.highlight == before


def test_confirm_resets_state() -> None:
    engine = make_engine(b"alpha", b"beta")

    engine.handle_key("beta", typed("a"))
    outcome = engine.handle_key("beta", KeyInput(key=ENTER))

    assert outcome.status == "confirm"
    assert outcome.finished
    assert engine.state is SearchState.IDLE
    assert engine.last_match is None
    assert engine.direction == FORWARD
    assert match_rows(engine) == []


def test_miss_keeps_last_match() -> None:
    engine = make_engine(b"foo", b"bar")

    engine.handle_key("foo", typed("o"))
    engine.handle_key("foo", KeyInput(key=DOWN))
    assert engine.last_match == 0

    miss = engine.handle_key("zzz", KeyInput(key=DOWN))

    assert miss.status == "miss"
    assert engine.last_match == 0
    assert match_rows(engine) == []


def test_empty_document_misses() -> None:
    assert make_engine().handle_key("foo", typed("o")).status == "miss"
    assert make_engine().handle_key("", typed("x")).status == "miss"


def test_empty_query_matches_first_row() -> None:
    engine = make_engine(b"foo", b"bar")

    engine.handle_key("b", typed("b"))
    assert engine.last_match == 1

    outcome = engine.handle_key("", KeyInput(key=BACKSPACE))

    assert outcome.status == "match"
    assert (outcome.row, outcome.render_col, outcome.length) == (0, 0, 0)
    assert engine.last_match == 0
    assert match_rows(engine) == []


def test_first_occurrence_within_row() -> None:
    engine = make_engine(b"abab")

    outcome = engine.handle_key("ab", typed("b"))

    assert outcome.render_col == 0


def test_begin_enters_searching_state() -> None:
    engine = make_engine(b"foo")

    engine.begin()

    assert engine.state is SearchState.SEARCHING
    assert engine.last_match is None
