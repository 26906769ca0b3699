from __future__ import annotations

from typing import Optional

from clite_engine.buffer import Document, Row, clamp_cursor
from clite_engine.syntax import Highlight, HighlightProfile, select_profile


def c_profile() -> HighlightProfile:
    profile = select_profile("main.c")
    assert profile is not None
    return profile


def make_document(*lines: bytes, profile: Optional[HighlightProfile] = None) -> Document:
    return Document.from_lines(lines, profile=profile)


def assert_consistent(document: Document) -> None:
    for row in document:
        assert len(row.highlight) == len(row.render)
        assert row.render == Row(bytes(row.raw), profile=row.profile).render


def test_from_lines_starts_clean() -> None:
    document = make_document(b"one", b"two")

    assert document.row_count == 2
    assert document.dirty == 0
    assert document.lines() == [b"one", b"two"]


def test_insert_row_clamps_index_and_marks_dirty() -> None:
    document = make_document(b"a")

    document.insert_row(99, b"tail")
    document.insert_row(-5, b"head")

    assert document.lines() == [b"head", b"a", b"tail"]
    assert document.dirty == 2
    assert_consistent(document)


def test_insert_row_renders_immediately() -> None:
    document = Document(profile=c_profile())

    row = document.insert_row(0, b"\tx = 1;")

    assert row.render == b" " * 8 + b"x = 1;"
    assert row.highlight[12] == Highlight.NUMBER


def test_delete_row_out_of_range_is_noop() -> None:
    document = make_document(b"a", b"b")

    assert document.delete_row(5) is False
    assert document.delete_row(-1) is False
    assert document.dirty == 0

    assert document.delete_row(0) is True
    assert document.lines() == [b"b"]
    assert document.dirty == 1


def test_insert_char_clamps_column_to_append() -> None:
    document = make_document(b"ab")

    document.insert_char(0, 1, ord("X"))
    document.insert_char(0, 50, ord("!"))

    assert document.lines() == [b"aXb!"]
    assert document.dirty == 2


def test_insert_char_updates_render_for_tab() -> None:
    document = make_document(b"ab")

    document.insert_char(0, 1, ord("\t"))

    row = document.row(0)
    assert row is not None
    assert row.render == b"a       b"
    assert len(row.highlight) == 9


def test_insert_char_on_missing_row_is_noop() -> None:
    document = make_document(b"ab")

    assert document.insert_char(3, 0, ord("x")) is False
    assert document.dirty == 0


def test_delete_char() -> None:
    document = make_document(b"abc")

    assert document.delete_char(0, 1) is True
    assert document.delete_char(0, 2) is False
    assert document.lines() == [b"ac"]
    assert document.dirty == 1


def test_split_row_moves_tail_to_new_row() -> None:
    document = make_document(b"hello world", b"next", profile=c_profile())

    document.split_row(0, 5)

    assert document.lines() == [b"hello", b" world", b"next"]
    assert_consistent(document)


def test_split_row_at_end_creates_empty_row() -> None:
    document = make_document(b"abc")

    document.split_row(0, 3)

    assert document.lines() == [b"abc", b""]


def test_merge_with_previous_joins_rows() -> None:
    document = make_document(b"foo", b"\tbar")

    join_at = document.merge_with_previous(1)

    assert join_at == 3
    assert document.lines() == [b"foo\tbar"]
    row = document.row(0)
    assert row is not None
    assert row.render == b"foo     bar"
    assert_consistent(document)


def test_merge_first_row_is_noop() -> None:
    document = make_document(b"foo")

    assert document.merge_with_previous(0) is None
    assert document.dirty == 0


def test_to_flat_text_terminates_every_row() -> None:
    document = make_document(b"a", b"", b"b\tc")

    assert document.to_flat_text() == b"a\n\nb\tc\n"
    assert Document().to_flat_text() == b""


def test_changing_profile_rehighlights_every_row() -> None:
    document = make_document(b"x = 42; // answer", b'"s"')

    assert all(hl == Highlight.NORMAL for row in document for hl in row.highlight)

    document.set_profile(c_profile())
    first, second = document.row(0), document.row(1)
    assert first is not None and second is not None
    assert first.highlight[4] == Highlight.NUMBER
    assert first.highlight[-1] == Highlight.COMMENT
    assert second.highlight == [Highlight.STRING] * 3

    document.set_profile(None)
    assert all(hl == Highlight.NORMAL for row in document for hl in row.highlight)


def test_rows_created_later_use_active_profile() -> None:
    document = make_document(b"1", profile=c_profile())

    document.split_row(0, 0)
    document.insert_char(0, 0, ord("7"))

    row = document.row(0)
    assert row is not None
    assert row.highlight == [Highlight.NUMBER]


def test_highlight_length_invariant_across_edits() -> None:
    document = make_document(b"\tint x = 3.5; // c", profile=c_profile())

    document.insert_char(0, 0, ord("\t"))
    document.split_row(0, 6)
    document.delete_char(1, 0)
    document.merge_with_previous(1)
    document.insert_row(1, b'"q\\"x"\t1')

    assert_consistent(document)


def test_clamp_cursor_allows_virtual_last_line() -> None:
    document = make_document(b"abc", b"de")

    assert clamp_cursor(document, (1, 10)) == (1, 2)
    assert clamp_cursor(document, (2, 4)) == (2, 0)
    assert clamp_cursor(document, (9, 1)) == (2, 0)
    assert clamp_cursor(document, (-1, -1)) == (0, 0)


def test_render_slice_is_index_aligned() -> None:
    row = Row(b"\tab", profile=c_profile())

    text, highlight = row.render_slice(6, 4)

    assert text == b"  ab"
    assert len(highlight) == len(text)
    assert row.render_slice(50, 4) == (b"", [])
