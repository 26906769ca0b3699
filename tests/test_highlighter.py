from __future__ import annotations

from typing import Optional

from clite_engine.syntax import (
    DEFAULT_PROFILES,
    Highlight,
    HighlightProfile,
    ansi_color,
    highlight_render,
    is_separator,
    select_profile,
    style_name,
)

N = Highlight.NORMAL
C = Highlight.COMMENT
S = Highlight.STRING
D = Highlight.NUMBER


def make_profile(
    *,
    comment: Optional[bytes] = b"//",
    numbers: bool = True,
    strings: bool = True,
) -> HighlightProfile:
    return HighlightProfile(
        name="test",
        patterns=(".test",),
        comment_marker=comment,
        numbers=numbers,
        strings=strings,
    )


def test_no_profile_yields_default_classes() -> None:
    assert highlight_render(b'x = "1" // 2', None) == [N] * 12


def test_comment_starts_exactly_at_marker() -> None:
    line = b"int x; // note"

    hl = highlight_render(line, make_profile())

    start = line.index(b"//")
    assert hl[:start] == [N] * start
    assert hl[start:] == [C] * (len(line) - start)


def test_comment_marker_inside_string_is_not_a_comment() -> None:
    line = b'"a//b" x'

    hl = highlight_render(line, make_profile())

    assert hl == [S] * 6 + [N, N]


def test_string_with_escaped_quote_is_one_span() -> None:
    line = b'"ab\\"cd"'

    assert highlight_render(line, make_profile()) == [S] * len(line)


def test_single_quoted_string_closes_only_on_single_quote() -> None:
    line = b"'a\"b' c"

    assert highlight_render(line, make_profile()) == [S] * 5 + [N, N]


def test_unterminated_string_runs_to_end_of_row() -> None:
    assert highlight_render(b'x "abc', make_profile()) == [N, N, S, S, S, S]


def test_number_with_fraction_then_letters() -> None:
    hl = highlight_render(b"3.14abc", make_profile())

    assert hl == [D, D, D, D, N, N, N]


def test_digits_inside_identifier_stay_default() -> None:
    assert highlight_render(b"x1 = 2", make_profile()) == [N, N, N, N, N, D]


def test_leading_dot_is_not_a_number() -> None:
    assert highlight_render(b".5", make_profile()) == [N, D]


def test_number_after_closing_quote_counts_as_separated() -> None:
    assert highlight_render(b'"a"1', make_profile()) == [S, S, S, D]


def test_disabled_flags_leave_bytes_default() -> None:
    profile = make_profile(comment=None, numbers=False, strings=False)

    assert highlight_render(b'"1" // 2', profile) == [N] * 8


def test_number_only_profile_ignores_quotes() -> None:
    profile = make_profile(comment=b"#", strings=False)

    # A quote is not a separator, so the digit after it is not a number.
    assert highlight_render(b'"1" (2)', profile) == [N, N, N, N, N, D, N]


def test_highlighting_is_idempotent() -> None:
    line = b'for (i = 0; i < 10; i++) { s = "x"; } // loop'
    profile = make_profile()

    assert highlight_render(line, profile) == highlight_render(line, profile)


def test_separators() -> None:
    for byte in b" \t,.()+-/*=~%<>[];\0":
        assert is_separator(byte)
    for byte in b"aZ_0\"'":
        assert not is_separator(byte)


def test_color_lookup_is_fixed() -> None:
    assert ansi_color(Highlight.COMMENT) == 36
    assert ansi_color(Highlight.STRING) == 35
    assert ansi_color(Highlight.NUMBER) == 31
    assert ansi_color(Highlight.MATCH) == 34
    assert ansi_color(Highlight.NORMAL) == 37
    assert style_name(Highlight.NORMAL) == "default"
    assert style_name(Highlight.MATCH) == "blue"


def test_select_profile_by_extension() -> None:
    profile = select_profile("src/main.c")

    assert profile is not None
    assert profile.name == "c"
    assert profile.comment_marker == b"//"


def test_extension_must_match_exactly() -> None:
    assert select_profile("notes.cfg") is None
    assert select_profile("archive.c.bak") is None


def test_select_profile_by_substring() -> None:
    profile = select_profile("/home/user/.bashrc")

    assert profile is not None
    assert profile.name == "shell"


def test_select_profile_none_for_missing_name() -> None:
    assert select_profile(None) is None
    assert select_profile("") is None


def test_first_matching_profile_wins() -> None:
    first = HighlightProfile(name="first", patterns=("main",))
    second = HighlightProfile(name="second", patterns=(".c",))

    assert select_profile("main.c", (first, second)) is first
    assert select_profile("util.c", (first, second)) is second


def test_default_profiles_have_unique_names() -> None:
    names = [profile.name for profile in DEFAULT_PROFILES]

    assert len(names) == len(set(names))
