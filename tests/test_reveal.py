"""Test word-by-word reveal"""

from mathreveal.nodes import Element, Math, Text, Word, plain_text
from mathreveal.reveal import reveal
from mathreveal.spans import DisplayMode, MathSpan


def test_reveal_splits_words():
    units = reveal([Text("hello big world")])
    assert units == (
        Word("hello ", 0, 1000),
        Word("big ", 1, 1000),
        Word("world", 2, 1000),
    )


def test_reveal_keeps_whitespace():
    text = "  leading, and\ntrailing  "
    units = reveal([Text(text)])

    assert units[0] == Text("  ")
    assert [u.text for u in units[1:]] == ["leading, ", "and\n", "trailing  "]
    assert plain_text(Element("p", units)) == text


def test_reveal_does_not_split_other_nodes():
    strong = Element("strong", (Text("bold text"),))
    math = Math(
        MathSpan("MATHINLINE0END", "$a + b$", DisplayMode.INLINE),
        Text("$a + b$"),
    )
    units = reveal([Text("one two"), strong, math, Text(" three")])

    assert units == (
        Word("one ", 0, 1000),
        Word("two", 1, 1000),
        strong,
        math,
        Text(" "),
        Word("three", 2, 1000),
    )


def test_reveal_delays_are_monotonic():
    units = reveal([Text("a b c d")], duration_ms=500, stagger_ms=40)
    delays = [u.delay_ms for u in units if isinstance(u, Word)]

    assert delays == [0, 40, 80, 120]
    assert all(u.duration_ms == 500 for u in units if isinstance(u, Word))


def test_reveal_empty_and_blank_text():
    assert reveal([]) == ()
    assert reveal([Text("")]) == ()
    assert reveal([Text(" \n")]) == (Text(" \n"),)
