"""Test resolving markers back into math"""

import logging

from mathreveal.extractor import extract
from mathreveal.resolver import find_markers, resolve, restore
from mathreveal.spans import DisplayMode, Literal, MathUnit


def test_no_marker_returns_single_literal():
    _, spans = extract("$x$")
    assert resolve("plain words only", spans) == [Literal("plain words only")]


def test_single_marker_shortcut():
    _, spans = extract("$$x$$")
    span = spans["MATHBLOCK0END"]

    assert resolve("MATHBLOCK0END", spans) == [MathUnit(span)]
    assert resolve(" MATHBLOCK0END", spans) == [Literal(" "), MathUnit(span)]


def test_interleaved_markers_keep_document_order():
    raw = "a $x$ b $$y$$ c \\(z\\) d \\[w\\]"
    substituted, spans = extract(raw)
    units = resolve(substituted, spans)

    assert [type(u) for u in units] == [
        Literal,
        MathUnit,
        Literal,
        MathUnit,
        Literal,
        MathUnit,
        Literal,
        MathUnit,
    ]
    assert [u.span.raw_content for u in units if isinstance(u, MathUnit)] == [
        "$x$",
        "$$y$$",
        "\\(z\\)",
        "\\[w\\]",
    ]
    assert [u.text for u in units if isinstance(u, Literal)] == [
        "a ",
        " b ",
        " c ",
        " d ",
    ]


def test_adjacent_markers():
    substituted, spans = extract("\\(a\\)$$b$$\\[c\\]")
    units = resolve(substituted, spans)

    assert substituted == "MATHINLINE2ENDMATHBLOCK1ENDMATHBLOCK0END"
    assert all(isinstance(u, MathUnit) for u in units)
    assert [u.span.raw_content for u in units] == ["\\(a\\)", "$$b$$", "\\[c\\]"]


def test_round_trip_preserves_source():
    for raw in [
        "$$\\frac{a}{b}$$",
        "\\[\n  x^2 + y^2 = z^2\n\\]",
        "inline \\( \\alpha_1 \\) here",
        "cost $ a + b $ total",
        "$$$$",
    ]:
        substituted, spans = extract(raw)
        assert len(spans) == 1

        units = resolve(substituted, spans)
        [math] = [u for u in units if isinstance(u, MathUnit)]
        assert math.span.raw_content in raw
        assert restore(substituted, spans) == raw


def test_marker_without_span_is_literal(caplog):
    with caplog.at_level(logging.WARNING, logger="mathreveal.resolver"):
        assert resolve("MATHBLOCK0END", {}) == [Literal("MATHBLOCK0END")]
        assert resolve("see MATHINLINE7END here", {}) == [
            Literal("see "),
            Literal("MATHINLINE7END"),
            Literal(" here"),
        ]

    assert "MATHINLINE7END" in caplog.text


def test_find_markers_sorted_by_position():
    matches = find_markers("MATHINLINE3END x MATHBLOCK0END y MATHINLINE1END")

    assert [m.position for m in matches] == sorted(m.position for m in matches)
    assert [m.kind for m in matches] == [
        DisplayMode.INLINE,
        DisplayMode.BLOCK,
        DisplayMode.INLINE,
    ]
    assert matches[1].token == "MATHBLOCK0END"
    assert matches[1].end == matches[1].position + len("MATHBLOCK0END")


def test_restore_keeps_unknown_markers():
    _, spans = extract("$x$")
    assert restore("a MATHINLINE0END b MATHBLOCK9END", spans) == "a $x$ b MATHBLOCK9END"
    assert restore("MATHINLINE0END", {}) == "MATHINLINE0END"
