"""Turn marker tokens in parsed text back into math render units"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from mathreveal.spans import (
    MARKER_PATTERNS,
    DisplayMode,
    Literal,
    MathSpan,
    MathUnit,
    RenderUnit,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerMatch:
    token: str
    position: int
    kind: DisplayMode

    @property
    def end(self) -> int:
        return self.position + len(self.token)


def find_markers(text: str) -> list[MarkerMatch]:
    """Find block and inline markers in text, sorted by position"""
    matches = [
        MarkerMatch(match.group(0), match.start(), kind)
        for kind, pattern in MARKER_PATTERNS.items()
        for match in pattern.finditer(text)
    ]
    return sorted(matches, key=lambda m: m.position)


def resolve(leaf_text: str, spans: Mapping[str, MathSpan]) -> list[RenderUnit]:
    """Split a leaf text run into literal text and math units.

    Units are returned in document order. A marker without a matching span is
    kept as literal text.
    """
    matches = find_markers(leaf_text)
    if not matches:
        return [Literal(leaf_text)]

    if len(matches) == 1 and matches[0].token == leaf_text:
        if span := spans.get(leaf_text):
            return [MathUnit(span)]

    units: list[RenderUnit] = []
    last_end = 0
    for match in matches:
        if match.position > last_end:
            units.append(Literal(leaf_text[last_end : match.position]))

        if span := spans.get(match.token):
            units.append(MathUnit(span))
        else:
            logger.warning("no math span for marker %s", match.token)
            units.append(Literal(match.token))

        last_end = match.end

    if last_end < len(leaf_text):
        units.append(Literal(leaf_text[last_end:]))

    return units


def restore(text: str, spans: Mapping[str, MathSpan]) -> str:
    """Put the original math source back in place of its markers.

    Used where the source should be shown as written (code, URLs, alt text)
    instead of typeset.
    """
    if not spans:
        return text

    parts: list[str] = []
    last_end = 0
    for match in find_markers(text):
        parts.append(text[last_end : match.position])
        span = spans.get(match.token)
        parts.append(span.raw_content if span else match.token)
        last_end = match.end
    parts.append(text[last_end:])
    return "".join(parts)
