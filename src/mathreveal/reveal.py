"""Word-by-word reveal of prose text"""

from __future__ import annotations

import re
from collections.abc import Iterable

from mathreveal.nodes import RenderNode, Text, Word

WORD_PATTERN = re.compile(r"\S+\s*")


def reveal(
    children: Iterable[RenderNode],
    duration_ms: int = 1000,
    stagger_ms: int = 0,
) -> tuple[RenderNode, ...]:
    """Split the text leaves of children into animated words.

    Each word keeps its trailing whitespace. Leading whitespace of a leaf stays
    a plain Text node. Other nodes are passed through whole and in place.
    """
    units: list[RenderNode] = []
    index = 0
    for child in children:
        if not isinstance(child, Text):
            units.append(child)
            continue

        text = child.content
        words = WORD_PATTERN.findall(text)
        if not words:
            if text:
                units.append(child)
            continue

        if leading := text[: len(text) - len("".join(words))]:
            units.append(Text(leading))

        for word in words:
            units.append(Word(word, index, duration_ms, index * stagger_ms))
            index += 1

    return tuple(units)
