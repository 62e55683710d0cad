"""Math spans, marker tokens and the resolver's render units"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum


class DisplayMode(Enum):
    """Layout of a math span: centered display math or inline flow"""

    BLOCK = "block"
    INLINE = "inline"


MARKER_PREFIX: dict[DisplayMode, str] = {
    DisplayMode.BLOCK: "MATHBLOCK",
    DisplayMode.INLINE: "MATHINLINE",
}

MARKER_PATTERNS: dict[DisplayMode, re.Pattern[str]] = {
    mode: re.compile(rf"{prefix}\d+END") for mode, prefix in MARKER_PREFIX.items()
}


def make_marker(display_mode: DisplayMode, sequence: int) -> str:
    """Return the marker token for a span"""
    return f"{MARKER_PREFIX[display_mode]}{sequence}END"


@dataclass(frozen=True)
class MathSpan:
    id: str
    raw_content: str
    display_mode: DisplayMode

    @property
    def is_block(self) -> bool:
        return self.display_mode is DisplayMode.BLOCK


class MathSpanStore(Mapping[str, MathSpan]):
    """Ordered collection of math spans keyed by marker token.

    The store is append-only while an extraction pass runs and read-only
    once frozen.
    """

    def __init__(self) -> None:
        self._spans: dict[str, MathSpan] = {}
        self._frozen: bool = False

    def add(self, raw_content: str, display_mode: DisplayMode) -> MathSpan:
        """Append a new span and return it with its fresh marker token"""
        if self._frozen:
            raise RuntimeError("MathSpanStore is frozen")

        span = MathSpan(
            id=make_marker(display_mode, len(self._spans)),
            raw_content=raw_content,
            display_mode=display_mode,
        )
        self._spans[span.id] = span
        return span

    def freeze(self) -> MathSpanStore:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __getitem__(self, key: str) -> MathSpan:  # pyright: ignore[reportImplicitOverride]
        return self._spans[key]

    def __iter__(self) -> Iterator[str]:  # pyright: ignore[reportImplicitOverride]
        return iter(self._spans)

    def __len__(self) -> int:  # pyright: ignore[reportImplicitOverride]
        return len(self._spans)

    def __repr__(self) -> str:  # pyright: ignore[reportImplicitOverride]
        return f"MathSpanStore({list(self._spans.values())!r})"


@dataclass(frozen=True)
class Literal:
    """Plain text produced by the resolver"""

    text: str


@dataclass(frozen=True)
class MathUnit:
    """A math span resolved from its marker"""

    span: MathSpan


RenderUnit = Literal | MathUnit
