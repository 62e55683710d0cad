"""Math typesetting engines"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import latex2mathml.converter

from mathreveal.nodes import Markup, RenderNode, Text, element
from mathreveal.spans import DisplayMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Delimiter:
    left: str
    right: str
    display: bool


BLOCK_DELIMITERS: tuple[Delimiter, ...] = (
    Delimiter("$$", "$$", display=True),
    Delimiter("\\[", "\\]", display=True),
)

INLINE_DELIMITERS: tuple[Delimiter, ...] = (
    Delimiter("$", "$", display=False),
    Delimiter("\\(", "\\)", display=False),
)


def delimiters_for(display_mode: DisplayMode) -> tuple[Delimiter, ...]:
    if display_mode is DisplayMode.BLOCK:
        return BLOCK_DELIMITERS
    return INLINE_DELIMITERS


def strip_delimiters(
    source: str, delimiters: Sequence[Delimiter]
) -> tuple[str, Delimiter] | None:
    """Return the math body and the delimiter that wraps source, if any"""
    for delimiter in delimiters:
        if (
            len(source) >= len(delimiter.left) + len(delimiter.right)
            and source.startswith(delimiter.left)
            and source.endswith(delimiter.right)
        ):
            body = source[len(delimiter.left) : len(source) - len(delimiter.right)]
            return body, delimiter
    return None


class UnknownEngineError(ValueError):
    pass


class MathEngine(Protocol):
    def typeset(
        self,
        source: str,
        display_mode: DisplayMode,
        delimiters: Sequence[Delimiter],
        strict: bool = False,
    ) -> RenderNode: ...


class MathMLEngine:
    """Typeset math server side as MathML with latex2mathml"""

    name: str = "mathml"

    def typeset(
        self,
        source: str,
        display_mode: DisplayMode,
        delimiters: Sequence[Delimiter],
        strict: bool = False,
    ) -> RenderNode:
        stripped = strip_delimiters(source, delimiters)
        if stripped is None:
            return Text(source)

        body, delimiter = stripped
        display = "block" if delimiter.display else "inline"
        try:
            mathml = latex2mathml.converter.convert(body, display=display)
        except Exception as error:
            if strict:
                raise
            logger.warning("could not typeset %r: %s", source, error)
            return element(
                "span",
                [Text(source)],
                class_="math-error",
                title=f"{type(error).__name__}: {error}",
            )

        tag = "div" if delimiter.display else "span"
        css = "math math-display" if delimiter.display else "math math-inline"
        return element(tag, [Markup(mathml)], class_=css)


class ClientSideEngine:
    """Leave math source in place for KaTeX or MathJax to render in the browser"""

    name: str = "client"

    def typeset(
        self,
        source: str,
        display_mode: DisplayMode,
        delimiters: Sequence[Delimiter],
        strict: bool = False,
    ) -> RenderNode:
        stripped = strip_delimiters(source, delimiters)
        if stripped is None:
            return Text(source)

        if stripped[1].display:
            return element("div", [Text(source)], class_="math math-display")
        return element("span", [Text(source)], class_="math math-inline")


ENGINES: dict[str, type[MathMLEngine] | type[ClientSideEngine]] = {
    MathMLEngine.name: MathMLEngine,
    ClientSideEngine.name: ClientSideEngine,
}


def get_engine(name: str) -> MathEngine:
    """Return a new engine instance by name"""
    try:
        return ENGINES[name]()
    except KeyError as error:
        raise UnknownEngineError(
            f"Unknown math engine '{name}', use one of: {', '.join(ENGINES)}"
        ) from error
