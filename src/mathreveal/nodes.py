"""Render tree nodes

All nodes are frozen dataclasses. Children are stored as tuples so finished
trees can be cached and shared between renders.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from mathreveal.spans import MathSpan


@dataclass(frozen=True)
class Text:
    """A raw string leaf; the only node that reveal splits into words"""

    content: str


@dataclass(frozen=True)
class Markup:
    """Pre-rendered markup that is emitted verbatim"""

    html: str


@dataclass(frozen=True)
class Element:
    """A structural element; attributes are read-only once built"""

    tag: str
    children: tuple[RenderNode, ...] = ()
    attrs: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))


@dataclass(frozen=True)
class Fragment:
    """An untagged group of nodes, e.g. a leaf run mixing text and math"""

    children: tuple[RenderNode, ...] = ()


@dataclass(frozen=True)
class Math:
    """A typeset math fragment; never split or animated"""

    span: MathSpan
    content: RenderNode


@dataclass(frozen=True)
class Word:
    """A single word of revealed prose"""

    text: str
    index: int
    duration_ms: int
    delay_ms: int = 0


RenderNode = Text | Markup | Element | Fragment | Math | Word


def element(
    tag: str,
    children: Iterable[RenderNode] = (),
    **attrs: str,
) -> Element:
    """Shorthand for building an Element.

    Attribute names ending in an underscore have it stripped, so that
    `class_="x"` becomes `class="x"`.
    """
    return Element(
        tag,
        tuple(children),
        {name.rstrip("_").replace("_", "-"): value for name, value in attrs.items()},
    )


def iter_text(node: RenderNode) -> Iterable[str]:
    """Yield the visible text of a node, with math as its source"""
    if isinstance(node, Text):
        yield node.content
    elif isinstance(node, Word):
        yield node.text
    elif isinstance(node, Math):
        yield node.span.raw_content
    elif isinstance(node, (Element, Fragment)):
        for child in node.children:
            yield from iter_text(child)


def plain_text(node: RenderNode) -> str:
    return "".join(iter_text(node))
