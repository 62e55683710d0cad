"""Decide per composite node between reveal animation and pass-through"""

from __future__ import annotations

from collections.abc import Sequence

from mathreveal.nodes import Fragment, Math, RenderNode
from mathreveal.reveal import reveal


def is_math(node: RenderNode) -> bool:
    """True for typeset math, or a resolved text run that contains math"""
    if isinstance(node, Math):
        return True
    if isinstance(node, Fragment):
        return any(isinstance(child, Math) for child in node.children)
    return False


def has_math_child(children: Sequence[RenderNode]) -> bool:
    return any(is_math(child) for child in children)


def standalone_block_math(children: Sequence[RenderNode]) -> Math | None:
    """Return the math node if children are exactly one block math span"""
    if len(children) == 1:
        child = children[0]
        if isinstance(child, Math) and child.span.is_block:
            return child
    return None


def wrap_children(
    children: Sequence[RenderNode],
    animate: bool = True,
    duration_ms: int = 1000,
    stagger_ms: int = 0,
) -> tuple[RenderNode, ...]:
    """Reveal the children of a node unless any of them holds math.

    Typeset math must stay one unit, so a node with a math child is returned
    unchanged.
    """
    if not animate or has_math_child(children):
        return tuple(children)
    return reveal(children, duration_ms, stagger_ms)
