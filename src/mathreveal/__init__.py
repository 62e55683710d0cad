"""Render Markdown with embedded LaTeX math and word-by-word reveal"""

from importlib.metadata import version

from mathreveal.extractor import extract
from mathreveal.render import (
    MathDocument,
    MathRenderer,
    RenderOptions,
    clear_cache,
    render_document,
    render_html,
)
from mathreveal.resolver import resolve
from mathreveal.reveal import reveal
from mathreveal.spans import DisplayMode, MathSpan, MathSpanStore

__version__ = version("mathreveal")

__all__ = [
    "DisplayMode",
    "MathDocument",
    "MathRenderer",
    "MathSpan",
    "MathSpanStore",
    "RenderOptions",
    "clear_cache",
    "extract",
    "render_document",
    "render_html",
    "resolve",
    "reveal",
]
