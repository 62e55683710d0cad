"""Render Markdown with embedded math into a render tree

The pipeline runs in three steps:

1. extract: math spans are replaced with marker tokens
2. structure: Python-Markdown parses the substituted text
3. resolve: a MathRenderer turns markers in each text run back into math, and
   decides for every composite node between reveal animation and raw output
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from mathreveal.config import cfg
from mathreveal.engine import MathEngine, delimiters_for, get_engine
from mathreveal.extractor import extract
from mathreveal.html import to_html
from mathreveal.nodes import (
    Element,
    Fragment,
    Math,
    RenderNode,
    Text,
    element,
)
from mathreveal.policy import standalone_block_math, wrap_children
from mathreveal.resolver import resolve, restore
from mathreveal.reveal import reveal
from mathreveal.spans import MathSpan, MathSpanStore, MathUnit, RenderUnit
from mathreveal.structure import Renderer, parse_markdown, walk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    engine: str = "mathml"
    strict: bool = False
    reveal: bool = True
    reveal_duration_ms: int = 1000
    reveal_stagger_ms: int = 0
    markdown_extensions: tuple[str, ...] = ("tables", "fenced_code", "sane_lists")
    json_view: bool = True
    link_target_blank: bool = True

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any] | None = None, **overrides: Any
    ) -> RenderOptions:
        """Build options from the configuration, with explicit overrides"""
        config = cfg if config is None else config
        values = {
            name: config[name]
            for name in cls.__dataclass_fields__
            if name in config
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        if "markdown_extensions" in values:
            values["markdown_extensions"] = tuple(values["markdown_extensions"])
        return cls(**values)


@dataclass(frozen=True)
class MathDocument:
    source: str
    substituted: str
    spans: MathSpanStore
    tree: Element
    options: RenderOptions = field(default_factory=RenderOptions)

    def to_html(self) -> str:
        return to_html(self.tree)


class MathRenderer(Renderer):
    """Renderer that typesets math markers and reveals plain prose"""

    def __init__(
        self,
        spans: Mapping[str, MathSpan],
        engine: MathEngine,
        options: RenderOptions | None = None,
    ) -> None:
        self.spans: Mapping[str, MathSpan] = spans
        self.engine: MathEngine = engine
        self.options: RenderOptions = options or RenderOptions()

    def typeset(self, span: MathSpan) -> Math:
        content = self.engine.typeset(
            span.raw_content,
            span.display_mode,
            delimiters_for(span.display_mode),
            self.options.strict,
        )
        return Math(span, content)

    def wrap(self, children: Sequence[RenderNode]) -> tuple[RenderNode, ...]:
        return wrap_children(
            children,
            animate=self.options.reveal,
            duration_ms=self.options.reveal_duration_ms,
            stagger_ms=self.options.reveal_stagger_ms,
        )

    def on_text(self, text: str) -> RenderNode:
        units = resolve(text, self.spans)
        if not any(isinstance(unit, MathUnit) for unit in units):
            return Text("".join(_unit_text(unit) for unit in units))

        if len(units) == 1 and isinstance(units[0], MathUnit):
            return self.typeset(units[0].span)

        nodes: list[RenderNode] = []
        for unit in units:
            if isinstance(unit, MathUnit):
                nodes.append(self.typeset(unit.span))
            else:
                nodes.append(Text(unit.text))

        # The run counts as a math child of its parent, so the literal gaps
        # are revealed here, around the math
        if self.options.reveal:
            return Fragment(
                reveal(
                    nodes,
                    self.options.reveal_duration_ms,
                    self.options.reveal_stagger_ms,
                )
            )
        return Fragment(tuple(nodes))

    def on_paragraph(self, children: Sequence[RenderNode]) -> RenderNode:
        if math := standalone_block_math(children):
            return element("div", [math], class_="math-standalone")
        return element("p", self.wrap(children))

    def on_heading(self, children: Sequence[RenderNode], level: int) -> RenderNode:
        return super().on_heading(self.wrap(children), level)

    def on_list(self, children: Sequence[RenderNode], ordered: bool) -> RenderNode:
        return super().on_list(self.wrap(children), ordered)

    def on_list_item(self, children: Sequence[RenderNode]) -> RenderNode:
        return super().on_list_item(self.wrap(children))

    def on_blockquote(self, children: Sequence[RenderNode]) -> RenderNode:
        return super().on_blockquote(self.wrap(children))

    def on_strong(self, children: Sequence[RenderNode]) -> RenderNode:
        return super().on_strong(self.wrap(children))

    def on_emphasis(self, children: Sequence[RenderNode]) -> RenderNode:
        return super().on_emphasis(self.wrap(children))

    def on_link(
        self, href: str, children: Sequence[RenderNode], title: str | None = None
    ) -> RenderNode:
        attrs = {"href": restore(href, self.spans)}
        if title:
            attrs["title"] = title
        if self.options.link_target_blank:
            attrs.update({"target": "_blank", "rel": "noreferrer"})
        return Element("a", self.wrap(children), attrs)

    def on_table(self, children: Sequence[RenderNode]) -> RenderNode:
        table = super().on_table(self.wrap(children))
        return element("div", [table], class_="table-wrapper")

    def on_table_head(self, children: Sequence[RenderNode]) -> RenderNode:
        return super().on_table_head(self.wrap(children))

    def on_table_body(self, children: Sequence[RenderNode]) -> RenderNode:
        return super().on_table_body(self.wrap(children))

    def on_table_row(self, children: Sequence[RenderNode]) -> RenderNode:
        return super().on_table_row(self.wrap(children))

    def on_table_cell(
        self,
        children: Sequence[RenderNode],
        is_header: bool,
        align: str | None = None,
    ) -> RenderNode:
        return super().on_table_cell(self.wrap(children), is_header, align)

    def on_code(self, code: str, language: str | None = None) -> RenderNode:
        return super().on_code(restore(code, self.spans), language)

    def on_codespan(self, code: str) -> RenderNode:
        return super().on_codespan(restore(code, self.spans))

    def on_image(self, src: str, alt: str) -> RenderNode:
        return super().on_image(restore(src, self.spans), restore(alt, self.spans))

    def on_html(
        self, tag: str, attrs: dict[str, str], children: Sequence[RenderNode]
    ) -> RenderNode:
        attrs = {name: restore(value, self.spans) for name, value in attrs.items()}
        return super().on_html(tag, attrs, children)


def render_document(raw: str, options: RenderOptions | None = None) -> MathDocument:
    """Render raw Markdown with embedded math.

    Results are cached by source text and options; a cached document is
    returned for unchanged input.
    """
    if options is None:
        options = RenderOptions.from_config()
    return _render_cached(raw, options)


def render_html(raw: str, options: RenderOptions | None = None) -> str:
    return render_document(raw, options).to_html()


def clear_cache() -> None:
    _render_cached.cache_clear()


def _render(raw: str, options: RenderOptions) -> MathDocument:
    if options.json_view and (tree := _json_view(raw)):
        return MathDocument(raw, raw, MathSpanStore().freeze(), tree, options)

    substituted, spans = extract(raw)
    renderer = MathRenderer(spans, get_engine(options.engine), options)
    try:
        html = parse_markdown(substituted, options.markdown_extensions)
        children = walk(html, renderer)
    except RecursionError:
        logger.warning("document nesting too deep, rendering as plain text")
        children = [element("pre", [Text(raw)], class_="plain-text")]

    tree = element("article", children, class_="markdown")
    return MathDocument(raw, substituted, spans, tree, options)


_render_cached = functools.lru_cache(maxsize=cfg["cache_size"])(_render)


def _json_view(raw: str) -> Element | None:
    """Pretty-print the document if it is a JSON object or array"""
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        return None

    if not isinstance(data, (dict, list)):
        return None

    code = element(
        "code",
        [Text(json.dumps(data, indent=2, ensure_ascii=False))],
        class_="language-json",
    )
    return element(
        "article", [element("pre", [code], class_="json-view")], class_="markdown"
    )


def _unit_text(unit: RenderUnit) -> str:
    return unit.span.raw_content if isinstance(unit, MathUnit) else unit.text
