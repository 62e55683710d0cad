"""Markdown structure: parse with Python-Markdown, render through callbacks

Python-Markdown turns the marker-substituted text into HTML. The HTML is then
walked with BeautifulSoup and every element is handed, with its already
rendered children, to a Renderer callback.
"""

from __future__ import annotations

from collections.abc import Sequence

import markdown
from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from mathreveal.nodes import Element, RenderNode, Text, element

BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "dd", "details", "div", "dl",
    "dt", "fieldset", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5",
    "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
    "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
}  # fmt: skip

CONTAINER_TAGS = {"ol", "ul", "table", "thead", "tbody", "tfoot", "tr"}


def parse_markdown(text: str, extensions: Sequence[str] = ()) -> str:
    """Convert Markdown text to HTML"""
    return markdown.markdown(text, extensions=list(extensions), output_format="html")


class Renderer:
    """Render callbacks for each Markdown construct.

    The base class renders plain structure. Subclasses override single
    callbacks to change how a construct is rendered.
    """

    def on_text(self, text: str) -> RenderNode:
        return Text(text)

    def on_paragraph(self, children: Sequence[RenderNode]) -> RenderNode:
        return element("p", children)

    def on_heading(self, children: Sequence[RenderNode], level: int) -> RenderNode:
        return element(f"h{level}", children)

    def on_list(self, children: Sequence[RenderNode], ordered: bool) -> RenderNode:
        return element("ol" if ordered else "ul", children)

    def on_list_item(self, children: Sequence[RenderNode]) -> RenderNode:
        return element("li", children)

    def on_blockquote(self, children: Sequence[RenderNode]) -> RenderNode:
        return element("blockquote", children)

    def on_strong(self, children: Sequence[RenderNode]) -> RenderNode:
        return element("strong", children)

    def on_emphasis(self, children: Sequence[RenderNode]) -> RenderNode:
        return element("em", children)

    def on_link(
        self, href: str, children: Sequence[RenderNode], title: str | None = None
    ) -> RenderNode:
        if title:
            return element("a", children, href=href, title=title)
        return element("a", children, href=href)

    def on_table(self, children: Sequence[RenderNode]) -> RenderNode:
        return element("table", children)

    def on_table_head(self, children: Sequence[RenderNode]) -> RenderNode:
        return element("thead", children)

    def on_table_body(self, children: Sequence[RenderNode]) -> RenderNode:
        return element("tbody", children)

    def on_table_row(self, children: Sequence[RenderNode]) -> RenderNode:
        return element("tr", children)

    def on_table_cell(
        self,
        children: Sequence[RenderNode],
        is_header: bool,
        align: str | None = None,
    ) -> RenderNode:
        tag = "th" if is_header else "td"
        if align:
            return element(tag, children, style=f"text-align: {align}")
        return element(tag, children)

    def on_code(self, code: str, language: str | None = None) -> RenderNode:
        if language:
            code_element = element("code", [Text(code)], class_=f"language-{language}")
        else:
            code_element = element("code", [Text(code)])
        return element("pre", [code_element])

    def on_codespan(self, code: str) -> RenderNode:
        return element("code", [Text(code)])

    def on_image(self, src: str, alt: str) -> RenderNode:
        return element("img", src=src, alt=alt)

    def on_line_break(self) -> RenderNode:
        return element("br")

    def on_thematic_break(self) -> RenderNode:
        return element("hr")

    def on_html(
        self, tag: str, attrs: dict[str, str], children: Sequence[RenderNode]
    ) -> RenderNode:
        return Element(tag, tuple(children), attrs)


def walk(html: str, renderer: Renderer) -> list[RenderNode]:
    """Render parsed HTML bottom-up through the renderer callbacks"""
    soup = BeautifulSoup(html, "html.parser")
    return _render_children(soup, renderer)


def _render_children(tag: Tag | BeautifulSoup, renderer: Renderer) -> list[RenderNode]:
    drop_whitespace = _is_block_context(tag)

    nodes: list[RenderNode] = []
    for child in tag.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            text = str(child)
            if not text or (drop_whitespace and not text.strip()):
                continue
            nodes.append(renderer.on_text(text))
        elif isinstance(child, Tag):
            nodes.append(_render_tag(child, renderer))
    return nodes


def _render_tag(tag: Tag, renderer: Renderer) -> RenderNode:
    name = tag.name

    # Leaf elements are rendered from their source, not their children
    if name == "pre":
        code = tag.find("code")
        if isinstance(code, Tag):
            return renderer.on_code(code.get_text(), _language(code))
        return renderer.on_code(tag.get_text())
    if name == "code":
        return renderer.on_codespan(tag.get_text())
    if name == "img":
        return renderer.on_image(_attr(tag, "src"), _attr(tag, "alt"))
    if name == "br":
        return renderer.on_line_break()
    if name == "hr":
        return renderer.on_thematic_break()

    children = _render_children(tag, renderer)

    if name == "p":
        return renderer.on_paragraph(children)
    if name in {"h1", "h2", "h3", "h4", "h5", "h6"}:
        return renderer.on_heading(children, int(name[1]))
    if name in {"ul", "ol"}:
        return renderer.on_list(children, ordered=name == "ol")
    if name == "li":
        return renderer.on_list_item(children)
    if name == "blockquote":
        return renderer.on_blockquote(children)
    if name in {"strong", "b"}:
        return renderer.on_strong(children)
    if name in {"em", "i"}:
        return renderer.on_emphasis(children)
    if name == "a":
        title = _attr(tag, "title") or None
        return renderer.on_link(_attr(tag, "href"), children, title)
    if name == "table":
        return renderer.on_table(children)
    if name == "thead":
        return renderer.on_table_head(children)
    if name == "tbody":
        return renderer.on_table_body(children)
    if name == "tr":
        return renderer.on_table_row(children)
    if name in {"th", "td"}:
        return renderer.on_table_cell(children, name == "th", _align(tag))

    return renderer.on_html(name, _attrs(tag), children)


def _is_block_context(tag: Tag | BeautifulSoup) -> bool:
    """Whitespace between block elements carries no content"""
    if isinstance(tag, BeautifulSoup) or tag.name in CONTAINER_TAGS:
        return True
    return any(isinstance(c, Tag) and c.name in BLOCK_TAGS for c in tag.children)


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name, "")
    if isinstance(value, list):
        return " ".join(value)
    return value or ""


def _attrs(tag: Tag) -> dict[str, str]:
    return {name: _attr(tag, name) for name in tag.attrs}


def _language(code: Tag) -> str | None:
    for css_class in code.get("class") or []:
        if css_class.startswith("language-"):
            return css_class.removeprefix("language-")
    return None


def _align(cell: Tag) -> str | None:
    if cell.get("align"):
        return _attr(cell, "align")
    style = _attr(cell, "style")
    if style.startswith("text-align:"):
        return style.removeprefix("text-align:").strip().rstrip(";")
    return None
