"""Serialize render trees to HTML"""

from __future__ import annotations

from bs4 import BeautifulSoup, NavigableString, Tag

from mathreveal.nodes import Element, Fragment, Markup, Math, RenderNode, Text, Word

VOID_TAGS = {"br", "hr", "img"}


def to_html(node: RenderNode) -> str:
    """Return the HTML markup of a render tree"""
    soup = BeautifulSoup("", "html.parser")
    for item in _build(soup, node):
        soup.append(item)
    return str(soup)


def word_style(word: Word) -> str:
    return f"animation-duration: {word.duration_ms}ms; animation-delay: {word.delay_ms}ms"


def _build(soup: BeautifulSoup, node: RenderNode) -> list[Tag | NavigableString]:
    if isinstance(node, Text):
        return [NavigableString(node.content)]

    if isinstance(node, Markup):
        fragment = BeautifulSoup(node.html, "html.parser")
        return list(fragment.contents)

    if isinstance(node, Word):
        tag = soup.new_tag("span", attrs={"class": "fade-in", "style": word_style(node)})
        tag.string = node.text
        return [tag]

    if isinstance(node, Math):
        return _build(soup, node.content)

    if isinstance(node, Fragment):
        return [item for child in node.children for item in _build(soup, child)]

    if isinstance(node, Element):
        tag = soup.new_tag(node.tag, attrs=dict(node.attrs))
        if node.tag not in VOID_TAGS:
            for child in node.children:
                for item in _build(soup, child):
                    tag.append(item)
        return [tag]

    raise TypeError(f"Cannot serialize {type(node).__name__}")
