"""Implement some basic test helpers"""

from mathreveal.nodes import Element, Fragment, Math, RenderNode, Word
from mathreveal.render import RenderOptions, render_document


def client_options(**kwargs):
    """Render options that keep math source as is"""
    return RenderOptions(engine="client", **kwargs)


def render_tree(text, **kwargs):
    """Render text and return the root element"""
    return render_document(text, client_options(**kwargs)).tree


def iter_nodes(node: RenderNode):
    """Yield node and all of its descendants"""
    yield node
    if isinstance(node, (Element, Fragment)):
        for child in node.children:
            yield from iter_nodes(child)
    elif isinstance(node, Math):
        yield from iter_nodes(node.content)


def find_elements(node, tag):
    return [n for n in iter_nodes(node) if isinstance(n, Element) and n.tag == tag]


def find_math(node):
    return [n for n in iter_nodes(node) if isinstance(n, Math)]


def find_words(node):
    return [n for n in iter_nodes(node) if isinstance(n, Word)]
