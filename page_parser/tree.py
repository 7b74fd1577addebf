"""Immutable markup tree built from BeautifulSoup, plus a generic walker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    ProcessingInstruction,
)

from .config import DEFAULT_PARSER

T = TypeVar("T")

DOCUMENT_TAG = "#document"

# NavigableString subclasses that carry no visible text.
_NON_TEXT_STRINGS = (Comment, Doctype, CData, ProcessingInstruction, Declaration)


@dataclass(frozen=True)
class TextNode:
    """Raw character data between tags."""

    value: str


@dataclass(frozen=True)
class ElementNode:
    """A tag with its attributes and children in document order."""

    tag: str
    attrs: Tuple[Tuple[str, str], ...] = ()
    children: Tuple["MarkupNode", ...] = ()

    def get(self, name: str) -> Optional[str]:
        """Return the value of the first attribute called ``name``."""
        for attr_name, value in self.attrs:
            if attr_name == name:
                return value
        return None

    def has_attr(self, name: str, value: str) -> bool:
        return any(attr == (name, value) for attr in self.attrs)


MarkupNode = Union[ElementNode, TextNode]


def _attr_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value)


def _convert(tag: Tag) -> ElementNode:
    children: List[MarkupNode] = []
    for child in tag.children:
        if isinstance(child, Tag):
            children.append(_convert(child))
        elif isinstance(child, NavigableString) and not isinstance(child, _NON_TEXT_STRINGS):
            children.append(TextNode(str(child)))
    return ElementNode(
        tag=tag.name.lower(),
        attrs=tuple((name, _attr_value(value)) for name, value in tag.attrs.items()),
        children=tuple(children),
    )


def parse_markup(html: str, features: str = DEFAULT_PARSER) -> ElementNode:
    """Parse ``html`` and return the document node wrapping the top-level nodes."""
    soup = BeautifulSoup(html, features, multi_valued_attributes=None)
    document = _convert(soup)
    return ElementNode(tag=DOCUMENT_TAG, children=document.children)


class TreeVisitor(Generic[T]):
    """Per-node rules applied by :func:`walk`.

    ``visit_element`` returns the node's own values, which also stops the walk
    from entering its children, or ``None`` to descend. ``visit_text`` returns
    the values contributed by a text node.
    """

    def visit_element(self, node: ElementNode) -> Optional[List[T]]:
        return None

    def visit_text(self, node: TextNode) -> List[T]:
        return []


def _iter_values(root: MarkupNode, visitor: TreeVisitor[T]) -> Iterator[T]:
    stack: List[MarkupNode] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, TextNode):
            yield from visitor.visit_text(node)
            continue
        values = visitor.visit_element(node)
        if values is not None:
            yield from values
            continue
        stack.extend(reversed(node.children))


def walk(root: MarkupNode, visitor: TreeVisitor[T]) -> List[T]:
    """Collect visitor output over ``root`` depth-first in document order."""
    return list(_iter_values(root, visitor))


def find_child(node: ElementNode, tag: str) -> Optional[ElementNode]:
    """Return the first direct child element named ``tag``."""
    for child in node.children:
        if isinstance(child, ElementNode) and child.tag == tag:
            return child
    return None


def find_children(node: ElementNode, tag: str) -> List[ElementNode]:
    return [
        child
        for child in node.children
        if isinstance(child, ElementNode) and child.tag == tag
    ]


def find_text_child(node: ElementNode) -> Optional[TextNode]:
    for child in node.children:
        if isinstance(child, TextNode):
            return child
    return None
