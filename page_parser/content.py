"""Image, text and SEO extraction over the markup tree."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .errors import MissingNode
from .models import SeoMetadata
from .tree import (
    ElementNode,
    TextNode,
    TreeVisitor,
    find_child,
    find_children,
    find_text_child,
    walk,
)

logger = logging.getLogger("page_parser")

MIN_SNIPPET_CHARS = 10
IMAGE_SOURCE_ATTRIBUTES = ("src", "node-src")
SKIPPED_TEXT_TAGS = frozenset({"script", "style"})


class ImageSourceVisitor(TreeVisitor[str]):
    """Collect raw ``src`` values of ``img`` elements."""

    def visit_element(self, node: ElementNode) -> Optional[List[str]]:
        if node.tag != "img":
            return None
        source = next(
            (node.get(name) for name in IMAGE_SOURCE_ATTRIBUTES if node.get(name) is not None),
            None,
        )
        if source is None or source.startswith("data:"):
            return []
        return [source]


class TextSnippetVisitor(TreeVisitor[str]):
    """Collect trimmed text fragments outside scripts and styles."""

    def visit_element(self, node: ElementNode) -> Optional[List[str]]:
        if node.tag in SKIPPED_TEXT_TAGS:
            return []
        return None

    def visit_text(self, node: TextNode) -> List[str]:
        text = node.value.strip()
        # Inline iframe markup the parser left as text.
        if text.startswith("<iframe"):
            return []
        if len(text) < MIN_SNIPPET_CHARS:
            return []
        return [text]


def extract_images(subtree: ElementNode) -> List[str]:
    """Return image references in document order, unresolved."""
    return walk(subtree, ImageSourceVisitor())


def extract_texts(subtree: ElementNode) -> List[str]:
    return walk(subtree, TextSnippetVisitor())


def locate_document(root: ElementNode) -> Tuple[ElementNode, ElementNode]:
    """Return the ``html`` and ``body`` nodes or raise :class:`MissingNode`."""
    html_node = find_child(root, "html")
    if html_node is None:
        raise MissingNode("html")
    body_node = find_child(html_node, "body")
    if body_node is None:
        raise MissingNode("body")
    return html_node, body_node


def _find_description(head_node: ElementNode) -> str:
    for meta in find_children(head_node, "meta"):
        if not meta.has_attr("name", "description"):
            continue
        content = meta.get("content")
        if content is None:
            logger.warning("META description tag has no content attribute")
            return ""
        return content
    return ""


def extract_seo(html_node: ElementNode, path: str) -> SeoMetadata:
    """Read title and meta description from the direct children of ``head``."""
    head_node = find_child(html_node, "head")
    if head_node is None:
        raise MissingNode("head")
    title_node = find_child(head_node, "title")
    if title_node is None:
        raise MissingNode("title")
    title_text = find_text_child(title_node)
    if title_text is None:
        raise MissingNode("title text")

    description = _find_description(head_node)
    if not description:
        logger.info("META node with description missing or empty")

    return SeoMetadata(title=title_text.value, description=description, url=path)
