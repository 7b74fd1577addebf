"""Tests for page_parser.tree (markup conversion and the generic walker)."""

from __future__ import annotations

from typing import List, Optional

from page_parser.tree import (
    DOCUMENT_TAG,
    ElementNode,
    TextNode,
    TreeVisitor,
    find_child,
    find_children,
    find_text_child,
    parse_markup,
    walk,
)


class _TagNames(TreeVisitor[str]):
    def visit_element(self, node: ElementNode) -> Optional[List[str]]:
        if node.tag == "skip":
            return ["<skipped>"]
        return None

    def visit_text(self, node: TextNode) -> List[str]:
        return [node.value]


def _body(root: ElementNode) -> ElementNode:
    return find_child(find_child(root, "html"), "body")


class TestParseMarkup:
    def test_document_root_wraps_top_level_nodes(self):
        root = parse_markup("<html><head></head><body><p>Hi</p></body></html>")
        assert root.tag == DOCUMENT_TAG
        html = find_child(root, "html")
        assert html is not None
        assert [child.tag for child in html.children] == ["head", "body"]

    def test_omitted_optional_tags_are_synthesized(self):
        root = parse_markup("<!DOCTYPE html><title>Shop</title><p>Welcome to the shop</p>")
        html = find_child(root, "html")
        assert html is not None
        head = find_child(html, "head")
        body = find_child(html, "body")
        assert find_text_child(find_child(head, "title")) == TextNode("Shop")
        assert find_child(body, "p").children == (TextNode("Welcome to the shop"),)

    def test_html_parser_can_still_be_selected(self):
        root = parse_markup("<p>fragment</p>", features="html.parser")
        assert find_child(root, "html") is None
        assert find_child(root, "p") is not None

    def test_attributes_and_raw_class_string(self):
        root = parse_markup('<img src="a.png" class="hero wide" alt="x">')
        img = find_child(_body(root), "img")
        assert dict(img.attrs) == {"src": "a.png", "class": "hero wide", "alt": "x"}
        assert img.get("class") == "hero wide"
        assert img.get("missing") is None

    def test_comments_and_doctype_are_dropped(self):
        root = parse_markup("<!DOCTYPE html><!-- note --><p>text</p>")
        assert [child.tag for child in root.children] == ["html"]
        body = _body(root)
        assert len(body.children) == 1
        paragraph = body.children[0]
        assert paragraph.tag == "p"
        assert paragraph.children == (TextNode("text"),)

    def test_tag_names_are_lowercase(self):
        root = parse_markup("<DIV><IMG SRC='a.png'></DIV>")
        div = find_child(_body(root), "div")
        assert div is not None
        assert find_child(div, "img").get("src") == "a.png"


class TestWalk:
    def test_preorder_document_order(self):
        tree = ElementNode(
            "div",
            children=(
                TextNode("a"),
                ElementNode("p", children=(TextNode("b"), TextNode("c"))),
                TextNode("d"),
            ),
        )
        assert walk(tree, _TagNames()) == ["a", "b", "c", "d"]

    def test_element_values_stop_descent(self):
        tree = ElementNode(
            "div",
            children=(
                ElementNode("skip", children=(TextNode("hidden"),)),
                TextNode("shown"),
            ),
        )
        assert walk(tree, _TagNames()) == ["<skipped>", "shown"]

    def test_leaf_element_contributes_nothing(self):
        assert walk(ElementNode("br"), _TagNames()) == []

    def test_deep_tree_does_not_hit_recursion_limit(self):
        node: ElementNode = ElementNode("span", children=(TextNode("leaf"),))
        for _ in range(5000):
            node = ElementNode("div", children=(node,))
        assert walk(node, _TagNames()) == ["leaf"]

    def test_default_visitor_yields_nothing(self):
        tree = ElementNode("div", children=(TextNode("text"),))
        assert walk(tree, TreeVisitor()) == []


class TestLookups:
    def test_find_children_only_direct(self):
        head = ElementNode(
            "head",
            children=(
                ElementNode("meta", (("name", "a"),)),
                ElementNode("div", children=(ElementNode("meta"),)),
                ElementNode("meta", (("name", "b"),)),
            ),
        )
        metas = find_children(head, "meta")
        assert [meta.get("name") for meta in metas] == ["a", "b"]

    def test_find_text_child_skips_elements(self):
        title = ElementNode("title", children=(ElementNode("b"), TextNode("Hi")))
        assert find_text_child(title) == TextNode("Hi")
        assert find_text_child(ElementNode("title")) is None

    def test_has_attr_matches_name_and_value(self):
        meta = ElementNode("meta", (("name", "description"), ("content", "D")))
        assert meta.has_attr("name", "description")
        assert not meta.has_attr("name", "keywords")
