"""Reading HTML files into the editor's node tree."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from xml.etree.ElementTree import Element

import html5lib

from htmleditor.nodes import ElementNode, HtmlNode, TextNode


class HtmlParser(ABC):
    """Turns an HTML file into a tree of nodes."""

    @abstractmethod
    def parse(self, path: str | Path) -> HtmlNode:
        """Parse the file at ``path`` and return the root node."""


def _text_node(text: str | None) -> TextNode | None:
    stripped = (text or "").strip()
    return TextNode(stripped) if stripped else None


class Html5Parser(HtmlParser):
    """Parser built on html5lib; whitespace-only text and comments are dropped."""

    def parse(self, path: str | Path) -> HtmlNode:
        return self.parse_string(Path(path).read_text(encoding="utf-8"))

    def parse_string(self, text: str) -> HtmlNode:
        root = html5lib.parse(text, treebuilder="etree", namespaceHTMLElements=False)
        return self._convert(root)

    def _convert(self, element: Element) -> ElementNode:
        node = ElementNode(element.tag)
        node.id = element.get("id", "")
        lead = _text_node(element.text)
        if lead is not None:
            node.add_child(lead)
        for child in element:
            if isinstance(child.tag, str):
                node.add_child(self._convert(child))
            tail = _text_node(child.tail)
            if tail is not None:
                node.add_child(tail)
        return node