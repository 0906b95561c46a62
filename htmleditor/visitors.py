"""Visitors over the node tree: spell checking and tree printing."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, TextIO

from htmleditor.nodes import ElementNode, HtmlNode, TextNode

COLOR_RED = "\033[21;31m"
COLOR_END = "\033[0m"

DEFAULT_DICTIONARY = Path("./data/en_US.dic")


class HtmlVisitor(ABC):
    """Operation applied to each kind of node."""

    @abstractmethod
    def visit_element(self, node: ElementNode) -> None:
        """Handle an element node."""

    @abstractmethod
    def visit_text(self, node: TextNode) -> None:
        """Handle a text node."""


class SpellChecker:
    """Word lookup against a set of known words."""

    def __init__(self, words: Iterable[str]) -> None:
        self._words = set(words)

    @classmethod
    def from_dic(cls, path: str | Path) -> SpellChecker:
        """Load the word list of a ``.dic`` file (affix flags are dropped)."""
        lines = Path(path).read_text(encoding="utf-8").splitlines()
        if lines and lines[0].strip().isdigit():
            lines = lines[1:]
        words = (line.split("/", 1)[0].strip() for line in lines)
        return cls(word for word in words if word)

    def check(self, word: str) -> bool:
        return word in self._words or word.lower() in self._words


class SpellCheckVisitor(HtmlVisitor):
    """Reports misspelled words and flags text nodes that contain them."""

    def __init__(self, checker: SpellChecker | None = None, out: TextIO | None = None) -> None:
        self._checker = checker if checker is not None else SpellChecker.from_dic(DEFAULT_DICTIONARY)
        self._out = out
        self.misspelled: list[tuple[str, str]] = []

    def visit_element(self, node: ElementNode) -> None:
        for child in node.children:
            if not node.deleted:
                child.accept(self)

    def visit_text(self, node: TextNode) -> None:
        owner = node.parent.id if node.parent is not None else ""
        has_error = False
        for word in node.text.split():
            word = word.lower()
            if not self._checker.check(word):
                print(
                    f"{COLOR_RED}Mis-spell on node[{owner}]: {word}{COLOR_END}",
                    file=self._out or sys.stdout,
                )
                self.misspelled.append((owner, word))
                has_error = True
        node.has_error = has_error


class PrintTreeVisitor(HtmlVisitor):
    """Prints the live part of a tree with box-drawing connectors."""

    def __init__(self, show_id: bool = False, out: TextIO | None = None) -> None:
        self._show_id = show_id
        self._out = out
        self._depth = -1

    def _emit(self, line: str) -> None:
        print(line, file=self._out or sys.stdout)

    def visit_element(self, node: ElementNode) -> None:
        self._emit(self._indent(node, self._depth) + self._content(node))
        self._depth += 1
        for child in node.children:
            if not child.deleted:
                child.accept(self)
        self._depth -= 1

    def visit_text(self, node: TextNode) -> None:
        self._emit(self._indent(node, self._depth) + self._content(node))

    @staticmethod
    def _is_last_child(node: HtmlNode) -> bool:
        parent = node.parent
        if parent is None:
            return False
        siblings = parent.children
        position = next(i for i, sibling in enumerate(siblings) if sibling is node)
        return all(sibling.deleted for sibling in siblings[position + 1:])

    def _indent(self, node: HtmlNode, depth: int) -> str:
        if depth == -1:
            return ""
        if depth == 0:
            return "└── "
        indent = "└── " if self._is_last_child(node) else "├── "
        current = node
        for _ in range(depth - 1):
            current = current.parent
            is_last = self._is_last_child(current)
            indent = ("    " if current.parent is not None and is_last else "│   ") + indent
        return "    " + indent

    def _content(self, node: HtmlNode) -> str:
        if node.is_text:
            marker = f"[{COLOR_RED}x{COLOR_END}]" if node.has_error else ""
            return marker + node.text
        content = node.tag
        if self._show_id:
            content += "#" + node.id
        return content


def build_dir_tree(path: str | Path) -> ElementNode:
    """Directories become element nodes, files become text nodes."""
    path = Path(path)
    root = ElementNode(path.name or str(path))
    for entry in sorted(path.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            root.add_child(build_dir_tree(entry))
        else:
            root.add_child(TextNode(entry.name))
    return root


class DirTreeVisitor(PrintTreeVisitor):
    """Prints a directory as a tree."""

    def __init__(self, out: TextIO | None = None) -> None:
        super().__init__(show_id=False, out=out)
        self.root: ElementNode | None = None

    def print_tree(self, path: str | Path = ".") -> ElementNode:
        self.root = build_dir_tree(path)
        self._depth = -1
        self.root.accept(self)
        return self.root