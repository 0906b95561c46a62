"""Undoable edit operations on a document, plus non-undoable views of it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO

from htmleditor.document import DocumentError
from htmleditor.nodes import ElementNode, HtmlNode, TextNode
from htmleditor.visitors import PrintTreeVisitor, SpellChecker, SpellCheckVisitor

if TYPE_CHECKING:
    from htmleditor.document import HtmlDoc


class Command(ABC):
    """An operation on a document that can be reverted."""

    undoable = True

    @abstractmethod
    def execute(self, doc: HtmlDoc) -> None:
        """Apply the operation to ``doc``."""

    @abstractmethod
    def unexecute(self, doc: HtmlDoc) -> None:
        """Revert the operation on ``doc``."""


def _new_element(tag: str, node_id: str, text: str) -> ElementNode:
    node = ElementNode(tag, node_id)
    if text:
        node.insert_child(0, TextNode(text))
    return node


class InsertCommand(Command):
    """Insert a new element just before the node ``location``."""

    def __init__(self, tag: str, node_id: str, location: str, text: str = "") -> None:
        self.tag = tag
        self.node_id = node_id
        self.location = location
        self.text = text
        self._ref: HtmlNode | None = None

    def execute(self, doc: HtmlDoc) -> None:
        if self._ref is not None:
            doc.restore(self._ref)
            return
        node = _new_element(self.tag, self.node_id, self.text)
        doc.insert(self.location, node)
        self._ref = node

    def unexecute(self, doc: HtmlDoc) -> None:
        doc.remove(self.node_id)


class AppendCommand(Command):
    """Append a new element as the last child of the node ``parent``."""

    def __init__(self, tag: str, node_id: str, parent: str, text: str = "") -> None:
        self.tag = tag
        self.node_id = node_id
        self.parent = parent
        self.text = text
        self._ref: HtmlNode | None = None

    def execute(self, doc: HtmlDoc) -> None:
        if self._ref is not None:
            doc.restore(self._ref)
            return
        node = _new_element(self.tag, self.node_id, self.text)
        doc.append(self.parent, node)
        self._ref = node

    def unexecute(self, doc: HtmlDoc) -> None:
        doc.remove(self.node_id)


class EditIdCommand(Command):
    """Rename a node's id."""

    def __init__(self, old_id: str, new_id: str) -> None:
        self.old_id = old_id
        self.new_id = new_id

    def execute(self, doc: HtmlDoc) -> None:
        doc.change_id(self.old_id, self.new_id)

    def unexecute(self, doc: HtmlDoc) -> None:
        doc.change_id(self.new_id, self.old_id)


class EditTextCommand(Command):
    """Replace the text of a node, clearing its spelling-error mark."""

    def __init__(self, node_id: str, new_text: str = "") -> None:
        self.node_id = node_id
        self.new_text = new_text
        self._old_text = ""
        self._old_has_error = False

    def execute(self, doc: HtmlDoc) -> None:
        node = doc.find(self.node_id)
        if node is None:
            raise DocumentError(f"No node with id: {self.node_id} is found")
        self._old_text = node.text
        node.text = self.new_text
        self._old_has_error = node.has_error
        node.has_error = False

    def unexecute(self, doc: HtmlDoc) -> None:
        node = doc.find(self.node_id)
        if node is None:
            raise DocumentError(f"No node with id: {self.node_id} is found")
        node.text = self._old_text
        node.has_error = self._old_has_error


class DeleteCommand(Command):
    """Delete a node and its subtree."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        self._ref: HtmlNode | None = None

    def execute(self, doc: HtmlDoc) -> None:
        node = doc.find(self.node_id)
        if node is None:
            raise DocumentError("Try to remove a non-existing node")
        doc.remove(self.node_id)
        self._ref = node

    def unexecute(self, doc: HtmlDoc) -> None:
        doc.restore(self._ref)


class SpellCheckCommand(Command):
    """Spell-check every text node; not recorded in the history."""

    undoable = False

    def __init__(self, checker: SpellChecker | None = None, out: TextIO | None = None) -> None:
        self.checker = checker
        self.out = out

    def execute(self, doc: HtmlDoc) -> None:
        doc.root.accept(SpellCheckVisitor(self.checker, self.out))

    def unexecute(self, doc: HtmlDoc) -> None:
        return None


class PrintTreeCommand(Command):
    """Print the document tree; not recorded in the history."""

    undoable = False

    def __init__(self, out: TextIO | None = None) -> None:
        self.out = out

    def execute(self, doc: HtmlDoc) -> None:
        doc.root.accept(PrintTreeVisitor(doc.show_id, self.out))

    def unexecute(self, doc: HtmlDoc) -> None:
        return None