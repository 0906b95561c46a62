"""An open HTML document: its node tree, id index and command history."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from htmleditor.nodes import ElementNode, HtmlNode

if TYPE_CHECKING:
    from htmleditor.commands import Command
    from htmleditor.parser import HtmlParser


class DocumentError(Exception):
    """Raised when an edit, load or save of a document cannot be carried out."""


class HtmlDoc:
    """One HTML file being edited.

    Holds the per-file settings (file path, whether ids are shown), the node
    tree with an index from id to node, and the undo/redo history.
    """

    def __init__(self, file_path: str = "", show_id: bool = True) -> None:
        self.file_path = file_path
        self.show_id = show_id
        self.root: HtmlNode | None = None
        self._id_map: dict[str, HtmlNode] = {}
        self._saved_status = 0
        self._undo: list[Command] = []
        self._redo: list[Command] = []

    def _reset_history(self) -> None:
        self._undo = []
        self._redo = []
        self._saved_status = 0

    def init(self) -> None:
        """Replace the content with the built-in empty page."""
        html = ElementNode("html", "html")
        head = ElementNode("head", "head")
        head.add_child(ElementNode("title", "title"))
        html.add_child(head)
        html.add_child(ElementNode("body", "body"))
        self._id_map = {}
        self._add_to_map(html)
        self.root = html
        self._reset_history()

    def save(self) -> None:
        """Write the tree to ``file_path``, creating missing directories."""
        if self.root is None:
            raise DocumentError("Can not save: root is null.")
        path = Path(self.file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.root.to_html(), encoding="utf-8")
        except OSError as exc:
            raise DocumentError(f"Failed to open file for writing: {self.file_path}") from exc
        self._saved_status = len(self._undo)

    def load(self, parser: HtmlParser) -> None:
        """Replace the content with the parsed file at ``file_path``."""
        try:
            with open(self.file_path, encoding="utf-8"):
                pass
        except OSError as exc:
            raise DocumentError("Parsing error: can not open source file") from exc
        result = parser.parse(self.file_path)

        previous = self._id_map
        self._id_map = {}
        if not self.ids_valid(result):
            self._id_map = previous
            raise DocumentError("Load a file with duplicate or unspecified id")
        self._add_to_map(result)
        self.root = result
        self._reset_history()

    def needs_parse(self) -> bool:
        """True when the file exists on disk but has not been read yet."""
        if not Path(self.file_path).exists():
            return False
        return self.root is None

    def has_changes(self) -> bool:
        return len(self._undo) != self._saved_status

    def find(self, node_id: str) -> HtmlNode | None:
        """The live node with ``node_id``, or None."""
        return self._id_map.get(node_id)

    def ids_valid(self, node: HtmlNode | None) -> bool:
        """True when every element below ``node`` has an id unused in the document and in the subtree."""
        return self._ids_valid(node, set())

    def insert(self, node_id: str, node: HtmlNode | None) -> None:
        """Insert ``node`` as a sibling placed just before the node ``node_id``."""
        location = self.find(node_id)
        if location is None:
            raise DocumentError("Try to insert a node to null destination")
        if node is None:
            raise DocumentError("Try to insert a null node")
        if not self.ids_valid(node):
            raise DocumentError("Try to insert a node with existing id")
        parent = location.parent
        if not isinstance(parent, ElementNode):
            raise DocumentError(f"The inserting location has no parent: {location.id}")
        index = next(
            (
                i
                for i, child in enumerate(parent.children)
                if not child.is_text and child.id == node_id
            ),
            len(parent.children),
        )
        parent.insert_child(index, node)
        self._add_to_map(node)

    def append(self, node_id: str, node: HtmlNode | None) -> None:
        """Append ``node`` as the last child of the node ``node_id``."""
        parent = self.find(node_id)
        if parent is None:
            raise DocumentError("Try to append a node to null destination")
        if node is None:
            raise DocumentError("Try to append a null node")
        if not self.ids_valid(node):
            raise DocumentError("Try to append a node with existing id")
        parent.add_child(node)
        self._add_to_map(node)

    def remove(self, node_id: str) -> None:
        """Mark the node ``node_id`` and its subtree deleted and drop their ids."""
        target = self.find(node_id)
        if target is None:
            raise DocumentError("No node is found for removal")
        if target.parent is None:
            raise DocumentError("Failed to remove node: no parent found")
        target.remove()
        self._remove_from_map(target)

    def restore(self, node: HtmlNode | None) -> None:
        """Bring a removed node back if its parent is live and its ids are free."""
        if node is None:
            return
        parent = node.parent
        if parent is None or parent.id not in self._id_map:
            return
        if not self.ids_valid(node):
            return
        self._add_to_map(node)
        node.restore()

    def change_id(self, old_id: str, new_id: str) -> None:
        node = self.find(old_id)
        if node is None:
            raise DocumentError(f"Edit id failed: no node with id {old_id} is found")
        if new_id in self._id_map:
            raise DocumentError(f"Edit id failed: new id {new_id} already exists")
        del self._id_map[old_id]
        node.id = new_id
        self._id_map[new_id] = node

    def execute(self, command: Command) -> None:
        """Run ``command``; undoable commands enter the history and clear redo."""
        command.execute(self)
        if not command.undoable:
            return
        self._undo.append(command)
        self._redo = []

    def undo(self) -> None:
        if not self._undo:
            return
        command = self._undo.pop()
        command.unexecute(self)
        self._redo.append(command)

    def redo(self) -> None:
        if not self._redo:
            return
        command = self._redo.pop()
        command.execute(self)
        self._undo.append(command)

    def _ids_valid(self, node: HtmlNode | None, seen: set[str]) -> bool:
        if node is None or node.is_text:
            return True
        key = node.id
        if not key or key in self._id_map or key in seen:
            return False
        seen.add(key)
        return all(self._ids_valid(child, seen) for child in node.children)

    def _add_to_map(self, node: HtmlNode | None) -> None:
        if node is None or node.is_text:
            return
        for child in node.children:
            self._add_to_map(child)
        if node.id:
            self._id_map[node.id] = node

    def _remove_from_map(self, node: HtmlNode | None) -> None:
        if node is None or node.is_text:
            return
        for child in node.children:
            self._remove_from_map(child)
        if node.id:
            self._id_map.pop(node.id, None)