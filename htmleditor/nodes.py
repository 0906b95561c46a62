"""Document tree nodes: elements that hold children and text leaves."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from htmleditor.visitors import HtmlVisitor


class HtmlNode(ABC):
    """Common state of every node: parent link, deletion mark and error flag."""

    is_text: bool = False
    is_element: bool = False

    def __init__(self) -> None:
        self.parent: ElementNode | None = None
        self.deleted = False
        self.has_error = False

    @abstractmethod
    def remove(self) -> None:
        """Mark the node (and everything below it) as deleted."""

    @abstractmethod
    def restore(self) -> None:
        """Clear the deletion mark of the node and everything below it."""

    @property
    @abstractmethod
    def text(self) -> str:
        """Text held by the node."""

    @text.setter
    @abstractmethod
    def text(self, value: str) -> None:
        """Replace the text held by the node."""

    @property
    def children(self) -> list[HtmlNode]:
        raise TypeError("This node has no child")

    @property
    def id(self) -> str:
        raise TypeError("Text node have no id")

    @id.setter
    def id(self, value: str) -> None:
        raise TypeError("Can not set, this node have no id")

    @property
    def tag(self) -> str:
        raise TypeError("This node have no tag")

    @abstractmethod
    def accept(self, visitor: HtmlVisitor) -> None:
        """Dispatch to the matching method of ``visitor``."""

    @abstractmethod
    def to_html(self, indent: int = 0) -> str:
        """Render the node as indented HTML; deleted nodes render as nothing."""


class ElementNode(HtmlNode):
    """An HTML element with a tag, an optional id and ordered children."""

    is_element = True

    def __init__(self, tag: str, node_id: str = "") -> None:
        super().__init__()
        self._tag = tag
        self._id = node_id
        self._children: list[HtmlNode] = []

    def __repr__(self) -> str:
        return f"ElementNode({self._tag!r}, {self._id!r})"

    def remove(self) -> None:
        for child in self._children:
            child.remove()
        self.deleted = True

    def restore(self) -> None:
        for child in self._children:
            child.restore()
        self.deleted = False

    @property
    def text(self) -> str:
        if not self._children:
            return ""
        return self._children[0].text

    @text.setter
    def text(self, value: str) -> None:
        if not self._children:
            if value:
                self.add_child(TextNode(value))
            return
        first = self._children[0]
        if first.is_text:
            first.text = value
            if value:
                first.restore()
            else:
                first.remove()
        elif value:
            self.insert_child(0, TextNode(value))

    @property
    def children(self) -> list[HtmlNode]:
        return self._children

    @property
    def id(self) -> str:
        """The explicit id, or the tag when no id was given."""
        return self._id or self._tag

    @id.setter
    def id(self, value: str) -> None:
        if value:
            self._id = value

    @property
    def tag(self) -> str:
        return self._tag

    def add_child(self, node: HtmlNode) -> None:
        self._children.append(node)
        node.parent = self

    def insert_child(self, index: int, node: HtmlNode) -> None:
        if not 0 <= index <= len(self._children):
            raise IndexError("idx out of range")
        self._children.insert(index, node)
        node.parent = self

    def remove_child(self, index: int) -> None:
        if 0 <= index < len(self._children):
            self._children[index].remove()

    def accept(self, visitor: HtmlVisitor) -> None:
        visitor.visit_element(self)

    def to_html(self, indent: int = 0) -> str:
        if self.deleted:
            return ""
        pad = " " * indent
        opening = f"{pad}<{self._tag}"
        if self._id:
            opening += f' id="{self._id}"'
        parts = [opening + ">\n"]
        parts.extend(child.to_html(indent + 2) for child in self._children)
        parts.append(f"{pad}</{self._tag}>\n")
        return "".join(parts)


class TextNode(HtmlNode):
    """A leaf holding a run of text."""

    is_text = True

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self._text = text

    def __repr__(self) -> str:
        return f"TextNode({self._text!r})"

    def remove(self) -> None:
        self.deleted = True

    def restore(self) -> None:
        self.deleted = False

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value

    def accept(self, visitor: HtmlVisitor) -> None:
        visitor.visit_text(self)

    def to_html(self, indent: int = 0) -> str:
        if self.deleted:
            return ""
        return " " * indent + self._text + "\n"