"""Registry of the tag names the editor accepts."""

from __future__ import annotations

DEFAULT_TAGS = frozenset(
    {
        "html", "head", "body", "div", "span", "p", "a", "img",
        "ul", "ol", "li", "table", "tr", "td", "th", "h1", "h2", "h3",
        "b", "i", "u", "em", "strong", "br", "hr", "title",
    }
)


class TagRegistry:
    """Holds the set of valid tags and checks user input against it."""

    def __init__(self) -> None:
        self._tags = set(DEFAULT_TAGS)

    def is_valid(self, tag: str) -> bool:
        return tag in self._tags

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags