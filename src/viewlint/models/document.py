"""Parsed view document tree with source offsets for tag-name tokens."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

XMLNS = "xmlns"


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` offsets of a token in the source text."""

    start: int
    end: int


@dataclass(frozen=True)
class XMLAttribute:
    key: str
    value: str | None
    span: Span


@dataclass(eq=False)
class ElementNode:
    """An element of a view document.

    ``close_name`` is absent for self-closing elements and for elements whose
    closing tag never appears (truncated or still being typed). That is a
    normal state, not an error.
    """

    name: str
    open_name: Span
    close_name: Span | None = None
    self_closing: bool = False
    attributes: list[XMLAttribute] = field(default_factory=list)
    children: list[ElementNode] = field(default_factory=list, repr=False)
    parent: ElementNode | None = field(default=None, repr=False)

    @property
    def prefix(self) -> str:
        """Namespace prefix of the tag, empty for unprefixed tags."""
        prefix, sep, _ = self.name.partition(":")
        return prefix if sep else ""

    @property
    def local_name(self) -> str:
        _, sep, local = self.name.partition(":")
        return local if sep else self.name

    def namespace_declarations(self) -> dict[str, str]:
        """Map prefix -> URI for ``xmlns`` attributes declared on this element.

        The default namespace uses the empty prefix. Later duplicates win.
        """
        declared: dict[str, str] = {}
        for attr in self.attributes:
            if attr.value is None:
                continue
            if attr.key == XMLNS:
                declared[""] = attr.value
            elif attr.key.startswith(XMLNS + ":"):
                declared[attr.key[len(XMLNS) + 1 :]] = attr.value
        return declared

    def ancestors(self, *, include_self: bool = False) -> Iterator[ElementNode]:
        node = self if include_self else self.parent
        while node is not None:
            yield node
            node = node.parent

    def iter(self) -> Iterator[ElementNode]:
        """Pre-order walk: parent before children, children in source order."""
        stack: list[ElementNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass
class XMLDocument:
    """Result of parsing a view document: source text plus top-level elements."""

    text: str
    roots: list[ElementNode] = field(default_factory=list)

    @property
    def root(self) -> ElementNode | None:
        return self.roots[0] if self.roots else None

    def iter_elements(self) -> Iterator[ElementNode]:
        for root in self.roots:
            yield from root.iter()
