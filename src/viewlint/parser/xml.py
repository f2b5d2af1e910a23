"""Tolerant view-document parser that records tag-name token offsets.

The parser never fails on malformed markup. Elements whose closing tag is
missing are closed implicitly, without a closing span, when an enclosing
end tag or the end of the document is reached. A start tag interrupted by
another ``<`` (the author is still typing) still yields an open element.
Nesting is capped: at the maximum depth the innermost open element is closed
implicitly, so the new element becomes its sibling. Only the document size
limit is an error.
"""

from __future__ import annotations

import logging
import re

from viewlint.models.document import ElementNode, Span, XMLAttribute, XMLDocument

logger = logging.getLogger("viewlint.parser")

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

MAX_DOCUMENT_SIZE = 5_000_000  # 5M characters
MAX_ELEMENT_DEPTH = 256

_NAME_RE = re.compile(r"[^\s<>/=\"']+")
# Attribute values may not contain "<" in XML; refusing it keeps a half-typed
# value from swallowing the next tag.
_ATTRIBUTE_RE = re.compile(
    r"""(?P<key>[^\s<>/="']+)(?:\s*=\s*(?:"(?P<dq>[^"<]*)"|'(?P<sq>[^'<]*)'))?"""
)
_WHITESPACE_RE = re.compile(r"\s*")

# (opener, terminator) of markup that never contains elements. Order matters:
# "<!" is the catch-all for DOCTYPE and friends.
_SKIPPED_MARKUP: tuple[tuple[str, str], ...] = (
    ("<!--", "-->"),
    ("<![CDATA[", "]]>"),
    ("<?", "?>"),
    ("<!", ">"),
)


class DocumentSafetyError(Exception):
    """Raised when a view document exceeds the size limit."""


class ViewParser:
    """Builds an :class:`XMLDocument` tree from view source text."""

    def __init__(
        self,
        *,
        max_document_size: int = MAX_DOCUMENT_SIZE,
        max_depth: int = MAX_ELEMENT_DEPTH,
    ) -> None:
        self._max_document_size = max_document_size
        self._max_depth = max_depth

    def parse(self, text: str) -> XMLDocument:
        if len(text) > self._max_document_size:
            raise DocumentSafetyError(
                f"View document exceeds maximum size "
                f"({len(text):,} chars > {self._max_document_size:,} limit)"
            )

        document = XMLDocument(text=text)
        stack: list[ElementNode] = []
        pos = 0
        while True:
            lt = text.find("<", pos)
            if lt == -1:
                break
            skipped_to = self._skip_markup(text, lt)
            if skipped_to is not None:
                pos = skipped_to
            elif text.startswith("</", lt):
                pos = self._end_tag(text, lt, stack)
            else:
                pos = self._start_tag(text, lt, stack, document)

        if stack:
            logger.debug("%d element(s) left unclosed at end of document", len(stack))
        return document

    # -- markup handlers -----------------------------------------------------

    @staticmethod
    def _skip_markup(text: str, lt: int) -> int | None:
        """Return the offset after a comment/CDATA/PI/declaration, or None."""
        for opener, terminator in _SKIPPED_MARKUP:
            if text.startswith(opener, lt):
                end = text.find(terminator, lt + len(opener))
                return len(text) if end == -1 else end + len(terminator)
        return None

    def _start_tag(
        self, text: str, lt: int, stack: list[ElementNode], document: XMLDocument
    ) -> int:
        name_match = _NAME_RE.match(text, lt + 1)
        if name_match is None:
            # A bare "<" with no tag name yet
            return lt + 1

        element = ElementNode(
            name=name_match.group(),
            open_name=Span(name_match.start(), name_match.end()),
        )
        self._attach(element, stack, document)

        pos = name_match.end()
        length = len(text)
        while pos < length:
            char = text[pos]
            if char.isspace():
                pos += 1
            elif text.startswith("/>", pos):
                element.self_closing = True
                return pos + 2
            elif char == ">":
                self._push(element, stack, document)
                return pos + 1
            elif char == "<":
                break
            else:
                attr = _ATTRIBUTE_RE.match(text, pos)
                if attr is None:
                    pos += 1
                    continue
                value = attr.group("dq")
                if value is None:
                    value = attr.group("sq")
                element.attributes.append(
                    XMLAttribute(
                        key=attr.group("key"),
                        value=value,
                        span=Span(attr.start(), attr.end()),
                    )
                )
                pos = attr.end()

        # Truncated start tag: the element stays open.
        self._push(element, stack, document)
        return pos

    def _end_tag(self, text: str, lt: int, stack: list[ElementNode]) -> int:
        name_match = _NAME_RE.match(text, lt + 2)
        if name_match is None:
            return lt + 2

        pos = name_match.end()
        after_ws = _WHITESPACE_RE.match(text, pos).end()  # type: ignore[union-attr]
        if text.startswith(">", after_ws):
            pos = after_ws + 1

        self._close(name_match.group(), Span(name_match.start(), name_match.end()), stack)
        return pos

    @staticmethod
    def _attach(element: ElementNode, stack: list[ElementNode], document: XMLDocument) -> None:
        parent = stack[-1] if stack else None
        element.parent = parent
        if parent is None:
            document.roots.append(element)
        else:
            parent.children.append(element)

    def _push(
        self, element: ElementNode, stack: list[ElementNode], document: XMLDocument
    ) -> None:
        """Open ``element``, keeping at most ``max_depth`` elements open."""
        if stack and len(stack) >= self._max_depth:
            closed = stack.pop()
            closed.children.remove(element)
            self._attach(element, stack, document)
            logger.debug(
                "Maximum element depth (%d) reached at <%s>, offset %d; "
                "closed <%s> implicitly",
                self._max_depth, element.name, element.open_name.start, closed.name,
            )
        stack.append(element)

    @staticmethod
    def _close(name: str, span: Span, stack: list[ElementNode]) -> None:
        """Close the nearest open element named ``name``.

        Open elements above it are closed implicitly and keep no closing span.
        """
        for index in range(len(stack) - 1, -1, -1):
            if stack[index].name == name:
                stack[index].close_name = span
                del stack[index:]
                return
        logger.debug("Ignoring unmatched end tag </%s> at offset %d", name, span.start)
