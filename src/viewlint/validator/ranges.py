"""Offset ranges of an element's tag-name tokens, and line/column mapping."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import StrEnum

from viewlint.models.document import ElementNode, Span
from viewlint.models.errors import OffsetRange, SourceSpan


class TagRole(StrEnum):
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class TagNameRange:
    role: TagRole
    offset_range: OffsetRange


def _to_range(span: Span) -> OffsetRange:
    return OffsetRange(start=span.start, end=span.end)


def open_tag_range(element: ElementNode) -> OffsetRange:
    """Range of the tag name right after ``<`` in the opening tag."""
    return _to_range(element.open_name)


def close_tag_range(element: ElementNode) -> OffsetRange | None:
    """Range of the tag name in a structurally distinct closing tag, if any.

    Self-closing elements and elements that were never closed have none.
    """
    if element.self_closing or element.close_name is None:
        return None
    return _to_range(element.close_name)


def tag_name_ranges(element: ElementNode) -> list[TagNameRange]:
    """Open range first, then the Close range when a closing tag exists.

    The two are never merged, even if a rule reports on both.
    """
    ranges = [TagNameRange(TagRole.OPEN, open_tag_range(element))]
    close = close_tag_range(element)
    if close is not None:
        ranges.append(TagNameRange(TagRole.CLOSE, close))
    return ranges


class LineIndex:
    """Maps character offsets in a source text to 1-based line/column."""

    def __init__(self, text: str) -> None:
        self._text_length = len(text)
        self._line_starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

    def position(self, offset: int) -> tuple[int, int]:
        if offset < 0 or offset > self._text_length:
            raise ValueError(f"Offset {offset} outside source of length {self._text_length}")
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    def span(self, offset_range: OffsetRange, file: str = "<string>") -> SourceSpan:
        line, column = self.position(offset_range.start)
        end_line, end_column = self.position(offset_range.end)
        return SourceSpan(
            file=file, line=line, column=column, end_line=end_line, end_column=end_column
        )
