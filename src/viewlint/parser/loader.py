"""YAML loader for semantic-model files, with position tracking for errors."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from viewlint.models.errors import SourceSpan

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 5_000_000  # 5M characters
_MAX_NODE_COUNT = 200_000
_MAX_DEPTH = 20

# Anchor definitions (&name) after line start, whitespace or an indicator.
# Text such as "R&D" inside a scalar is not matched.
_ANCHOR_RE = re.compile(r"(?:^|[\s\-:])&(\w+)", re.MULTILINE)


class YAMLSafetyError(Exception):
    """Raised when model YAML violates safety constraints.

    Unlike a parse error this points at hostile or runaway input:
    anchors/aliases, nesting deeper than the model format needs, or an
    oversized document.
    """


@dataclass
class SourceMap:
    """Key path -> position of the key in the model file."""

    _positions: dict[str, SourceSpan] = field(default_factory=dict)

    def add(self, path: str, span: SourceSpan) -> None:
        self._positions[path] = span

    def get(self, path: str) -> SourceSpan | None:
        return self._positions.get(path)

    @property
    def paths(self) -> list[str]:
        return list(self._positions)


class TrackedLoader:
    """Round-trip YAML loader that records where every key was written.

    Class names contain dots, so a key containing a dot is written in
    square brackets: ``classes[sap.m.Button].deprecated``.
    """

    def __init__(self) -> None:
        self._yaml = YAML(typ="rt")

    def load(self, path: Path) -> tuple[dict[str, Any], SourceMap]:
        """Load a model file; spans carry ``path`` as their file name."""
        return self.load_string(path.read_text(encoding="utf-8"), filename=str(path))

    def load_string(
        self, content: str, filename: str = "<string>"
    ) -> tuple[dict[str, Any], SourceMap]:
        """Parse YAML text into plain dicts/lists plus a SourceMap."""
        if len(content) > _MAX_DOCUMENT_SIZE:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum size "
                f"({len(content):,} chars > {_MAX_DOCUMENT_SIZE:,} limit)"
            )
        if _ANCHOR_RE.search(content):
            raise YAMLSafetyError("YAML anchors/aliases are not supported in model files")

        data = self._yaml.load(content)
        source_map = SourceMap()
        if not isinstance(data, CommentedMap):
            return {}, source_map
        walk = _Walk(filename, source_map)
        return walk.visit(data, "", 0), source_map


class _Walk:
    """One pass over a ruamel tree: plain-value copy, positions and limits."""

    def __init__(self, filename: str, source_map: SourceMap) -> None:
        self._filename = filename
        self._source_map = source_map
        self._nodes = 0

    def visit(self, node: Any, path: str, depth: int) -> Any:
        self._nodes += 1
        if self._nodes > _MAX_NODE_COUNT:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum node count ({_MAX_NODE_COUNT:,})"
            )
        if depth > _MAX_DEPTH:
            raise YAMLSafetyError(f"YAML nesting exceeds maximum depth ({_MAX_DEPTH})")

        if isinstance(node, CommentedMap):
            plain: dict[str, Any] = {}
            for key, value in node.items():
                key_path = _join_path(path, str(key))
                self._record(key_path, node.lc.key(key))
                plain[str(key)] = self.visit(value, key_path, depth + 1)
            return plain
        if isinstance(node, CommentedSeq):
            items = []
            for index, value in enumerate(node):
                item_path = f"{path}[{index}]"
                self._record(item_path, node.lc.item(index))
                items.append(self.visit(value, item_path, depth + 1))
            return items
        return _scalar(node)

    def _record(self, path: str, position: tuple[int, int] | None) -> None:
        if position:
            line, col = position
            self._source_map.add(
                path, SourceSpan(file=self._filename, line=line + 1, column=col + 1)
            )


def _scalar(value: Any) -> Any:
    # ruamel returns subclasses (ScalarFloat, quoted strings) carrying format info
    if isinstance(value, bool) or value is None:
        return value
    for kind in (str, int, float):
        if isinstance(value, kind):
            return kind(value)
    return value


def _join_path(prefix: str, key: str) -> str:
    if not prefix:
        return key
    if "." in key:
        return f"{prefix}[{key}]"
    return f"{prefix}.{key}"


def class_path(name: str) -> str:
    """Source-map path of a class entry."""
    return _join_path("classes", name)
