"""Domain models for ViewLint."""

from viewlint.models.document import ElementNode, Span, XMLAttribute, XMLDocument
from viewlint.models.errors import (
    Issue,
    ModelError,
    ModelLoadResult,
    OffsetRange,
    Severity,
    SourceSpan,
)
from viewlint.models.semantic import Deprecation, SemanticClass, SemanticModel

__all__ = [
    "Deprecation",
    "ElementNode",
    "Issue",
    "ModelError",
    "ModelLoadResult",
    "OffsetRange",
    "SemanticClass",
    "SemanticModel",
    "Severity",
    "SourceSpan",
    "Span",
    "XMLAttribute",
    "XMLDocument",
]
