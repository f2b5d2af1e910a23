"""Input parsing: view documents and semantic-model files."""

from viewlint.parser.builder import ModelBuilder
from viewlint.parser.loader import SourceMap, TrackedLoader, YAMLSafetyError
from viewlint.parser.xml import DocumentSafetyError, ViewParser

__all__ = [
    "DocumentSafetyError",
    "ModelBuilder",
    "SourceMap",
    "TrackedLoader",
    "ViewParser",
    "YAMLSafetyError",
]
