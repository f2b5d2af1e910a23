"""Semantic model types: framework classes and their deprecation metadata."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Deprecation(BaseModel):
    """Marks a class as discouraged but still valid."""

    since: str | None = None
    text: str | None = None

    model_config = ConfigDict(frozen=True)


class SemanticClass(BaseModel):
    """A framework class addressable from a view by its fully-qualified name."""

    name: str
    library: str = ""
    deprecation: Deprecation | None = Field(None, alias="deprecated")
    description: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def is_deprecated(self) -> bool:
        return self.deprecation is not None


class SemanticModel(BaseModel):
    """Versioned, read-only registry of framework classes."""

    version: str
    classes: dict[str, SemanticClass] = {}

    model_config = ConfigDict(frozen=True)

    def lookup_class(self, fqn: str) -> SemanticClass | None:
        """Return the class registered under ``fqn``, or None."""
        return self.classes.get(fqn)

    @property
    def deprecated_classes(self) -> list[SemanticClass]:
        return [cls for cls in self.classes.values() if cls.is_deprecated]
