"""Validation issues and structured model-loading errors with source positions."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Severity(StrEnum):
    ERROR = "error"
    WARN = "warn"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Ordering key: lower is more severe."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.ERROR: 0,
    Severity.WARN: 1,
    Severity.INFO: 2,
}


class OffsetRange(BaseModel):
    """Half-open ``[start, end)`` character interval into the source text."""

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_order(self) -> OffsetRange:
        if self.end < self.start:
            raise ValueError(f"Offset range end ({self.end}) precedes start ({self.start})")
        return self

    def __len__(self) -> int:
        return self.end - self.start


class Issue(BaseModel):
    """A single validation finding anchored to a source range."""

    kind: str
    message: str
    severity: Severity
    offset_range: OffsetRange = Field(alias="offsetRange")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SourceSpan(BaseModel):
    """Points to exact location in a source file for error reporting (1-based)."""

    file: str = "<string>"
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None


class ModelError(BaseModel):
    """A structured semantic-model loading error with optional source position."""

    code: str
    message: str
    path: str | None = None
    span: SourceSpan | None = None
    suggestions: list[str] = []


class ModelLoadResult(BaseModel):
    """Result of loading a semantic-model file."""

    valid: bool
    errors: list[ModelError] = []
    warnings: list[ModelError] = []
