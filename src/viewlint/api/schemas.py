"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from viewlint.models.errors import OffsetRange, Severity, SourceSpan


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""


# ---------------------------------------------------------------------------
# Semantic models
# ---------------------------------------------------------------------------


class ModelLoadRequest(BaseModel):
    """Request body for POST /models."""

    model_yaml: str = Field(description="Semantic model YAML content")


class ModelLoadResponse(BaseModel):
    """Response for POST /models."""

    version: str
    classes: int
    deprecated_classes: int
    warnings: list[str] = []


class ModelSummaryResponse(BaseModel):
    """Short model summary for listing."""

    version: str
    classes: int
    deprecated_classes: int


class ModelListResponse(BaseModel):
    """Response for GET /models."""

    models: list[ModelSummaryResponse] = []


class ErrorDetail(BaseModel):
    """A single model-loading error detail."""

    code: str
    message: str
    path: str | None = None
    suggestions: list[str] = []


class ModelErrorResponse(BaseModel):
    """Response body when a model fails to load (422)."""

    detail: str
    errors: list[ErrorDetail] = []


# ---------------------------------------------------------------------------
# View validation
# ---------------------------------------------------------------------------


class ValidateRequest(BaseModel):
    """Request body for POST /validate."""

    xml: str = Field(description="View document source text")
    framework_version: str | None = Field(
        default=None,
        description="Semantic model version; defaults to the server's configured version",
    )


class IssueResponse(BaseModel):
    """A single issue plus its line/column position for display."""

    kind: str
    message: str
    severity: Severity
    offset_range: OffsetRange = Field(serialization_alias="offsetRange")
    span: SourceSpan


class ValidateResponse(BaseModel):
    """Response body for POST /validate."""

    framework_version: str
    issues: list[IssueResponse] = []
