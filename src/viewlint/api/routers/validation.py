"""View validation endpoint: POST /validate."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from viewlint.api.deps import get_default_version, get_model_store
from viewlint.api.schemas import IssueResponse, ValidateRequest, ValidateResponse
from viewlint.parser.xml import DocumentSafetyError
from viewlint.service.model_store import ModelNotFoundError, ModelStore
from viewlint.validator.ranges import LineIndex

router = APIRouter()


@router.post("", response_model=ValidateResponse)
async def validate_view(
    body: ValidateRequest,
    store: ModelStore = Depends(get_model_store),  # noqa: B008
) -> ValidateResponse:
    """Validate a view document; issues are returned in document order."""
    version = body.framework_version or get_default_version()
    if version is None:
        raise HTTPException(
            status_code=400,
            detail="No framework_version given and no default version configured",
        )

    try:
        issues = store.validate_view(body.xml, version)
    except ModelNotFoundError:
        raise HTTPException(status_code=404, detail=f"Model '{version}' not found") from None
    except DocumentSafetyError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from None

    index = LineIndex(body.xml)
    return ValidateResponse(
        framework_version=version,
        issues=[
            IssueResponse(
                kind=issue.kind,
                message=issue.message,
                severity=issue.severity,
                offset_range=issue.offset_range,
                span=index.span(issue.offset_range),
            )
            for issue in issues
        ],
    )
