"""Semantic-model endpoints: list, load and unload models."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from viewlint.api.deps import get_model_store
from viewlint.api.schemas import (
    ErrorDetail,
    ModelErrorResponse,
    ModelListResponse,
    ModelLoadRequest,
    ModelLoadResponse,
    ModelSummaryResponse,
)
from viewlint.service.model_store import ModelNotFoundError, ModelStore, ModelValidationError

router = APIRouter()


@router.get("", response_model=ModelListResponse)
async def list_models(
    store: ModelStore = Depends(get_model_store),  # noqa: B008
) -> ModelListResponse:
    """List all loaded semantic models."""
    return ModelListResponse(
        models=[ModelSummaryResponse(**asdict(s)) for s in store.list_models()]
    )


@router.post(
    "",
    response_model=ModelLoadResponse,
    status_code=201,
    responses={422: {"model": ModelErrorResponse}},
)
async def load_model(
    body: ModelLoadRequest,
    store: ModelStore = Depends(get_model_store),  # noqa: B008
) -> ModelLoadResponse | JSONResponse:
    """Load (or replace) the semantic model for the version it declares."""
    try:
        result = store.load_model(body.model_yaml)
    except ModelValidationError as exc:
        payload = ModelErrorResponse(
            detail=str(exc),
            errors=[
                ErrorDetail(code=e.code, message=e.message, path=e.path, suggestions=e.suggestions)
                for e in exc.errors
            ],
        )
        return JSONResponse(status_code=422, content=payload.model_dump())
    return ModelLoadResponse(**asdict(result))


@router.delete("/{version}", status_code=204)
async def remove_model(
    version: str,
    store: ModelStore = Depends(get_model_store),  # noqa: B008
) -> None:
    """Unload the semantic model for ``version``."""
    try:
        store.remove_model(version)
    except ModelNotFoundError:
        raise HTTPException(status_code=404, detail=f"Model '{version}' not found") from None
