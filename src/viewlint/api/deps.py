"""Dependency injection for FastAPI: the ModelStore singleton."""

from __future__ import annotations

from viewlint.service.model_store import ModelStore

_model_store: ModelStore | None = None
_default_version: str | None = None


def init_model_store(store: ModelStore, *, default_version: str | None = None) -> None:
    """Set the global ModelStore (called at app startup)."""
    global _model_store, _default_version  # noqa: PLW0603
    _model_store = store
    _default_version = default_version


def get_model_store() -> ModelStore:
    """FastAPI ``Depends`` provider for ModelStore."""
    if _model_store is None:
        raise RuntimeError("ModelStore not initialised; call init_model_store() first")
    return _model_store


def get_default_version() -> str | None:
    """Framework version used when a request names none."""
    return _default_version


def reset_model_store() -> None:
    """Clear the global ModelStore (for tests)."""
    global _model_store, _default_version  # noqa: PLW0603
    _model_store = None
    _default_version = None
