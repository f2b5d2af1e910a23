"""Model building: turns a raw model-file mapping into a typed SemanticModel."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from viewlint.models.errors import ModelError, ModelLoadResult, SourceSpan
from viewlint.models.semantic import Deprecation, SemanticClass, SemanticModel
from viewlint.parser.loader import SourceMap, class_path

_CLASS_KEYS = ("library", "deprecated", "description")
_DEPRECATION_KEYS = ("since", "text")


class ModelBuilder:
    """Builds a SemanticModel from a raw YAML dict, collecting structured errors."""

    def build(
        self,
        raw: dict[str, Any],
        source_map: SourceMap | None = None,
    ) -> tuple[SemanticModel, ModelLoadResult]:
        """Build a SemanticModel from a raw YAML dict.

        Returns (model, load_result). If there are errors, the model holds
        only the classes that could be parsed.
        """
        errors: list[ModelError] = []
        warnings: list[ModelError] = []

        def _span(path: str) -> SourceSpan | None:
            return source_map.get(path) if source_map else None

        version = raw.get("version")
        if version is None or str(version).strip() == "":
            errors.append(
                ModelError(
                    code="MISSING_VERSION",
                    message="Semantic model must declare the framework 'version' it describes",
                    path="version",
                )
            )
            version = ""
        elif not isinstance(version, str):
            warnings.append(_numeric_warning("version", version, _span("version")))

        raw_classes = raw.get("classes", {})
        if raw_classes is None:
            raw_classes = {}
        if not isinstance(raw_classes, dict):
            errors.append(
                ModelError(
                    code="CLASSES_PARSE_ERROR",
                    message="'classes' must be a YAML mapping, not a list or scalar",
                    path="classes",
                    span=_span("classes"),
                )
            )
            raw_classes = {}

        classes: dict[str, SemanticClass] = {}
        for name, raw_cls in raw_classes.items():
            path = class_path(name)
            if raw_cls is None:
                raw_cls = {}
            if not isinstance(raw_cls, dict):
                errors.append(
                    ModelError(
                        code="CLASS_PARSE_ERROR",
                        message=f"Class '{name}' must be a mapping of its metadata",
                        path=path,
                        span=_span(path),
                    )
                )
                continue

            unknown = [key for key in raw_cls if key not in _CLASS_KEYS]
            for key in unknown:
                errors.append(
                    ModelError(
                        code="UNKNOWN_CLASS_KEY",
                        message=f"Class '{name}' has unknown key '{key}'",
                        path=f"{path}.{key}",
                        span=_span(f"{path}.{key}"),
                        suggestions=_suggest_similar(key, list(_CLASS_KEYS)),
                    )
                )
            if unknown:
                continue

            try:
                deprecation = self._build_deprecation(
                    raw_cls.get("deprecated"), f"{path}.deprecated", warnings, _span
                )
                classes[name] = SemanticClass(
                    name=name,
                    library=raw_cls.get("library") or name.rpartition(".")[0],
                    deprecation=deprecation,
                    description=raw_cls.get("description"),
                )
            except Exception as e:
                errors.append(
                    ModelError(
                        code="CLASS_PARSE_ERROR",
                        message=f"Failed to parse class '{name}': {e}",
                        path=path,
                        span=_span(path),
                    )
                )

        model = SemanticModel(version=str(version), classes=classes)
        result = ModelLoadResult(valid=len(errors) == 0, errors=errors, warnings=warnings)
        return model, result

    @staticmethod
    def _build_deprecation(
        raw: Any,
        path: str,
        warnings: list[ModelError],
        span_of: Callable[[str], SourceSpan | None],
    ) -> Deprecation | None:
        """``deprecated`` may be omitted/false, true, or a {since, text} mapping."""
        if raw is None or raw is False:
            return None
        if raw is True:
            return Deprecation()
        if not isinstance(raw, dict):
            raise ValueError("'deprecated' must be a boolean or a mapping with 'since'/'text'")

        unknown = [key for key in raw if key not in _DEPRECATION_KEYS]
        if unknown:
            raise ValueError(
                f"'deprecated' has unknown key(s): {', '.join(unknown)} "
                f"(expected {', '.join(_DEPRECATION_KEYS)})"
            )

        since = raw.get("since")
        if since is not None and not isinstance(since, str):
            warnings.append(_numeric_warning(f"{path}.since", since, span_of(f"{path}.since")))
            since = str(since)
        return Deprecation(since=since, text=raw.get("text"))


def _numeric_warning(path: str, value: Any, span: SourceSpan | None) -> ModelError:
    return ModelError(
        code="UNQUOTED_VERSION",
        message=(
            f"Version '{value}' at '{path}' was not quoted; quote it so that "
            f"trailing zeros are kept (e.g. \"1.40\")"
        ),
        path=path,
        span=span,
    )


def _suggest_similar(name: str, candidates: list[str], max_suggestions: int = 3) -> list[str]:
    """Suggest similar names for 'did you mean?' messages."""
    name_lower = name.lower()
    scored = []
    for candidate in candidates:
        candidate_lower = candidate.lower()
        if name_lower in candidate_lower or candidate_lower in name_lower:
            scored.append((0, candidate))
        else:
            common = sum(1 for c in name_lower if c in candidate_lower)
            scored.append((len(name) + len(candidate) - 2 * common, candidate))
    scored.sort()
    threshold = max(len(name), 3)
    return [c for score, c in scored[:max_suggestions] if score <= threshold]
