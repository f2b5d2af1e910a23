"""In-memory semantic-model registry keyed by framework version."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from viewlint.models.errors import Issue, ModelError, ModelLoadResult
from viewlint.models.semantic import SemanticModel
from viewlint.parser.builder import ModelBuilder
from viewlint.parser.loader import TrackedLoader, YAMLSafetyError
from viewlint.parser.xml import ViewParser
from viewlint.validator.registry import RuleSet, default_rules
from viewlint.validator.runner import validate_xml

logger = logging.getLogger("viewlint.service")

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class LoadResult:
    """Result of loading a model into the store."""

    version: str
    classes: int
    deprecated_classes: int
    warnings: list[str]


@dataclass
class ModelSummary:
    """Short summary for listing models."""

    version: str
    classes: int
    deprecated_classes: int


class ModelValidationError(ValueError):
    """Raised when a semantic-model file cannot be loaded."""

    def __init__(self, errors: list[ModelError]) -> None:
        self.errors = errors
        msgs = "; ".join(e.message for e in errors)
        super().__init__(f"Model validation failed: {msgs}")


class ModelNotFoundError(KeyError):
    """Raised when no model is loaded for a framework version."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"No model loaded for version '{version}'")


# ---------------------------------------------------------------------------
# ModelStore
# ---------------------------------------------------------------------------


class ModelStore:
    """In-memory model registry.  Thread-safe via ``threading.Lock``.

    Loading a model for a version that is already present replaces it.
    Stored models are immutable, so validation runs outside the lock.
    """

    def __init__(
        self,
        *,
        parser: ViewParser | None = None,
        rules: RuleSet | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._models: dict[str, SemanticModel] = {}

        self._loader = TrackedLoader()
        self._builder = ModelBuilder()
        self._parser = parser or ViewParser()
        self._rules = rules if rules is not None else default_rules()

    # -- helpers -------------------------------------------------------------

    def _parse_and_build(
        self, yaml_str: str, filename: str = "<string>"
    ) -> tuple[SemanticModel, ModelLoadResult]:
        try:
            raw, source_map = self._loader.load_string(yaml_str, filename=filename)
        except YAMLSafetyError as exc:
            error = ModelError(code="YAML_SAFETY_ERROR", message=str(exc))
            return SemanticModel(version=""), ModelLoadResult(valid=False, errors=[error])
        except Exception as exc:
            error = ModelError(code="YAML_PARSE_ERROR", message=str(exc))
            return SemanticModel(version=""), ModelLoadResult(valid=False, errors=[error])

        return self._builder.build(raw, source_map)

    # -- public API ----------------------------------------------------------

    def load_model(self, yaml_str: str, filename: str = "<string>") -> LoadResult:
        """Parse and store a model.  Raises ``ModelValidationError`` on errors."""
        model, result = self._parse_and_build(yaml_str, filename)
        if not result.valid:
            raise ModelValidationError(result.errors)

        with self._lock:
            replaced = model.version in self._models
            self._models[model.version] = model

        logger.info(
            "Loaded semantic model %s from %s (%d classes%s)",
            model.version, filename, len(model.classes), ", replaced" if replaced else "",
        )
        return LoadResult(
            version=model.version,
            classes=len(model.classes),
            deprecated_classes=len(model.deprecated_classes),
            warnings=[w.message for w in result.warnings],
        )

    def load_directory(self, root: Path) -> list[LoadResult]:
        """Load every ``*.yaml`` file in ``root`` (sorted by name)."""
        results: list[LoadResult] = []
        for yaml_file in sorted(root.glob("*.yaml")):
            content = yaml_file.read_text(encoding="utf-8")
            results.append(self.load_model(content, filename=str(yaml_file)))
        return results

    def get_model(self, version: str) -> SemanticModel:
        """Look up a loaded model.  Raises ``ModelNotFoundError`` if absent."""
        with self._lock:
            try:
                return self._models[version]
            except KeyError:
                raise ModelNotFoundError(version) from None

    def list_models(self) -> list[ModelSummary]:
        """Return a short summary for every loaded model."""
        with self._lock:
            items = sorted(self._models.items())

        return [
            ModelSummary(
                version=version,
                classes=len(m.classes),
                deprecated_classes=len(m.deprecated_classes),
            )
            for version, m in items
        ]

    def remove_model(self, version: str) -> None:
        """Unload a model.  Raises ``ModelNotFoundError`` if absent."""
        with self._lock:
            try:
                del self._models[version]
            except KeyError:
                raise ModelNotFoundError(version) from None

    def validate_model(self, yaml_str: str) -> ModelLoadResult:
        """Check a YAML model string without storing it."""
        _model, result = self._parse_and_build(yaml_str)
        return result

    def validate_view(self, xml: str, version: str) -> list[Issue]:
        """Validate a view document against the model for ``version``."""
        model = self.get_model(version)
        return validate_xml(xml, model, self._rules, parser=self._parser)
