"""Shared test fixtures for ViewLint."""

from __future__ import annotations

from pathlib import Path

import pytest

from viewlint.models.errors import OffsetRange
from viewlint.models.semantic import SemanticModel
from viewlint.parser.builder import ModelBuilder
from viewlint.parser.loader import TrackedLoader
from viewlint.parser.xml import ViewParser
from viewlint.service.model_store import ModelStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"
MODELS_DIR = FIXTURES_DIR / "models"

# Marks the expected issue range inside an XML snippet: <🢂Button🢀>
START_MARKER = "\U0001f882"
END_MARKER = "\U0001f880"


SAMPLE_MODEL_YAML = """\
version: "1.74.0"

classes:
  sap.ui.core.mvc.View: {}
  sap.ui.core.mvc.XMLView:
    description: A view defined using XML.

  sap.ui.commons.Button:
    deprecated:
      since: "1.38"
      text: replaced by sap.m.Button
  sap.ui.commons.Label:
    deprecated:
      since: "1.38"
      text: replaced by sap.m.Label
  sap.ui.commons.TextView:
    deprecated: true

  sap.m.Button:
    description: Enables users to trigger actions.
  sap.m.Label: {}
  sap.m.Page: {}
  sap.m.Panel: {}
"""


def expected_range(snippet: str) -> OffsetRange:
    """Range between the markers, as offsets into the snippet without markers."""
    start = snippet.index(START_MARKER)
    end = snippet.index(END_MARKER) - len(START_MARKER)
    return OffsetRange(start=start, end=end)


def strip_markers(snippet: str) -> str:
    return snippet.replace(START_MARKER, "").replace(END_MARKER, "")


def load_sample_model(yaml_text: str = SAMPLE_MODEL_YAML) -> SemanticModel:
    raw, source_map = TrackedLoader().load_string(yaml_text)
    model, result = ModelBuilder().build(raw, source_map)
    assert result.valid, f"Model errors: {[e.message for e in result.errors]}"
    return model


@pytest.fixture
def loader() -> TrackedLoader:
    return TrackedLoader()


@pytest.fixture
def builder() -> ModelBuilder:
    return ModelBuilder()


@pytest.fixture
def parser() -> ViewParser:
    return ViewParser()


@pytest.fixture
def model() -> SemanticModel:
    """The 1.74.0 fixture model: sap.ui.commons.* deprecated, sap.m.* not."""
    return load_sample_model()


@pytest.fixture
def store() -> ModelStore:
    return ModelStore()
