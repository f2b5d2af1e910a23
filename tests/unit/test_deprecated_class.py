"""Tests for the use-of-deprecated-class validation."""

from __future__ import annotations

import pytest

from viewlint.models.errors import Issue, Severity
from viewlint.models.semantic import Deprecation, SemanticClass, SemanticModel
from viewlint.parser.xml import ViewParser
from viewlint.validator.registry import RuleScope, RuleSet
from viewlint.validator.rules import (
    USE_OF_DEPRECATED_CLASS,
    deprecation_message,
    validate_use_of_deprecated_class,
)
from viewlint.validator.runner import validate_xml
from tests.conftest import expected_range, strip_markers

BUTTON_MESSAGE = (
    "The sap.ui.commons.Button class is deprecated since version 1.38. "
    "replaced by sap.m.Button"
)


def _validate(snippet: str, model: SemanticModel) -> list[Issue]:
    rules = RuleSet({RuleScope.ELEMENT: [validate_use_of_deprecated_class]})
    return validate_xml(strip_markers(snippet), model, rules)


def _button_issue(snippet: str) -> Issue:
    return Issue(
        kind=USE_OF_DEPRECATED_CLASS,
        message=BUTTON_MESSAGE,
        severity=Severity.WARN,
        offset_range=expected_range(snippet),
    )


class TestTruePositives:
    def test_deprecated_class(self, model: SemanticModel) -> None:
        snippet = """
          <mvc:View
            xmlns:mvc="sap.ui.core.mvc"
            xmlns="sap.ui.commons">
            <\U0001f882Button\U0001f880>
            </Button>
          </mvc:View>"""
        issues = _validate(snippet, model)
        # Reported once on the opening tag, not on the closing tag name too
        assert issues == [_button_issue(snippet)]

    def test_deprecated_class_self_closing(self, model: SemanticModel) -> None:
        snippet = """
          <mvc:View
            xmlns:mvc="sap.ui.core.mvc"
            xmlns="sap.ui.commons">
            <\U0001f882Button\U0001f880/>
          </mvc:View>"""
        assert _validate(snippet, model) == [_button_issue(snippet)]

    def test_deprecated_class_in_unclosed_element(self, model: SemanticModel) -> None:
        """Early warning while the author is still typing the element."""
        snippet = """
          <mvc:View
            xmlns:mvc="sap.ui.core.mvc"
            xmlns="sap.ui.commons">
            <\U0001f882Button\U0001f880
          </mvc:View>"""
        assert _validate(snippet, model) == [_button_issue(snippet)]

    def test_deprecated_class_in_truncated_document(self, model: SemanticModel) -> None:
        snippet = """
          <mvc:View
            xmlns:mvc="sap.ui.core.mvc"
            xmlns="sap.ui.commons">
            <\U0001f882Button\U0001f880 text="Save">"""
        assert _validate(snippet, model) == [_button_issue(snippet)]

    def test_prefixed_deprecated_class(self, model: SemanticModel) -> None:
        snippet = """
          <mvc:View
            xmlns:mvc="sap.ui.core.mvc"
            xmlns:commons="sap.ui.commons">
            <\U0001f882commons:Button\U0001f880></commons:Button>
          </mvc:View>"""
        assert _validate(snippet, model) == [_button_issue(snippet)]

    def test_self_closing_and_full_forms_match(self, model: SemanticModel) -> None:
        prefix = '<View xmlns="sap.ui.commons">\n  <'
        full = _validate(prefix + "Button></Button></View>", model)
        short = _validate(prefix + "Button/></View>", model)
        assert len(full) == 1
        assert full == short
        assert full[0].offset_range.start == len(prefix)

    def test_each_deprecated_element_reported(self, model: SemanticModel) -> None:
        xml = """
          <mvc:View xmlns:mvc="sap.ui.core.mvc" xmlns="sap.ui.commons">
            <Label text="Name"/>
            <Button></Button>
            <Button/>
          </mvc:View>"""
        issues = validate_xml(xml, model)
        assert [i.message.split()[1] for i in issues] == [
            "sap.ui.commons.Label",
            "sap.ui.commons.Button",
            "sap.ui.commons.Button",
        ]
        assert all(i.severity == Severity.WARN for i in issues)
        starts = [i.offset_range.start for i in issues]
        assert starts == sorted(starts)


class TestNegativeEdgeCases:
    def test_class_not_deprecated(self, model: SemanticModel) -> None:
        snippet = """
          <mvc:View
            xmlns:mvc="sap.ui.core.mvc"
            xmlns="sap.m">
            <Button>
            </Button>
          </mvc:View>"""
        assert _validate(snippet, model) == []

    def test_comment_inside_start_tag(self, model: SemanticModel) -> None:
        snippet = """
          <mvc:View
            xmlns:mvc="sap.ui.core.mvc"
           <!-- unlike sap.ui.commons, sap.m is not deprecated -->
            xmlns="sap.m">
            <Button>
            </Button>
          </mvc:View>"""
        assert _validate(snippet, model) == []

    def test_aggregation_is_not_a_class(self, model: SemanticModel) -> None:
        snippet = """
          <mvc:View
            xmlns:mvc="sap.ui.core.mvc"
            xmlns="sap.ui.commons">
            <!-- An aggregation instead of a class -->
            <content>
            </content>
          </mvc:View>"""
        assert _validate(snippet, model) == []

    @pytest.mark.parametrize(
        "element",
        ["<Button></Button>", "<Button/>", "<Button>"],
        ids=["full", "self-closing", "unclosed"],
    )
    def test_non_deprecated_in_any_tag_form(self, model: SemanticModel, element: str) -> None:
        xml = f'<mvc:View xmlns:mvc="sap.ui.core.mvc" xmlns="sap.m">{element}</mvc:View>'
        assert _validate(xml, model) == []

    def test_unbound_prefix(self, model: SemanticModel) -> None:
        xml = '<View xmlns="sap.ui.core.mvc"><commons:Button/></View>'
        assert _validate(xml, model) == []

    def test_unknown_namespace(self, model: SemanticModel) -> None:
        xml = '<View xmlns="sap.ui.core.mvc"><Button xmlns="my.controls"/></View>'
        assert _validate(xml, model) == []

    def test_same_tag_not_deprecated_in_older_model(self) -> None:
        older = SemanticModel(
            version="1.30.0",
            classes={"sap.ui.commons.Button": SemanticClass(name="sap.ui.commons.Button")},
        )
        xml = '<Button xmlns="sap.ui.commons"></Button>'
        assert _validate(xml, older) == []


class TestRuleContract:
    def test_none_resolved_class_produces_nothing(self, model: SemanticModel) -> None:
        element = ViewParser().parse("<Button/>").root
        assert element is not None
        assert validate_use_of_deprecated_class(element, None, model) == []

    def test_rule_anchors_on_open_tag_only(self, model: SemanticModel) -> None:
        xml = '<Button xmlns="sap.ui.commons"></Button>'
        element = ViewParser().parse(xml).root
        assert element is not None
        cls = model.lookup_class("sap.ui.commons.Button")
        issues = validate_use_of_deprecated_class(element, cls, model)
        assert len(issues) == 1
        assert issues[0].offset_range.start == 1
        assert issues[0].offset_range.end == 1 + len("Button")


class TestDeprecationMessage:
    def test_since_and_text(self) -> None:
        cls = SemanticClass(
            name="sap.ui.commons.Button",
            deprecation=Deprecation(since="1.38", text="replaced by sap.m.Button"),
        )
        assert deprecation_message(cls) == BUTTON_MESSAGE

    def test_text_is_verbatim(self) -> None:
        cls = SemanticClass(
            name="a.B",
            deprecation=Deprecation(since="2.0", text="Use {@link a.C} instead!"),
        )
        assert deprecation_message(cls).endswith(". Use {@link a.C} instead!")

    def test_since_only(self) -> None:
        cls = SemanticClass(name="a.B", deprecation=Deprecation(since="1.2"))
        assert deprecation_message(cls) == "The a.B class is deprecated since version 1.2."

    def test_bare_flag(self, model: SemanticModel) -> None:
        issues = validate_xml('<TextView xmlns="sap.ui.commons"/>', model)
        assert [i.message for i in issues] == [
            "The sap.ui.commons.TextView class is deprecated."
        ]
