"""Validation runner: walks a view tree once and collects rule issues."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from viewlint.models.document import ElementNode, XMLDocument
from viewlint.models.errors import Issue
from viewlint.models.semantic import SemanticClass, SemanticModel
from viewlint.parser.xml import ViewParser
from viewlint.validator.namespaces import resolve_class
from viewlint.validator.registry import ElementRule, RuleScope, RuleSet, default_rules

logger = logging.getLogger("viewlint.validator")


def run(
    root: ElementNode,
    model: SemanticModel,
    rules: RuleSet | None = None,
) -> list[Issue]:
    """Validate the tree under ``root`` in document order.

    Each element is resolved once and handed to every element rule. An
    element that fails to resolve, or is itself flagged, never stops the walk
    into its children.
    """
    if rules is None:
        rules = default_rules()
    element_rules = rules.get(RuleScope.ELEMENT)

    issues: list[Issue] = []
    visited = 0
    for element in root.iter():
        visited += 1
        resolved = _resolve(element, model)
        for rule in element_rules:
            issues.extend(_apply(rule, element, resolved, model))

    logger.debug(
        "Validated %d element(s) under <%s> against model %s: %d issue(s)",
        visited, root.name, model.version, len(issues),
    )
    return issues


def validate_document(
    document: XMLDocument,
    model: SemanticModel,
    rules: RuleSet | None = None,
) -> list[Issue]:
    issues: list[Issue] = []
    for root in document.roots:
        issues.extend(run(root, model, rules))
    return issues


def validate_xml(
    text: str,
    model: SemanticModel,
    rules: RuleSet | None = None,
    *,
    parser: ViewParser | None = None,
) -> list[Issue]:
    """Parse ``text`` and validate it.

    Malformed markup, however deeply nested, never raises; only a document
    over the parser's size limit does (``DocumentSafetyError``).
    """
    document = (parser or ViewParser()).parse(text)
    return validate_document(document, model, rules)


def sort_issues(issues: Iterable[Issue]) -> list[Issue]:
    """Order issues by source position, most severe first on ties.

    For hosts that validate subtrees separately and merge the results.
    """
    return sorted(
        issues,
        key=lambda i: (i.offset_range.start, i.offset_range.end, i.severity.rank),
    )


# -- helpers -----------------------------------------------------------------


def _resolve(element: ElementNode, model: SemanticModel) -> SemanticClass | None:
    try:
        return resolve_class(element, model)
    except Exception:
        logger.exception(
            "Class resolution failed for <%s> at offset %d", element.name, element.open_name.start
        )
        return None


def _apply(
    rule: ElementRule,
    element: ElementNode,
    resolved: SemanticClass | None,
    model: SemanticModel,
) -> list[Issue]:
    try:
        return list(rule(element, resolved, model))
    except Exception:
        logger.exception(
            "Rule %s failed on <%s> at offset %d",
            getattr(rule, "__name__", repr(rule)), element.name, element.open_name.start,
        )
        return []
