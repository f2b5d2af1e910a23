"""Element validation rules.

A rule is any callable ``(element, resolved_class, model) -> Sequence[Issue]``.
Rules choose their own anchors: the deprecated-class rule reports once per
element on the opening tag name, while a per-occurrence rule would report on
every range from :func:`~viewlint.validator.ranges.tag_name_ranges`.
"""

from __future__ import annotations

from viewlint.models.document import ElementNode
from viewlint.models.errors import Issue, Severity
from viewlint.models.semantic import SemanticClass, SemanticModel
from viewlint.validator.ranges import open_tag_range

USE_OF_DEPRECATED_CLASS = "UseOfDeprecatedClass"


def deprecation_message(symbol: SemanticClass, kind: str = "class") -> str:
    """E.g. ``The sap.ui.commons.Button class is deprecated since version 1.38. <text>``."""
    message = f"The {symbol.name} {kind} is deprecated"
    deprecation = symbol.deprecation
    if deprecation is not None and deprecation.since:
        message += f" since version {deprecation.since}"
    if deprecation is not None and deprecation.text:
        return f"{message}. {deprecation.text}"
    return f"{message}."


def validate_use_of_deprecated_class(
    element: ElementNode,
    resolved_class: SemanticClass | None,
    model: SemanticModel,
) -> list[Issue]:
    """Warn once, on the opening tag name, when the element's class is deprecated.

    Self-closing and unclosed elements are reported exactly like complete ones.
    """
    if resolved_class is None or resolved_class.deprecation is None:
        return []
    return [
        Issue(
            kind=USE_OF_DEPRECATED_CLASS,
            message=deprecation_message(resolved_class),
            severity=Severity.WARN,
            offset_range=open_tag_range(element),
        )
    ]
