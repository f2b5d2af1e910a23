"""View validation: namespace resolution, tag ranges, rules and the runner."""

from viewlint.validator.namespaces import resolve_class, resolve_class_name, resolve_namespace
from viewlint.validator.ranges import LineIndex, TagNameRange, TagRole, tag_name_ranges
from viewlint.validator.registry import ElementRule, RuleScope, RuleSet, default_rules
from viewlint.validator.rules import USE_OF_DEPRECATED_CLASS, validate_use_of_deprecated_class
from viewlint.validator.runner import run, sort_issues, validate_document, validate_xml

__all__ = [
    "USE_OF_DEPRECATED_CLASS",
    "ElementRule",
    "LineIndex",
    "RuleScope",
    "RuleSet",
    "TagNameRange",
    "TagRole",
    "default_rules",
    "resolve_class",
    "resolve_class_name",
    "resolve_namespace",
    "run",
    "sort_issues",
    "tag_name_ranges",
    "validate_document",
    "validate_use_of_deprecated_class",
    "validate_xml",
]
