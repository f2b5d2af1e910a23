"""Rule registry: scope key -> ordered element rules."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import StrEnum

from viewlint.models.document import ElementNode
from viewlint.models.errors import Issue
from viewlint.models.semantic import SemanticClass, SemanticModel
from viewlint.validator.rules import validate_use_of_deprecated_class

ElementRule = Callable[[ElementNode, SemanticClass | None, SemanticModel], Sequence[Issue]]


class UnknownRuleScopeError(ValueError):
    """Raised when rules are registered under a scope the runner does not know."""

    def __init__(self, scope: str) -> None:
        self.scope = scope
        available = ", ".join(s.value for s in RuleScope)
        super().__init__(f"Unknown rule scope '{scope}'. Available: {available}")


class RuleScope(StrEnum):
    ELEMENT = "element"


def _scope(key: RuleScope | str) -> RuleScope:
    try:
        return RuleScope(key)
    except ValueError:
        raise UnknownRuleScopeError(str(key)) from None


class RuleSet:
    """Rules grouped by scope, invoked in registration order."""

    def __init__(
        self, rules: Mapping[RuleScope | str, Iterable[ElementRule]] | None = None
    ) -> None:
        self._rules: dict[RuleScope, list[ElementRule]] = {}
        for key, scoped in (rules or {}).items():
            self._rules.setdefault(_scope(key), []).extend(scoped)

    def register(self, scope: RuleScope | str, rule: ElementRule) -> ElementRule:
        """Append ``rule`` under ``scope``. Returns the rule unchanged."""
        self._rules.setdefault(_scope(scope), []).append(rule)
        return rule

    def get(self, scope: RuleScope | str) -> tuple[ElementRule, ...]:
        return tuple(self._rules.get(_scope(scope), ()))

    def __len__(self) -> int:
        return sum(len(scoped) for scoped in self._rules.values())


def default_rules() -> RuleSet:
    """A fresh RuleSet holding the built-in rules."""
    return RuleSet({RuleScope.ELEMENT: [validate_use_of_deprecated_class]})
