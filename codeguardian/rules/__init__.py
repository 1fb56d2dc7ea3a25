"""Rule registry for CodeGuardian."""

import logging
import re
from functools import lru_cache
from typing import Iterable, Iterator

from codeguardian.models import Rule, Severity
from codeguardian.rules.catalog import RULE_DEFINITIONS

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("id", "pattern", "category", "suggestion", "severity")


class RuleError(ValueError):
    """Raised when a rule definition cannot be turned into a usable rule."""


def make_rule(
    rule_id: str,
    pattern: str,
    category: str,
    suggestion: str,
    severity: Severity,
    *,
    ignore_case: bool = True,
    group: str = "custom",
    cwe_id: str | None = None,
) -> Rule:
    """Compile ``pattern`` and build an immutable :class:`Rule`.

    The user-facing message is derived from the category as
    ``"Found: <category in lower case>"``. Patterns are compiled with
    ``re.ASCII``: case folding and the word, space and boundary classes
    only cover ASCII characters.
    """
    flags = (re.ASCII | re.IGNORECASE) if ignore_case else re.ASCII
    try:
        compiled = re.compile(pattern, flags)
    except re.error as exc:
        logger.error("Rule %s has an invalid pattern: %s", rule_id, exc)
        raise RuleError(f"Rule {rule_id}: invalid pattern {pattern!r}: {exc}") from exc

    return Rule(
        id=rule_id,
        pattern=compiled,
        category=category,
        message=f"Found: {category.lower()}",
        suggestion=suggestion,
        severity=severity,
        group=group,
        cwe_id=cwe_id,
    )


def rule_from_definition(definition: dict) -> Rule:
    """Build a rule from a catalog or config mapping."""
    if not isinstance(definition, dict):
        raise RuleError(f"Rule definition must be a mapping, got {type(definition).__name__}")

    missing = [key for key in REQUIRED_KEYS if not definition.get(key)]
    if missing:
        name = definition.get("id", "<unnamed>")
        raise RuleError(f"Rule {name} is missing required keys: {', '.join(missing)}")

    severity = definition["severity"]
    if not isinstance(severity, Severity):
        try:
            severity = Severity.parse(severity)
        except ValueError as exc:
            raise RuleError(f"Rule {definition['id']}: {exc}") from exc

    ignore_case = definition.get("ignore_case", True)
    if not isinstance(ignore_case, bool):
        raise RuleError(f"Rule {definition['id']}: ignore_case must be true or false, got {ignore_case!r}")

    return make_rule(
        str(definition["id"]),
        str(definition["pattern"]),
        str(definition["category"]),
        str(definition["suggestion"]),
        severity,
        ignore_case=ignore_case,
        group=str(definition.get("group", "custom")),
        cwe_id=definition.get("cwe_id"),
    )


class RuleRegistry:
    """Fixed, ordered collection of rules.

    The registry never changes after construction; ``extended`` and
    ``without`` return new registries.
    """

    def __init__(self, rules: Iterable[Rule]):
        ordered = tuple(rules)
        seen: set[str] = set()
        for rule in ordered:
            if rule.id in seen:
                raise RuleError(f"Duplicate rule id: {rule.id}")
            seen.add(rule.id)
        self._rules = ordered
        self._by_id = {rule.id: rule for rule in ordered}

    def all_rules(self) -> tuple[Rule, ...]:
        return self._rules

    def get(self, rule_id: str) -> Rule | None:
        return self._by_id.get(rule_id)

    def groups(self) -> dict[str, list[str]]:
        """Return categories keyed by group, both in registry order."""
        grouped: dict[str, list[str]] = {}
        for rule in self._rules:
            grouped.setdefault(rule.group, []).append(rule.category)
        return grouped

    def extended(self, rules: Iterable[Rule]) -> "RuleRegistry":
        return RuleRegistry(self._rules + tuple(rules))

    def without(self, rule_ids: Iterable[str]) -> "RuleRegistry":
        drop = set(rule_ids)
        unknown = drop - self._by_id.keys()
        if unknown:
            raise RuleError(f"Unknown rule ids: {', '.join(sorted(unknown))}")
        return RuleRegistry(r for r in self._rules if r.id not in drop)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id


@lru_cache(maxsize=None)
def default_registry() -> RuleRegistry:
    """Build the built-in rule set once per process."""
    return RuleRegistry(rule_from_definition(d) for d in RULE_DEFINITIONS)


__all__ = [
    "RuleError",
    "RuleRegistry",
    "default_registry",
    "make_rule",
    "rule_from_definition",
]
