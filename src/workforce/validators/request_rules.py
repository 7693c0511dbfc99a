"""
Declarative field rules and the generic validator that evaluates them.

A rule set is an ordered tuple of FieldRule. `validate()` runs every rule and
collects every violation (it never stops at the first), then raises one
ValidationError whose message joins them:

    Validation error: Branch name is required, "phone" must be a string

Keys of the payload that no rule declares are reported last as
`"<key>" is not allowed`.
"""
import re
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from workforce.exceptions.base import ValidationError

# Loose address check: something@something.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_TYPE_LABELS = {str: "string", int: "number", float: "number", bool: "boolean"}


@dataclass(frozen=True)
class FieldRule:
    """
    Constraints for one payload key.

    `messages` overrides the generic text for the "required" and "empty"
    violations, e.g. {"required": "Branch name is required"}.
    """

    name: str
    required: bool = True
    types: tuple[type, ...] = (str,)
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    email: bool = False
    allowed: tuple[Any, ...] | None = None
    allow_empty: bool = False
    messages: Mapping[str, str] = field(default_factory=dict)

    def message(self, kind: str, default: str) -> str:
        return self.messages.get(kind, default)


def optional(rules: Iterable[FieldRule]) -> tuple[FieldRule, ...]:
    """Same rules with nothing required (partial update payloads)."""
    return tuple(replace(rule, required=False) for rule in rules)


def _type_matches(value: Any, types: tuple[type, ...]) -> bool:
    # bool is an int subclass; only accept it when asked for explicitly
    if isinstance(value, bool) and bool not in types:
        return False
    return isinstance(value, types)


def _type_message(rule: FieldRule) -> str:
    labels = list(dict.fromkeys(_TYPE_LABELS.get(t, t.__name__) for t in rule.types))
    if len(labels) == 1:
        return f'"{rule.name}" must be a {labels[0]}'
    return f'"{rule.name}" must be one of [{", ".join(labels)}]'


def check_field(rule: FieldRule, payload: Mapping[str, Any]) -> list[str]:
    """Violations of one rule against the payload (empty list when valid)."""
    name = rule.name

    if name not in payload:
        if rule.required:
            return [rule.message("required", f'"{name}" is required')]
        return []

    value = payload[name]
    if not _type_matches(value, rule.types):
        return [_type_message(rule)]

    if not isinstance(value, str):
        if rule.allowed is not None and value not in rule.allowed:
            return [f'"{name}" must be one of [{", ".join(str(a) for a in rule.allowed)}]']
        return []

    if value == "" and not rule.allow_empty:
        return [rule.message("empty", f'"{name}" is not allowed to be empty')]

    violations = []
    if rule.min_length is not None and len(value) < rule.min_length:
        violations.append(f'"{name}" length must be at least {rule.min_length} characters long')
    if rule.max_length is not None and len(value) > rule.max_length:
        violations.append(f'"{name}" length must be less than or equal to {rule.max_length} characters long')
    if rule.pattern is not None and not re.fullmatch(rule.pattern, value):
        violations.append(f'"{name}" with value "{value}" fails to match the required pattern: /{rule.pattern}/')
    if rule.email and not EMAIL_PATTERN.match(value):
        violations.append(f'"{name}" must be a valid email')
    if rule.allowed is not None and value not in rule.allowed:
        violations.append(f'"{name}" must be one of [{", ".join(str(a) for a in rule.allowed)}]')
    return violations


def collect_violations(rules: Iterable[FieldRule], payload: Mapping[str, Any]) -> list[str]:
    """All violations, in rule-declaration order, then unknown keys."""
    rules = tuple(rules)
    violations: list[str] = []
    for rule in rules:
        violations.extend(check_field(rule, payload))

    declared = {rule.name for rule in rules}
    violations.extend(f'"{key}" is not allowed' for key in payload if key not in declared)
    return violations


def validate(rules: Iterable[FieldRule], payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate `payload` against `rules`.

    Returns:
        A plain-dict copy of the payload when it is valid.

    Raises:
        ValidationError: one or more violations; the message lists all of them.
    """
    violations = collect_violations(rules, payload)
    if violations:
        raise ValidationError(f"Validation error: {', '.join(violations)}", violations)
    return dict(payload)
