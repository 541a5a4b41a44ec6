"""
Rule models — declarative dependency and exclusion rules.

Rules are static tables evaluated against an answer mapping (option name →
value).  Keeping them as data rather than closures makes the whole
constraint graph enumerable: the resolver self-check and the tests walk
every rule without going through a prompt.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

RuleEffect = Literal["restrict", "force", "skip"]


@dataclass(frozen=True)
class Condition:
    """Predicate over one answer field.

    Holds when the field's value is one of ``values``.  For multi-select
    fields (tuples/lists) it holds when any selected member is one of
    ``values``.  ``negate`` inverts the result, so a missing field with
    ``negate=True`` holds.
    """

    field: str
    values: tuple[Any, ...]
    negate: bool = False

    def holds(self, answers: Mapping[str, Any]) -> bool:
        current = answers.get(self.field)
        if isinstance(current, (tuple, list, set, frozenset)):
            hit = any(v in self.values for v in current)
        else:
            hit = current in self.values
        return hit != self.negate

    def describe(self) -> str:
        op = "not in" if self.negate else "in"
        if len(self.values) == 1:
            op = "!=" if self.negate else "=="
            return f"{self.field} {op} {self.values[0]!r}"
        return f"{self.field} {op} {list(self.values)!r}"


def when(field: str, *values: Any) -> Condition:
    """``field`` is one of ``values``."""
    return Condition(field, tuple(values))


def unless(field: str, *values: Any) -> Condition:
    """``field`` is none of ``values``."""
    return Condition(field, tuple(values), negate=True)


@dataclass(frozen=True)
class DependencyRule:
    """``(option, upstream predicate) → effect``.

    restrict: the option's choices become ``choices`` (``default`` optional).
    force:    the option takes ``value`` without prompting.
    skip:     the option is not applicable and is never prompted.
    """

    option: str
    when: Condition
    effect: RuleEffect
    choices: tuple[Any, ...] = ()
    value: Any = None
    default: Any = None

    def applies(self, answers: Mapping[str, Any]) -> bool:
        return self.when.holds(answers)


@dataclass(frozen=True)
class ExclusionRule:
    """``(answer predicate) → path patterns`` omitted from the output.

    ``when=None`` makes the rule unconditional.
    """

    patterns: tuple[str, ...]
    when: Condition | None = None
    reason: str = ""

    def applies(self, answers: Mapping[str, Any]) -> bool:
        return self.when is None or self.when.holds(answers)
