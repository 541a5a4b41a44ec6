"""
Constraint resolver — which options apply, which are forced, which
choices remain, given the answers collected so far.

All decisions come from the ``DEPENDENCY_RULES`` table below.  The
functions here are pure: they read the catalog and the partial answer
mapping and never prompt or mutate anything.

Resolution order for one option:
    1. not applicable (a ``skip`` rule holds)  → not-applicable default
    2. forced (a ``force`` rule holds)         → forced value
    3. otherwise                               → ``choices_for`` / ``default_for``
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Iterator, Mapping

from ml_container_creator.core.errors import EmptyChoiceSet, RuleConflict
from ml_container_creator.core.models.rules import (
    Condition,
    DependencyRule,
    RuleEffect,
    unless,
    when,
)
from ml_container_creator.core.services.catalog import get_option, phases

logger = logging.getLogger(__name__)

# Framework that serves LLMs from a hub instead of a serialized artifact
LLM_FRAMEWORK = "transformers"

TRADITIONAL_SERVERS = ("flask", "fastapi")
LLM_SERVERS = ("vllm", "sglang")

ALL_TEST_TYPES = ("local-model-cli", "local-model-server", "hosted-model-endpoint")
HOSTED_TEST_TYPES = ("hosted-model-endpoint",)


# ── Rule table ──────────────────────────────────────────────────

DEPENDENCY_RULES: tuple[DependencyRule, ...] = (
    # ── Core ────────────────────────────────────────────────────
    # Hub-loaded models have no serialization format to pick
    DependencyRule("modelFormat", when("framework", LLM_FRAMEWORK), "skip"),
    DependencyRule(
        "modelFormat", when("framework", "xgboost"), "restrict",
        choices=("json", "model", "ubj"),
    ),
    DependencyRule(
        "modelFormat", when("framework", "sklearn"), "restrict",
        choices=("pkl", "joblib"),
    ),
    DependencyRule(
        "modelFormat", when("framework", "tensorflow"), "restrict",
        choices=("keras", "h5", "SavedModel"),
    ),
    DependencyRule(
        "modelServer", unless("framework", LLM_FRAMEWORK), "restrict",
        choices=TRADITIONAL_SERVERS,
    ),
    DependencyRule(
        "modelServer", when("framework", LLM_FRAMEWORK), "restrict",
        choices=LLM_SERVERS,
    ),
    # ── Modules ─────────────────────────────────────────────────
    DependencyRule("includeSampleModel", when("framework", LLM_FRAMEWORK), "skip"),
    DependencyRule(
        "includeSampleModel", when("framework", LLM_FRAMEWORK), "force", value=False,
    ),
    DependencyRule("testTypes", when("includeTesting", False), "skip"),
    # LLM images need a GPU, so only the hosted endpoint can be tested
    DependencyRule(
        "testTypes", when("framework", LLM_FRAMEWORK), "restrict",
        choices=HOSTED_TEST_TYPES, default=HOSTED_TEST_TYPES,
    ),
    DependencyRule(
        "testTypes", unless("framework", LLM_FRAMEWORK), "restrict",
        choices=ALL_TEST_TYPES, default=ALL_TEST_TYPES,
    ),
    # ── Infrastructure ──────────────────────────────────────────
    DependencyRule(
        "instanceType", when("framework", LLM_FRAMEWORK), "restrict",
        choices=("gpu-enabled",),
    ),
    DependencyRule(
        "instanceType", unless("framework", LLM_FRAMEWORK), "restrict",
        choices=("cpu-optimized", "gpu-enabled"),
    ),
)


def rules_for(option: str, effect: RuleEffect | None = None) -> list[DependencyRule]:
    """Rules targeting ``option``, optionally filtered by effect, in table order."""
    return [
        r for r in DEPENDENCY_RULES
        if r.option == option and (effect is None or r.effect == effect)
    ]


def _restriction(option: str, answers: Mapping[str, Any]) -> DependencyRule | None:
    for rule in rules_for(option, "restrict"):
        if rule.applies(answers):
            return rule
    return None


# ── Public API ──────────────────────────────────────────────────


def is_applicable(option: str, answers: Mapping[str, Any]) -> bool:
    """False when a ``skip`` rule holds for ``option`` under ``answers``."""
    get_option(option)
    return not any(r.applies(answers) for r in rules_for(option, "skip"))


def forced_value(option: str, answers: Mapping[str, Any]) -> Any:
    """Value forced by the first matching ``force`` rule, or None."""
    get_option(option)
    for rule in rules_for(option, "force"):
        if rule.applies(answers):
            return rule.value
    return None


def is_forced(option: str, answers: Mapping[str, Any]) -> bool:
    get_option(option)
    return any(r.applies(answers) for r in rules_for(option, "force"))


def not_applicable_value(option: str) -> Any:
    """Value stored for an option that is skipped on the current path."""
    kind = get_option(option).kind
    if kind == "confirm":
        return False
    if kind == "multiselect":
        return ()
    return None


def choices_for(option: str, answers: Mapping[str, Any]) -> tuple[Any, ...]:
    """Legal choices for ``option`` given the answers so far.

    The base choices (from the first matching ``restrict`` rule, else the
    catalog's own base list) are intersected with the catalog's full value
    set, keeping catalog order.  Free-text options have no choice set.

    Raises:
        UnknownOption: ``option`` is not in the catalog.
        EmptyChoiceSet: a select/multiselect option resolves to nothing.
    """
    opt = get_option(option)
    if opt.kind == "text":
        return ()
    if opt.kind == "confirm":
        return (True, False)

    rule = _restriction(option, answers)
    base = rule.choices if rule else opt.choices
    legal = tuple(v for v in opt.values if v in base)
    if not legal:
        detail = f"under {rule.when.describe()}" if rule else "no base choices declared"
        raise EmptyChoiceSet(option, detail)
    return legal


def default_for(option: str, answers: Mapping[str, Any]) -> Any:
    """Conventional default for ``option`` on the current path.

    Restrict-rule default first, then the catalog default, then the first
    choice (every choice for multi-select options).
    """
    opt = get_option(option)
    if opt.kind == "text":
        return opt.default
    if opt.kind == "confirm":
        return bool(opt.default)

    choices = choices_for(option, answers)
    rule = _restriction(option, answers)
    candidate = rule.default if rule is not None and rule.default is not None else opt.default

    if opt.is_multi:
        picked = tuple(v for v in choices if candidate and v in candidate)
        return picked or choices
    if candidate in choices:
        return candidate
    return choices[0]


# ── Enumeration ─────────────────────────────────────────────────


def _domain(field: str) -> tuple[Any, ...] | None:
    """Finite value domain of ``field`` (None = open, e.g. free text)."""
    opt = get_option(field)
    if opt.kind == "confirm":
        return (True, False)
    if opt.kind == "text":
        return None
    return opt.values


def _may_co_occur(a: Condition, b: Condition) -> bool:
    """Whether ``a`` and ``b`` can hold for the same answer mapping.

    Conditions on different fields are treated as independent.
    """
    if a.field != b.field:
        return True
    domain = _domain(a.field)
    if domain is None:
        return True
    candidates = list(domain) + [None]
    if get_option(a.field).is_multi:
        candidates = [(v,) for v in domain] + [()]
    return any(a.holds({a.field: v}) and b.holds({a.field: v}) for v in candidates)


def _candidate_values(option: str, answers: Mapping[str, Any]) -> list[Any]:
    if not is_applicable(option, answers):
        return [not_applicable_value(option)]
    if is_forced(option, answers):
        return [forced_value(option, answers)]
    choices = choices_for(option, answers)
    if get_option(option).is_multi:
        return [
            combo
            for size in range(1, len(choices) + 1)
            for combo in itertools.combinations(choices, size)
        ]
    return list(choices)


def iter_answer_paths(seed: Mapping[str, Any] | None = None) -> Iterator[dict[str, Any]]:
    """Yield every legal combination of the selectable options.

    Free-text options are not enumerated; pass them in ``seed`` if the
    caller needs complete records.
    """
    names = [
        name
        for phase in phases()
        for name in phase.options
        if get_option(name).kind != "text"
    ]

    def walk(index: int, answers: dict[str, Any]) -> Iterator[dict[str, Any]]:
        if index == len(names):
            yield answers
            return
        name = names[index]
        for value in _candidate_values(name, answers):
            yield from walk(index + 1, {**answers, name: value})

    yield from walk(0, dict(seed or {}))


# ── Self-check ──────────────────────────────────────────────────


def check_rules() -> int:
    """Verify the rule table against the catalog.

    Run once at startup.  Returns the number of answer paths walked.

    Raises:
        UnknownOption: a rule names an option or field the catalog lacks.
        EmptyChoiceSet: a restrict rule or a reachable path has no choices.
        RuleConflict: two rules can force contradictory values together.
    """
    for rule in DEPENDENCY_RULES:
        opt = get_option(rule.option)
        get_option(rule.when.field)
        if rule.effect == "restrict" and not any(v in opt.values for v in rule.choices):
            raise EmptyChoiceSet(rule.option, f"restrict rule {rule.when.describe()}")

    for option in {r.option for r in DEPENDENCY_RULES}:
        forces = rules_for(option, "force")
        for a, b in itertools.combinations(forces, 2):
            if a.value != b.value and _may_co_occur(a.when, b.when):
                raise RuleConflict(
                    option,
                    f"{a.when.describe()} forces {a.value!r}, "
                    f"{b.when.describe()} forces {b.value!r}",
                )
        skipped = not_applicable_value(option)
        for skip in rules_for(option, "skip"):
            for force in forces:
                if force.value != skipped and _may_co_occur(skip.when, force.when):
                    raise RuleConflict(
                        option,
                        f"skipped ({skipped!r}) under {skip.when.describe()} but "
                        f"forced to {force.value!r} under {force.when.describe()}",
                    )

    count = sum(1 for _ in iter_answer_paths())
    logger.debug("Rule self-check passed: %d answer paths", count)
    return count
