"""
Prompt sequencer — walk the user through the four prompt phases and
produce one completed ``AnswerRecord``.

Phases (from the catalog):
    identity → core → modules → infra

Within a phase, each option sees the answers of earlier phases plus the
earlier options of its own phase (``modelFormat`` depends on
``framework``).  Options that are not applicable or forced are never
asked.  Answers only reach the record after their phase completes, and
the record is built after every phase has finished: a prompter that
raises (``click.Abort`` on Ctrl-C) leaves nothing behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Protocol

from ml_container_creator.core.errors import InvalidAnswer
from ml_container_creator.core.models.answers import AnswerRecord
from ml_container_creator.core.models.option import OptionKind
from ml_container_creator.core.services.catalog import get_option, option_names, phases
from ml_container_creator.core.services.resolver import (
    choices_for,
    default_for,
    forced_value,
    is_applicable,
    is_forced,
    not_applicable_value,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptSpec:
    """Everything a prompter needs to ask one question."""

    name: str
    kind: OptionKind
    message: str
    choices: tuple[Any, ...] = ()
    default: Any = None


class Prompter(Protocol):
    """Renders prompts and returns a value satisfying the spec."""

    def announce(self, title: str) -> None: ...

    def ask(self, spec: PromptSpec) -> Any: ...


def build_timestamp(now: datetime | None = None) -> str:
    """Filesystem-safe generation timestamp, e.g. ``2026-10-17T12-30-45``."""
    now = now or datetime.now(timezone.utc)
    return now.isoformat().replace(":", "-").replace(".", "-")[:19]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Answer checks ───────────────────────────────────────────────


def coerce_answer(spec: PromptSpec, value: Any) -> Any:
    """Check ``value`` against ``spec`` and normalize it.

    Multi-select answers come back as a tuple in choice order.

    Raises:
        InvalidAnswer: The value violates the prompt's type or choices.
    """
    if spec.kind == "text":
        if not isinstance(value, str) or not value.strip():
            raise InvalidAnswer(spec.name, value, "expected a non-empty string")
        return value.strip()

    if spec.kind == "confirm":
        if not isinstance(value, bool):
            raise InvalidAnswer(spec.name, value, "expected yes/no")
        return value

    if spec.kind == "select":
        if value not in spec.choices:
            raise InvalidAnswer(spec.name, value, f"choose one of {list(spec.choices)}")
        return value

    if isinstance(value, str) or not hasattr(value, "__iter__"):
        raise InvalidAnswer(spec.name, value, "expected a list of choices")
    selected = list(value)
    stray = [v for v in selected if v not in spec.choices]
    if stray:
        raise InvalidAnswer(spec.name, value, f"unknown choices {stray}")
    if not selected:
        raise InvalidAnswer(spec.name, value, "select at least one")
    return tuple(v for v in spec.choices if v in selected)


def _legal_default(spec: PromptSpec, value: Any) -> bool:
    try:
        coerce_answer(spec, value)
    except InvalidAnswer:
        return False
    return True


# ── Sequencer ───────────────────────────────────────────────────


class PromptSequencer:
    """Phased question flow over a ``Prompter``.

    Args:
        prompter: Renders prompts (terminal, scripted, …).
        defaults: Suggested answers (option name → value), e.g. from
            ``mlcc.yml``.  Only used when legal on the current path.
        clock:    Returns the current time; drives ``buildTimestamp``.
    """

    def __init__(
        self,
        prompter: Prompter,
        *,
        defaults: Mapping[str, Any] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._prompter = prompter
        self._defaults = dict(defaults or {})
        self._clock = clock
        for name in self._defaults:
            get_option(name)

    def run(self) -> AnswerRecord:
        """Ask every applicable question and return the completed record."""
        timestamp = build_timestamp(self._clock())
        collected: dict[str, Any] = {}

        for phase in phases():
            self._prompter.announce(phase.title)
            phase_answers: dict[str, Any] = {}
            for name in phase.options:
                view = {**collected, **phase_answers}
                phase_answers[name] = self._resolve(name, view, timestamp)
            logger.info("Phase %s complete: %s", phase.name, phase_answers)
            collected.update(phase_answers)

        final = finalize_answers(collected)
        final["buildTimestamp"] = timestamp
        return AnswerRecord.model_validate(final)

    def prompt_spec(
        self, name: str, answers: Mapping[str, Any], timestamp: str = "",
    ) -> PromptSpec:
        """Build the prompt for ``name`` on the current answer path."""
        opt = get_option(name)
        spec = PromptSpec(
            name=name,
            kind=opt.kind,
            message=opt.message,
            choices=choices_for(name, answers),
            default=self._default(name, answers, timestamp),
        )
        configured = self._defaults.get(name)
        if configured is not None:
            if _legal_default(spec, configured):
                return PromptSpec(
                    name=spec.name,
                    kind=spec.kind,
                    message=spec.message,
                    choices=spec.choices,
                    default=coerce_answer(spec, configured),
                )
            logger.warning(
                "Ignoring configured default %s=%r: not a legal choice here", name, configured,
            )
        return spec

    def _default(self, name: str, answers: Mapping[str, Any], timestamp: str) -> Any:
        if name == "destinationDir":
            return f"./{answers.get('projectName', '')}-{timestamp}"
        return default_for(name, answers)

    def _resolve(self, name: str, answers: Mapping[str, Any], timestamp: str) -> Any:
        if not is_applicable(name, answers):
            logger.debug("Skipping %s: not applicable", name)
            return not_applicable_value(name)
        if is_forced(name, answers):
            value = forced_value(name, answers)
            logger.debug("Forcing %s=%r", name, value)
            return value

        spec = self.prompt_spec(name, answers, timestamp)
        return coerce_answer(spec, self._prompter.ask(spec))


def finalize_answers(answers: Mapping[str, Any]) -> dict[str, Any]:
    """Re-assert skip/force rules over a complete answer mapping.

    Corrects any value an earlier phase left inconsistent (for instance a
    sample-model flag set before the framework ruled it out).
    """
    result = dict(answers)
    for name in option_names():
        if name not in result:
            raise InvalidAnswer(name, None, "missing from answer set")
        if not is_applicable(name, result):
            corrected = not_applicable_value(name)
        elif is_forced(name, result):
            corrected = forced_value(name, result)
        else:
            continue
        if result[name] != corrected:
            logger.info("Correcting %s: %r → %r", name, result[name], corrected)
        result[name] = corrected
    return result
