"""
Engine errors — one exception type per failure kind.

Authoring defects (``UnknownOption``, ``EmptyChoiceSet``, ``RuleConflict``)
mean the catalog or rule tables are inconsistent; ``check_rules()`` raises
them at startup.  Everything else is raised during a run and surfaced to
the user by the CLI before any file is written.
"""

from __future__ import annotations

from typing import Any


class GeneratorError(Exception):
    """Base class for every error raised by the generator engine."""


class UnknownOption(GeneratorError, KeyError):
    """An option name that the catalog does not declare."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown option: {name!r}")

    def __str__(self) -> str:
        return f"Unknown option: {self.name!r}"


class EmptyChoiceSet(GeneratorError):
    """Resolved choice set for an applicable option is empty."""

    def __init__(self, option: str, detail: str = "") -> None:
        self.option = option
        msg = f"No legal choices for option {option!r}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class RuleConflict(GeneratorError):
    """Two dependency rules can force different values for one option."""

    def __init__(self, option: str, detail: str) -> None:
        self.option = option
        super().__init__(f"Conflicting rules for {option!r}: {detail}")


class InvalidAnswer(GeneratorError):
    """A prompter returned a value outside the prompt's constraints."""

    def __init__(self, option: str, value: Any, detail: str) -> None:
        self.option = option
        self.value = value
        super().__init__(f"Invalid answer for {option!r}: {value!r} ({detail})")


class UnsupportedOption(GeneratorError):
    """A structurally legal value that is not implemented yet."""

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(f"⚠️  {field}={value} not implemented yet.")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnsupportedOption):
            return NotImplemented
        return (self.field, self.value) == (other.field, other.value)

    def __hash__(self) -> int:
        return hash((self.field, str(self.value)))


class UnresolvedReference(GeneratorError):
    """A template referenced a name the answer record does not define."""

    def __init__(self, template: str, detail: str) -> None:
        self.template = template
        super().__init__(f"Unresolved reference in template {template!r}: {detail}")


class DestinationExistsError(GeneratorError):
    """The output directory already exists and is not empty."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"Destination already exists and is not empty: {path}. "
            "Choose another output directory or set destination.on_existing: overwrite."
        )
