"""
Option model — one named axis of configuration.

Options are declared in ``data/catalogs/options.json`` and loaded once per
process.  The catalog is the only source of legal values; dependency rules
narrow it, never widen it.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator

OptionKind = Literal["text", "select", "multiselect", "confirm"]
PhaseName = Literal["identity", "core", "modules", "infra"]


class Option(BaseModel):
    """A selectable option and its legal / supported values.

    Attributes:
        name:      camelCase name, also the template variable name.
        kind:      How the option is asked (text, select, multiselect, confirm).
        phase:     Prompt phase the option belongs to.
        message:   Prompt text.
        values:    Every structurally legal value, in declared order.
        supported: Values implemented today (subset of ``values``).
        choices:   Base choices offered when no rule restricts the option.
        default:   Conventional default, or None to use the first choice.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: OptionKind
    phase: PhaseName
    message: str
    values: tuple[str, ...] = ()
    supported: tuple[str, ...] = ()
    choices: tuple[str, ...] = ()
    default: Any = None

    @model_validator(mode="after")
    def _check_subsets(self) -> Option:
        stray = [v for v in self.supported if v not in self.values]
        if stray:
            raise ValueError(f"{self.name}: supported values not in catalog: {stray}")
        stray = [v for v in self.choices if v not in self.values]
        if stray:
            raise ValueError(f"{self.name}: base choices not in catalog: {stray}")
        return self

    @property
    def is_finite(self) -> bool:
        """True when the option has a closed, validated value set."""
        return bool(self.supported)

    @property
    def is_multi(self) -> bool:
        return self.kind == "multiselect"


class Phase(BaseModel):
    """An ordered group of options asked together."""

    model_config = ConfigDict(frozen=True)

    name: PhaseName
    title: str
    options: tuple[str, ...]
