"""Option catalog — pure lookups over the static option registry."""

from __future__ import annotations

from ml_container_creator.core.data import get_registry
from ml_container_creator.core.errors import UnknownOption
from ml_container_creator.core.models.option import Option, Phase


def get_option(name: str) -> Option:
    """Return the catalog entry for ``name``.

    Raises:
        UnknownOption: If the catalog does not declare ``name``.
    """
    try:
        return get_registry().options[name]
    except KeyError:
        raise UnknownOption(name) from None


def all_values(name: str) -> tuple[str, ...]:
    """Every structurally legal value of ``name``, in declared order."""
    return get_option(name).values


def supported_values(name: str) -> tuple[str, ...]:
    """The implemented subset of ``name``'s values."""
    return get_option(name).supported


def option_names() -> tuple[str, ...]:
    """All option names in catalog order."""
    return tuple(get_registry().options)


def phases() -> tuple[Phase, ...]:
    return get_registry().phases
