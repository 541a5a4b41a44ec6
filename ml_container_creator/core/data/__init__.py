"""
Central data registry for the static option catalog.

Loads ``catalogs/options.json`` once at first access and caches it for the
process lifetime.  Everything downstream (resolver, sequencer, validation)
reads from this single source of truth; the returned models are frozen
and the collections are tuples/mapping proxies, so a run cannot mutate
the catalog.

Usage::

    from ml_container_creator.core.data import get_registry

    registry = get_registry()
    framework = registry.options["framework"]   # Option
    phases = registry.phases                    # tuple[Phase, ...]
"""

from __future__ import annotations

import json
import logging
from functools import cached_property
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ml_container_creator.core.models.option import Option, Phase

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent


def _load_json(relative_path: str) -> dict:
    """Load a JSON file relative to the data directory."""
    path = _DATA_DIR / relative_path
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class DataRegistry:
    """Registry for the option catalog.

    Each property lazily loads on first access and caches the result for
    the lifetime of the instance.  Use ``get_registry()`` for the shared
    process-level instance.
    """

    @cached_property
    def _catalog(self) -> dict:
        return _load_json("catalogs/options.json")

    # ── Options ──────────────────────────────────────────────────

    @cached_property
    def options(self) -> Mapping[str, Option]:
        """Option name → Option, in catalog-declared order."""
        data = {o["name"]: Option.model_validate(o) for o in self._catalog["options"]}
        logger.debug("Loaded %d option definitions", len(data))
        return MappingProxyType(data)

    # ── Phases ───────────────────────────────────────────────────

    @cached_property
    def phases(self) -> tuple[Phase, ...]:
        """Prompt phases in the order they are asked."""
        data = tuple(Phase.model_validate(p) for p in self._catalog["phases"])
        logger.debug("Loaded %d prompt phases", len(data))
        return data


# ── Module-level singleton ───────────────────────────────────────

_registry: DataRegistry | None = None


def get_registry() -> DataRegistry:
    """Return the process-level DataRegistry singleton."""
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = DataRegistry()
    return _registry
