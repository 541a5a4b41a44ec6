"""
Configuration loader — reads mlcc.yml into a GeneratorConfig.

The file is optional.  It reads YAML, validates against the Pydantic
schema, checks that every ``defaults`` key names a catalog option, and
returns a typed config object.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ml_container_creator.core.errors import UnknownOption
from ml_container_creator.core.models.config import GeneratorConfig
from ml_container_creator.core.services.catalog import get_option

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "mlcc.yml"


class ConfigError(Exception):
    """Raised when generator configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for mlcc.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to mlcc.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, *, search: bool = True) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to mlcc.yml.  If None and ``search`` is set,
            searches upward from the cwd; with nothing found, returns the
            built-in defaults.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None and search:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using built-in defaults", CONFIG_FILE)
        return GeneratorConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    for name in config.defaults:
        try:
            get_option(name)
        except UnknownOption as e:
            raise ConfigError(f"Invalid default in {path}: {e}") from e

    if config.templates.path:
        # Relative corpus paths are relative to the config file
        corpus = Path(config.templates.path).expanduser()
        if not corpus.is_absolute():
            corpus = (path.parent / corpus).resolve()
        config = config.model_copy(
            update={"templates": config.templates.model_copy(update={"path": str(corpus)})}
        )

    logger.info("Loaded config from %s (%d prompt defaults)", path, len(config.defaults))
    return config
