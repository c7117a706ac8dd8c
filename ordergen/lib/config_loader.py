"""YAML loader for algorithm settings.

Reads the ``algorithm`` section of a YAML file into ``AlgorithmSettings``.
Keys missing from the file keep their defaults.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from ordergen.engine.errors import InvalidSettings
from ordergen.lib.logging_config import get_logger
from ordergen.models.settings import AlgorithmSettings

logger = get_logger("config_loader")

DEFAULT_CONFIG_PATH = Path("config/algorithm.yaml")

_SETTING_NAMES = {f.name for f in fields(AlgorithmSettings)}


def load_config(config_path: Path) -> dict[str, Any]:
    """Load raw configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Parsed configuration dictionary (empty for an empty file).

    Raises:
        FileNotFoundError: If config file does not exist.
    """
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    with open(config_path) as f:
        config = yaml.safe_load(f)

    return config or {}


def _validate_config(section: dict[str, Any]) -> None:
    """Validate the algorithm section.

    Raises:
        ValueError: If keys are unknown or values are out of range.
    """
    unknown = set(section) - _SETTING_NAMES
    if unknown:
        msg = f"Unknown algorithm settings: {', '.join(sorted(unknown))}"
        raise ValueError(msg)

    for name in ("prefer_exact_match", "allow_new_order_types"):
        if name in section and not isinstance(section[name], bool):
            msg = f"{name} must be true or false, got {section[name]!r}"
            raise ValueError(msg)


def load_settings(config_path: Path | None = None) -> AlgorithmSettings:
    """Load and validate algorithm settings.

    Args:
        config_path: YAML file path. Defaults to ``config/algorithm.yaml``.

    Returns:
        Validated settings.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If any setting is unknown or out of range.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    config = load_config(path)
    section = config.get("algorithm") or {}
    _validate_config(section)

    try:
        settings = AlgorithmSettings(**section).validate()
    except InvalidSettings as exc:
        msg = f"Invalid algorithm settings in {path}: {exc}"
        raise ValueError(msg) from exc

    logger.info("Algorithm settings loaded from %s", path)
    return settings
