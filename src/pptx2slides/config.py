#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the pptx2slides CLI.

A config file holds ``ImportOptions`` values plus the CLI-only ``store`` and
``log_level`` keys. Files are looked up in this order:

1. ``--config`` on the command line
2. the file named by the ``PPTX2SLIDES_CONFIG`` environment variable
3. ``.pptx2slides.toml`` / ``.yaml`` / ``.yml`` / ``.json`` or a ``pyproject.toml``
   with a ``[tool.pptx2slides]`` table, from the cwd up to the filesystem root
"""

import json
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Optional

import yaml

from pptx2slides.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES
from pptx2slides.exceptions import ValidationError

PYPROJECT_SECTION = "pptx2slides"

# Keys consumed by the CLI itself rather than ImportOptions
CLI_ONLY_KEYS = ("store", "log_level", "log_file")


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


_READERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
}


def _pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.pptx2slides]`` table of a pyproject.toml, or an empty dict."""
    data = _read_toml(pyproject_path)
    section = data.get("tool", {}).get(PYPROJECT_SECTION, {})
    if not isinstance(section, dict):
        raise ValidationError(
            f"[tool.{PYPROJECT_SECTION}] in {pyproject_path} must be a table, got {type(section).__name__}"
        )
    return section


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ValidationError
        If the file is missing, has an unsupported extension, or cannot be parsed

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ValidationError(f"Configuration file does not exist: {config_path}", "config", str(config_path))

    try:
        if config_path.name.lower() == "pyproject.toml":
            return _pyproject_section(config_path)

        reader = _READERS.get(config_path.suffix.lower())
        if reader is None:
            raise ValidationError(
                f"Unsupported config file format: {config_path.suffix}. Use .json, .toml, or .yaml",
                "config",
                str(config_path),
            )
        config = reader(config_path)
    except ValidationError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        # TOMLDecodeError and JSONDecodeError are ValueErrors
        raise ValidationError(f"Error reading config file {config_path}: {e}", "config", original_error=e) from e

    if not isinstance(config, dict):
        raise ValidationError(f"Config file {config_path} must contain a mapping, got {type(config).__name__}")
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Return the first config file found walking up from ``start_dir`` (default: cwd)."""
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _pyproject_section(pyproject_path):
                    return pyproject_path
            except (OSError, ValueError, ValidationError):
                # Unrelated or broken pyproject.toml; keep searching
                pass

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file(explicit: Optional[str] = None) -> Optional[Path]:
    """Resolve the config file to use, honoring ``--config`` and the environment."""
    if explicit:
        return Path(explicit)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return find_config_in_parents()


def split_config(config: Dict[str, Any]) -> tuple[Dict[str, Any], Dict[str, Any]]:
    """Split a config mapping into (import option values, CLI-only values)."""
    options: Dict[str, Any] = {}
    cli: Dict[str, Any] = {}
    for key, value in config.items():
        normalized = key.replace("-", "_")
        if normalized in CLI_ONLY_KEYS:
            cli[normalized] = value
        else:
            options[normalized] = value
    return options, cli
