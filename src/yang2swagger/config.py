"""Configuration loading and precedence resolution.

A generation run is configured by a :class:`~yang2swagger.models.GeneratorConfig`
assembled from four layers (high to low precedence):

1. CLI flags, passed to :func:`resolve_config` as keyword overrides;
2. environment variables (see :data:`ENV_VARS`);
3. a project config file -- the ``--config`` path when given, otherwise the
   first of ``./yang2swagger.json``, ``./yang2swagger.yaml`` and
   ``./yang2swagger.yml`` that exists;
4. the :class:`~yang2swagger.models.GeneratorConfig` defaults.

Example project file::

    # yang2swagger.yaml
    host: router.example.com:8443
    base_path: /restconf
    strategy: unpacking
    tag_generators: [segment, config]
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from yang2swagger.exceptions import ConfigError
from yang2swagger.models import GeneratorConfig

logger = logging.getLogger(__name__)

_PROJECT_CONFIG_FILENAMES = ("yang2swagger.json", "yang2swagger.yaml", "yang2swagger.yml")

ENV_VARS: dict[str, str] = {
    "YANG2SWAGGER_HOST": "host",
    "YANG2SWAGGER_BASE_PATH": "base_path",
    "YANG2SWAGGER_FORMAT": "format",
    "YANG2SWAGGER_STRATEGY": "strategy",
}
"""Environment variable name to :class:`GeneratorConfig` field."""


# --- Project config ---


def find_project_config(directory: Optional[Path] = None) -> Optional[Path]:
    """Return the first project config file present in *directory* (default: cwd)."""
    base = directory or Path.cwd()
    for filename in _PROJECT_CONFIG_FILENAMES:
        path = base / filename
        if path.is_file():
            return path
    return None


def load_project_config(path: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load a project config file.

    Args:
        path: Explicit file path. When ``None`` the current directory is
            searched (see :func:`find_project_config`).

    Returns:
        The parsed mapping, or ``None`` when no file was given or found.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file is
            not a valid JSON/YAML mapping.
    """
    if path is None:
        path = find_project_config()
        if path is None:
            return None
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a mapping")
    logger.debug("Loaded project config from %s", path)
    return data


# --- Precedence resolution ---


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for var, field in ENV_VARS.items():
        value = os.environ.get(var)
        if value:
            overrides[field] = value
    return overrides


def resolve_config(
    config_path: Optional[Path] = None,
    **overrides: Any,
) -> GeneratorConfig:
    """Resolve the effective configuration with the full precedence chain.

    Args:
        config_path: Explicit project config file (``--config``).
        **overrides: CLI values keyed by :class:`GeneratorConfig` field
            name. ``None`` values (options the user did not pass) are
            ignored.

    Returns:
        The validated :class:`GeneratorConfig`.

    Raises:
        ConfigError: If the project file is invalid or the merged values
            fail validation.
    """
    # 4. Defaults are filled in by the model
    data: dict[str, Any] = {}

    # 3. Project config
    project = load_project_config(config_path)
    if project is not None:
        data.update(project)

    # 2. Environment variables
    data.update(_env_overrides())

    # 1. CLI flags (highest precedence)
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
