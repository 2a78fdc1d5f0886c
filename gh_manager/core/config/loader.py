"""
Configuration loader — reads gh-manager.yml and the environment into
a ``ManagerConfig``.

Precedence for the repository identifier:
    CLI argument  >  $GITHUB_REPO  >  ``repo`` in gh-manager.yml  >  built-in default

The token is only read from the environment (``$GITHUB_TOKEN`` unless
``token_env`` names another variable).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from gh_manager.core.models.config import ManagerConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "gh-manager.yml"


class ConfigError(Exception):
    """Raised when the gh-manager configuration is invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for gh-manager.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to gh-manager.yml, or None if not found.
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


def _read_file(path: Path) -> dict:
    """Read and parse a config file into a plain mapping."""
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading gh-manager config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    if "token" in data:
        raise ConfigError(
            f"{path}: tokens must not be stored in {CONFIG_FILE}; "
            "export GITHUB_TOKEN instead."
        )

    return data


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ManagerConfig:
    """Build the configuration for this invocation.

    Args:
        path: Explicit path to gh-manager.yml. If None, searches upward
            from the cwd; a missing file just means defaults.
        environ: Environment mapping (default: ``os.environ``).

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    env = os.environ if environ is None else environ

    if path is None:
        path = find_config_file()
        data = _read_file(path) if path else {}
    else:
        data = _read_file(path)

    try:
        config = ManagerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid gh-manager configuration: {e}") from e

    overrides: dict = {}
    repo_override = env.get(config.repo_env, "").strip()
    if repo_override:
        overrides["repo"] = repo_override
    token = env.get(config.token_env, "")
    if token:
        overrides["token"] = token

    if overrides:
        try:
            config = ManagerConfig.model_validate({**config.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigError(f"Invalid gh-manager configuration: {e}") from e

    logger.debug(
        "Resolved config: repo=%s hostname=%s token=%s",
        config.repo, config.hostname, "set" if config.has_token else "unset",
    )
    return config
