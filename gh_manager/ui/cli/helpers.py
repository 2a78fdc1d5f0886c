"""
Shared CLI helpers — output, config access and the single place where
results turn into exit codes.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from gh_manager.core.config.loader import ConfigError, load_config
from gh_manager.core.models.config import ManagerConfig

PREFIX = "[gh-manager]"

NEXT_STEPS = """
Next steps:
  1. Authenticate with a token:
     gh-manager auth-login token

  2. Authenticate through the browser:
     gh-manager auth-login web

  3. Then validate access to the repository:
     gh-manager repo-check

Notes:
  - Use "token" when you have a GITHUB_TOKEN with access to the repository.
  - Use "web" when you prefer the official interactive GitHub CLI flow.
"""

POST_LOGIN_STEPS = """
Authentication complete.

Suggested next command:
  gh-manager repo-check
"""


# ── Output ──────────────────────────────────────────────────────


def is_quiet() -> bool:
    """True when the root command was given ``--quiet``."""
    ctx = click.get_current_context(silent=True)
    return bool(ctx and ctx.obj and ctx.obj.get("quiet", False))


def info(message: str) -> None:
    """Progress line; suppressed by ``--quiet``."""
    if is_quiet():
        return
    click.echo(f"{PREFIX} {message}")


def warn(message: str) -> None:
    click.secho(f"{PREFIX} warning: {message}", fg="yellow", err=True)


def fail(message: str) -> None:
    click.secho(f"{PREFIX} error: {message}", fg="red", err=True)


def print_next_steps() -> None:
    click.echo(NEXT_STEPS)


def print_post_login_steps() -> None:
    click.echo(POST_LOGIN_STEPS)


# ── Context ─────────────────────────────────────────────────────


def resolve_project_root(ctx: click.Context) -> Path:
    """Directory used for the local ``origin`` lookup."""
    config_path: Path | None = ctx.obj.get("config_path")
    return config_path.parent.resolve() if config_path else Path.cwd()


def get_config(ctx: click.Context) -> ManagerConfig:
    """Load the configuration once per invocation; fatal on errors."""
    config = ctx.obj.get("config")
    if config is None:
        try:
            config = load_config(ctx.obj.get("config_path"))
        except ConfigError as e:
            fail(str(e))
            sys.exit(1)
        ctx.obj["config"] = config
    return config


# ── Results → exit codes ────────────────────────────────────────


def finish(result: Any) -> None:
    """Print a result's warnings and error, then exit with its code.

    Every command ends here.  ``result`` is any object exposing
    ``warnings``, ``error`` and ``exit_code``.
    """
    for message in getattr(result, "warnings", []):
        warn(message)
    error = getattr(result, "error", None)
    if error:
        fail(error)
    code = result.exit_code
    if code:
        sys.exit(code)
