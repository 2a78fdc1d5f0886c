"""
gh-manager — CLI entrypoint.

Usage:
    gh-manager --help
    gh-manager bootstrap [repo]
    python -m gh_manager status
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from gh_manager import __version__
from gh_manager.core.observability.logging_config import resolve_level, setup_logging

EPILOG = """\
\b
Environment variables:
  GITHUB_REPO   Default repository (owner/name).
  GITHUB_TOKEN  Token used by auth-login in non-interactive mode.
  GHM_LOG_LEVEL, GHM_LOG_FILE, GHM_LOG_FILE_LEVEL  Logging.

\b
Creating a GitHub token:
  1. Prefer a fine-grained personal access token.
  2. Restrict the token to the repository you work on.
  3. Grant only the permissions needed:
     - Issues: Read and write
     - Pull requests: Read and write
     - Contents: Read and write
     - Metadata: Read-only

\b
Official links:
  - https://docs.github.com/en/authentication/keeping-your-account-and-data-secure/managing-your-personal-access-tokens
  - https://github.com/settings/personal-access-tokens/new

\b
When to use each login mode:
  - auth-login token : you have a GITHUB_TOKEN with access to the repository.
  - auth-login web   : you prefer gh's interactive flow.
  - auth-login auto  : token when GITHUB_TOKEN is set, web otherwise.
"""


@click.group(
    invoke_without_command=True,
    epilog=EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="gh-manager")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Hide progress lines; keep warnings, errors and gh output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to gh-manager.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """gh-manager — install, validate and use the GitHub CLI (gh).

    Runs ``bootstrap`` when no command is given.
    """
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("GHM_LOG_LEVEL"),
        ),
        log_file=os.environ.get("GHM_LOG_FILE"),
        log_file_level=os.environ.get("GHM_LOG_FILE_LEVEL"),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(bootstrap)


@cli.command("help")
@click.pass_context
def help_cmd(ctx: click.Context) -> None:
    """Show usage and exit."""
    click.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())


# ── Register commands from gh_manager/ui/cli/ ─────────────────────

from gh_manager.ui.cli.auth import auth_login_cmd
from gh_manager.ui.cli.install import bootstrap, ensure_installed_cmd, status
from gh_manager.ui.cli.repo import issue_list_cmd, milestone_list_cmd, repo_check_cmd

cli.add_command(bootstrap)
cli.add_command(ensure_installed_cmd)
cli.add_command(status)
cli.add_command(auth_login_cmd)
cli.add_command(repo_check_cmd)
cli.add_command(issue_list_cmd)
cli.add_command(milestone_list_cmd)


if __name__ == "__main__":
    cli()
