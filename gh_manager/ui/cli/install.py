"""
CLI commands for installing gh and reporting its state.

Thin wrappers over ``gh_manager.core.services.gh_install``,
``gh_ops`` and the bootstrap use case.
"""

from __future__ import annotations

import json

import click

from gh_manager.core.services.gh_install import InstallResult
from gh_manager.core.services.gh_ops import GhStatus
from gh_manager.ui.cli.helpers import (
    finish,
    get_config,
    info,
    print_next_steps,
    resolve_project_root,
    warn,
)


def report_install(result: InstallResult) -> None:
    """Human-readable summary of an ``ensure_installed`` result."""
    if result.error:
        return
    if result.already_installed:
        info(f"gh is already installed: {result.version or 'unknown version'}")
    elif result.dry_run and result.plan is not None:
        plan = result.plan
        info(f"Dry run: would install gh via {plan.package_manager} ({plan.os_family})")
        for cmd in plan.commands():
            click.echo(f"     $ {' '.join(cmd)}")
    else:
        info(f"gh installed successfully: {result.version or 'unknown version'}")
        print_next_steps()


def require_gh() -> None:
    """Install gh when missing; exit on failure."""
    from gh_manager.core.services.gh_install import ensure_installed

    result = ensure_installed(on_progress=info)
    report_install(result)
    if result.error:
        finish(result)
    for message in result.warnings:
        warn(message)


def render_status(status: GhStatus) -> None:
    """Print a status report the way ``status`` shows it."""
    if status.installed:
        info(f"gh: {status.version}")
        if status.authenticated:
            info("gh authentication: ok")
        else:
            warn("gh authentication: not authenticated")
        if status.auth_detail:
            click.echo(status.auth_detail)
        if not status.authenticated:
            print_next_steps()
    else:
        warn("gh is not installed")

    if status.remote_origin:
        info(f"remote origin: {status.remote_origin}")
    else:
        warn("origin remote is not configured in this repository")


@click.command("ensure-installed")
@click.option("--dry-run", is_flag=True, help="Show the install plan without running it.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def ensure_installed_cmd(ctx: click.Context, dry_run: bool, as_json: bool) -> None:
    """Install the GitHub CLI if it is not present yet."""
    from gh_manager.core.services.gh_install import ensure_installed

    result = ensure_installed(dry_run=dry_run, on_progress=None if as_json else info)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.exit_code:
            ctx.exit(result.exit_code)
        return

    report_install(result)
    finish(result)


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show gh version, authentication and the local origin remote."""
    from gh_manager.core.services.gh_ops import gh_status

    result = gh_status(resolve_project_root(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    render_status(result)


@click.command()
@click.argument("repo", required=False)
@click.pass_context
def bootstrap(ctx: click.Context, repo: str | None) -> None:
    """Ensure gh is installed, show status and validate repo access."""
    from gh_manager.core.use_cases.bootstrap import run_bootstrap

    config = get_config(ctx)
    result = run_bootstrap(
        config,
        repo,
        project_root=resolve_project_root(ctx),
        on_progress=info,
        on_install=report_install,
        on_status=render_status,
    )

    if result.skipped_repo_check:
        finish(result)
        print_next_steps()
        return

    finish(result)
