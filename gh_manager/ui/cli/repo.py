"""
CLI commands proxied to gh for a repository.

Thin wrappers over ``gh_manager.core.services.gh_ops``; gh prints
its own output.
"""

from __future__ import annotations

import click

from gh_manager.core.services.gh_ops import ISSUE_STATES
from gh_manager.ui.cli.helpers import finish, get_config, info, resolve_project_root
from gh_manager.ui.cli.install import require_gh


@click.command("repo-check")
@click.argument("repo", required=False)
@click.pass_context
def repo_check_cmd(ctx: click.Context, repo: str | None) -> None:
    """Validate access to the repository on GitHub."""
    from gh_manager.core.services.gh_ops import repo_check

    target = get_config(ctx).resolve_repo(repo)
    require_gh()
    info(f"Validating access to repository {target}...")
    finish(repo_check(target, cwd=resolve_project_root(ctx)))


@click.command("issue-list")
@click.argument("repo", required=False)
@click.option("--state", type=click.Choice(ISSUE_STATES), default=None, help="Issue state (gh default: open).")
@click.option("--limit", "-L", type=click.IntRange(min=1), default=None, help="Maximum number of issues.")
@click.pass_context
def issue_list_cmd(
    ctx: click.Context,
    repo: str | None,
    state: str | None,
    limit: int | None,
) -> None:
    """List the repository's open issues."""
    from gh_manager.core.services.gh_ops import issue_list

    target = get_config(ctx).resolve_repo(repo)
    require_gh()
    info(f"Listing {state or 'open'} issues of {target}...")
    finish(issue_list(target, state=state, limit=limit, cwd=resolve_project_root(ctx)))


@click.command("milestone-list")
@click.argument("repo", required=False)
@click.option("--state", type=click.Choice(ISSUE_STATES), default=None, help="Milestone state (API default: open).")
@click.pass_context
def milestone_list_cmd(ctx: click.Context, repo: str | None, state: str | None) -> None:
    """List the repository's milestones through the gh API."""
    from gh_manager.core.services.gh_ops import milestone_list

    target = get_config(ctx).resolve_repo(repo)
    require_gh()
    info(f"Listing milestones of {target}...")
    finish(milestone_list(target, state=state, cwd=resolve_project_root(ctx)))
