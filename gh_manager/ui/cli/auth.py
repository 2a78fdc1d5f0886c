"""
CLI command for logging gh in.

Thin wrapper over ``gh_manager.core.services.gh_auth``.
"""

from __future__ import annotations

import click

from gh_manager.ui.cli.helpers import (
    finish,
    get_config,
    info,
    print_post_login_steps,
    warn,
)
from gh_manager.ui.cli.install import require_gh


@click.command("auth-login")
@click.argument("mode", required=False, default="auto")
@click.pass_context
def auth_login_cmd(ctx: click.Context, mode: str) -> None:
    """Log gh in.

    \b
    auto:  use GITHUB_TOKEN when set, otherwise interactive login.
    token: require a token (asks for one when GITHUB_TOKEN is unset).
    web:   force the interactive gh auth login flow.
    """
    from gh_manager.core.services.gh_auth import LoginResult, auth_login, resolve_mode

    config = get_config(ctx)
    try:
        resolve_mode(mode, config)
    except ValueError as e:
        finish(LoginResult(mode=mode, error=str(e)))
        return

    require_gh()

    def _prompt_token() -> str:
        return click.prompt(
            f"Paste {config.token_env} (hidden input)",
            hide_input=True,
            default="",
            show_default=False,
            err=True,
        )

    result = auth_login(
        config,
        mode,
        prompt_token=_prompt_token,
        on_progress=info,
        on_warning=warn,
    )
    if result.ok:
        print_post_login_steps()
        if result.repo_ok:
            info("Repository access validated successfully.")
    finish(result)
