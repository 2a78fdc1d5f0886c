"""
GitHub CLI authentication.

Three login modes:
  - ``token``: pipe a token (env var or masked prompt) into
    ``gh auth login --with-token``
  - ``web``:   hand over to gh's own interactive flow
  - ``auto``:  ``token`` when the token env var is set, else ``web``

After a successful login the repository is checked once; a failing
check only adds warnings.
"""

from __future__ import annotations

import enum
import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from gh_manager.core.models.config import ManagerConfig
from gh_manager.core.services.gh_runner import PROBE_TIMEOUT, run_gh

logger = logging.getLogger(__name__)


class LoginMode(str, enum.Enum):
    AUTO = "auto"
    TOKEN = "token"
    WEB = "web"


@dataclass
class LoginResult:
    """Outcome of ``auth_login``."""

    mode: str
    resolved_mode: LoginMode | None = None
    repo: str = ""
    ok: bool = False
    repo_ok: bool | None = None
    error: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0 if self.error is None else 1


# ═══════════════════════════════════════════════════════════════════
#  Auth state
# ═══════════════════════════════════════════════════════════════════


def auth_status(cwd: Path | None = None) -> tuple[bool, str]:
    """Run ``gh auth status``; return (authenticated, detail text)."""
    try:
        r = run_gh("auth", "status", cwd=cwd, timeout=PROBE_TIMEOUT)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("gh auth status failed: %s", e)
        return False, str(e)
    detail = ((r.stdout or "") + (r.stderr or "")).strip()
    return r.returncode == 0, detail


def is_authenticated(cwd: Path | None = None) -> bool:
    """True when ``gh auth status`` succeeds."""
    return auth_status(cwd)[0]


# ═══════════════════════════════════════════════════════════════════
#  Login
# ═══════════════════════════════════════════════════════════════════


def resolve_mode(mode: str, config: ManagerConfig) -> LoginMode:
    """Turn the requested mode into ``token`` or ``web``.

    Raises:
        ValueError: If ``mode`` is not auto, token or web.
    """
    try:
        requested = LoginMode(mode)
    except ValueError:
        raise ValueError(f"Invalid login mode: {mode}. Use auto, token or web.") from None

    if requested is LoginMode.AUTO:
        return LoginMode.TOKEN if config.has_token else LoginMode.WEB
    return requested


def login_with_token(config: ManagerConfig, token: str) -> subprocess.CompletedProcess[str]:
    """Non-interactive ``gh auth login`` fed with ``token`` on stdin."""
    logger.info("Running non-interactive gh login for %s", config.hostname)
    return run_gh(
        "auth", "login",
        "--hostname", config.hostname,
        "--git-protocol", config.git_protocol,
        "--with-token",
        capture=False,
        stdin=token,
    )


def login_web() -> subprocess.CompletedProcess[str]:
    """Interactive ``gh auth login``."""
    logger.info("Running interactive gh login")
    return run_gh("auth", "login", capture=False)


def check_repo_after_login(repo: str) -> bool:
    """Best-effort ``gh repo view`` right after logging in."""
    try:
        r = run_gh("repo", "view", repo, capture=False)
    except OSError as e:
        logger.debug("gh repo view failed: %s", e)
        return False
    return r.returncode == 0


def auth_login(
    config: ManagerConfig,
    mode: str = "auto",
    *,
    repo: str | None = None,
    prompt_token: Callable[[], str] | None = None,
    on_progress: Callable[[str], None] | None = None,
    on_warning: Callable[[str], None] | None = None,
) -> LoginResult:
    """Log gh in using the requested mode, then check repo access.

    Args:
        config: Resolved manager configuration (token, hostname, repo).
        mode: ``auto``, ``token`` or ``web``.
        repo: Repository to check after login (default: ``config.repo``).
        prompt_token: Called for a token when ``token`` mode has none
            in the environment. An empty answer is an error.
        on_progress: Called with short human-readable progress lines.
        on_warning: Called with the ``auto`` fallback warning before the
            interactive login starts. Without it the warning is kept
            on ``result.warnings``.

    gh must already be installed.
    """
    progress = on_progress or (lambda _msg: None)
    result = LoginResult(mode=mode, repo=config.resolve_repo(repo))
    warn_now = on_warning or result.warnings.append

    try:
        resolved = resolve_mode(mode, config)
    except ValueError as e:
        result.error = str(e)
        return result
    result.resolved_mode = resolved

    if mode == LoginMode.AUTO.value and resolved is LoginMode.WEB:
        warn_now(f"{config.token_env} not set; falling back to interactive gh login.")

    try:
        if resolved is LoginMode.TOKEN:
            token = config.token.get_secret_value() if config.has_token else ""
            if not token and prompt_token is not None:
                token = (prompt_token() or "").strip()
            if not token:
                result.error = (
                    "No token provided. See 'gh-manager help' for how to create a token."
                )
                return result
            progress(f"Running non-interactive login with {config.token_env}...")
            r = login_with_token(config, token)
        else:
            progress("Running interactive gh login...")
            r = login_web()
    except OSError as e:
        result.error = f"Could not run gh: {e}"
        return result

    if r.returncode != 0:
        result.error = f"gh auth login failed (exit {r.returncode})"
        return result

    result.ok = True
    progress(f"Trying to validate access to repository {result.repo}...")
    result.repo_ok = check_repo_after_login(result.repo)
    if not result.repo_ok:
        result.warnings.append(
            f"Failed to validate repository {result.repo} right after login."
        )
        result.warnings.append("Run manually: gh-manager repo-check")
    return result
