"""
GitHub CLI operations — status report and thin proxies.

The proxies stream gh's own output to the terminal; only the exit
code comes back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gh_manager.core.services.gh_auth import auth_status
from gh_manager.core.services.gh_runner import (
    gh_available,
    gh_version,
    remote_origin_url,
    run_gh,
)

logger = logging.getLogger(__name__)

ISSUE_STATES = ("open", "closed", "all")


# ═══════════════════════════════════════════════════════════════════
#  Status
# ═══════════════════════════════════════════════════════════════════


@dataclass
class GhStatus:
    """gh install/auth state plus the local origin remote."""

    installed: bool = False
    version: str | None = None
    authenticated: bool = False
    auth_detail: str = ""
    remote_origin: str | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "installed": self.installed,
            "version": self.version,
            "authenticated": self.authenticated,
            "auth_detail": self.auth_detail,
            "remote_origin": self.remote_origin,
            "warnings": self.warnings,
        }


def gh_status(project_root: Path | None = None) -> GhStatus:
    """Version, authentication and origin remote. Never fatal."""
    status = GhStatus()

    if gh_available():
        status.installed = True
        status.version = gh_version(project_root) or "unknown"
        status.authenticated, status.auth_detail = auth_status(project_root)
        if not status.authenticated:
            status.warnings.append("gh authentication: not authenticated")
    else:
        status.warnings.append("gh is not installed")

    status.remote_origin = remote_origin_url(project_root)
    if status.remote_origin is None:
        status.warnings.append("origin remote is not configured in this repository")

    return status


# ═══════════════════════════════════════════════════════════════════
#  Proxies
# ═══════════════════════════════════════════════════════════════════


@dataclass
class ProxyResult:
    """Outcome of a command forwarded to gh."""

    command: list[str]
    returncode: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0

    @property
    def exit_code(self) -> int:
        if self.ok:
            return 0
        return self.returncode or 1


def _proxy(*args: str, cwd: Path | None = None) -> ProxyResult:
    result = ProxyResult(command=["gh", *args])
    try:
        r = run_gh(*args, cwd=cwd, capture=False)
    except OSError as e:
        result.returncode = 127
        result.error = f"Could not run gh: {e}"
        return result

    result.returncode = r.returncode
    if r.returncode != 0:
        result.error = f"{' '.join(result.command)} failed (exit {r.returncode})"
    return result


def repo_check(repo: str, *, cwd: Path | None = None) -> ProxyResult:
    """Validate access to ``repo`` with ``gh repo view``."""
    return _proxy("repo", "view", repo, cwd=cwd)


def issue_list(
    repo: str,
    *,
    state: str | None = None,
    limit: int | None = None,
    cwd: Path | None = None,
) -> ProxyResult:
    """List issues of ``repo`` (gh defaults to open issues)."""
    args = ["issue", "list", "--repo", repo]
    if state:
        if state not in ISSUE_STATES:
            return ProxyResult(command=["gh", *args], error=f"Invalid state: {state}")
        args += ["--state", state]
    if limit is not None:
        args += ["--limit", str(limit)]
    return _proxy(*args, cwd=cwd)


def milestone_list(
    repo: str,
    *,
    state: str | None = None,
    cwd: Path | None = None,
) -> ProxyResult:
    """List milestones of ``repo`` through the REST API."""
    args = ["api", f"repos/{repo}/milestones"]
    if state:
        if state not in ISSUE_STATES:
            return ProxyResult(command=["gh", *args], error=f"Invalid state: {state}")
        args += ["--method", "GET", "-f", f"state={state}"]
    return _proxy(*args, cwd=cwd)
