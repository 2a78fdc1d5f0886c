"""
Bootstrap use case — install gh, report status, check the repository.

The repository check only runs when ``gh auth status`` succeeds;
otherwise it is skipped with a warning.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from gh_manager.core.models.config import ManagerConfig
from gh_manager.core.services.gh_auth import is_authenticated
from gh_manager.core.services.gh_install import InstallResult, ensure_installed
from gh_manager.core.services.gh_ops import GhStatus, ProxyResult, gh_status, repo_check


@dataclass
class BootstrapResult:
    """Everything ``bootstrap`` did, step by step."""

    repo: str
    install: InstallResult | None = None
    status: GhStatus | None = None
    repo_check: ProxyResult | None = None
    skipped_repo_check: bool = False
    error: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        if self.install is not None and self.install.exit_code:
            return self.install.exit_code
        if self.repo_check is not None and self.repo_check.exit_code:
            return self.repo_check.exit_code
        return 0 if self.error is None else 1


def run_bootstrap(
    config: ManagerConfig,
    repo: str | None = None,
    *,
    project_root: Path | None = None,
    on_progress: Callable[[str], None] | None = None,
    on_install: Callable[[InstallResult], None] | None = None,
    on_status: Callable[[GhStatus], None] | None = None,
) -> BootstrapResult:
    """Ensure gh is installed, show status, then check repo access.

    Args:
        config: Resolved manager configuration.
        repo: Repository to check (default: ``config.repo``).
        project_root: Working tree used for the origin remote lookup.
        on_progress: Forwarded to ``ensure_installed``.
        on_install: Called with the install result once it's known.
        on_status: Called with the status report as soon as it's known,
            before the (interactive) repository check runs.
    """
    result = BootstrapResult(repo=config.resolve_repo(repo))

    result.install = ensure_installed(on_progress=on_progress)
    if on_install is not None:
        on_install(result.install)
    result.warnings.extend(result.install.warnings)
    if result.install.error:
        result.error = result.install.error
        return result

    result.status = gh_status(project_root)
    if on_status is not None:
        on_status(result.status)

    if is_authenticated(project_root):
        result.repo_check = repo_check(result.repo, cwd=project_root)
        if result.repo_check.error:
            result.error = result.repo_check.error
    else:
        result.skipped_repo_check = True
        result.warnings.append(
            "Skipping repository check because gh is not authenticated yet."
        )

    return result
