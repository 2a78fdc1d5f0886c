"""
GitHub CLI installer.

Resolves an install plan for the running platform (OS family + first
available package manager) and executes it step by step.  Steps
inherit the terminal so ``sudo`` can prompt for a password.

There is no rollback and no retry: the first failing step that is
not marked ``allow_failure`` ends the install.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from gh_manager.core.services.detection import (
    OS_LINUX,
    OS_MACOS,
    detect_os,
    detect_package_manager,
    is_command_available,
    is_root,
)
from gh_manager.core.services.gh_runner import gh_available, gh_version

logger = logging.getLogger(__name__)

KEYRING_URL = "https://cli.github.com/packages/githubcli-archive-keyring.gpg"
KEYRING_PATH = "/usr/share/keyrings/githubcli-archive-keyring.gpg"
APT_SOURCE_PATH = "/etc/apt/sources.list.d/github-cli.list"
RPM_REPO_URL = "https://cli.github.com/packages/rpm/gh-cli.repo"


@dataclass(frozen=True)
class InstallStep:
    """One command of an install recipe."""

    label: str
    cmd: tuple[str, ...]
    needs_sudo: bool = True
    allow_failure: bool = False


# ── Recipes ─────────────────────────────────────────────────────

INSTALL_RECIPES: dict[str, tuple[InstallStep, ...]] = {
    "apt": (
        InstallStep("refresh package index", ("apt-get", "update")),
        InstallStep(
            "install curl and CA certificates",
            ("apt-get", "install", "-y", "curl", "ca-certificates"),
        ),
        InstallStep(
            "download GitHub CLI keyring",
            ("bash", "-c", f"curl -fsSL {KEYRING_URL} | dd of={KEYRING_PATH} status=none"),
        ),
        InstallStep("make keyring readable", ("chmod", "go+r", KEYRING_PATH)),
        InstallStep(
            "add GitHub CLI apt source",
            (
                "bash", "-c",
                f'echo "deb [arch=$(dpkg --print-architecture) signed-by={KEYRING_PATH}]'
                f' https://cli.github.com/packages stable main" > {APT_SOURCE_PATH}',
            ),
        ),
        InstallStep("refresh package index", ("apt-get", "update")),
        InstallStep("install gh", ("apt-get", "install", "-y", "gh")),
    ),
    "dnf": (
        InstallStep(
            "install dnf config-manager plugin",
            ("dnf", "install", "-y", "dnf-command(config-manager)"),
            allow_failure=True,
        ),
        InstallStep(
            "add GitHub CLI rpm repository",
            ("dnf", "config-manager", "--add-repo", RPM_REPO_URL),
        ),
        InstallStep("install gh", ("dnf", "install", "-y", "gh")),
    ),
    "yum": (
        InstallStep(
            "install yum-utils",
            ("yum", "install", "-y", "yum-utils"),
            allow_failure=True,
        ),
        InstallStep(
            "add GitHub CLI rpm repository",
            ("yum-config-manager", "--add-repo", RPM_REPO_URL),
        ),
        InstallStep("install gh", ("yum", "install", "-y", "gh")),
    ),
    "brew": (
        InstallStep("install gh", ("brew", "install", "gh"), needs_sudo=False),
    ),
}


# ── Results ─────────────────────────────────────────────────────


@dataclass
class InstallPlan:
    """The resolved way to install gh on this machine."""

    os_family: str
    package_manager: str | None = None
    steps: list[InstallStep] = field(default_factory=list)
    use_sudo: bool = False
    error: str | None = None

    def commands(self) -> list[list[str]]:
        """Full argv for each step, sudo prefix included."""
        return [step_command(s, use_sudo=self.use_sudo) for s in self.steps]

    def to_dict(self) -> dict[str, Any]:
        return {
            "os": self.os_family,
            "package_manager": self.package_manager,
            "use_sudo": self.use_sudo,
            "steps": [
                {
                    "label": s.label,
                    "command": step_command(s, use_sudo=self.use_sudo),
                    "allow_failure": s.allow_failure,
                }
                for s in self.steps
            ],
            "error": self.error,
        }


@dataclass
class InstallResult:
    """Outcome of ``ensure_installed``."""

    ok: bool = False
    already_installed: bool = False
    version: str | None = None
    plan: InstallPlan | None = None
    dry_run: bool = False
    error: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0 if self.error is None else 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "already_installed": self.already_installed,
            "version": self.version,
            "dry_run": self.dry_run,
            "plan": self.plan.to_dict() if self.plan else None,
            "error": self.error,
            "warnings": self.warnings,
        }


# ── Plan resolution ─────────────────────────────────────────────


def resolve_install_plan(os_family: str | None = None) -> InstallPlan:
    """Pick the recipe for this platform.

    The plan carries an ``error`` (and no steps) when the OS is
    unsupported, no package manager is available, or root is needed
    but ``sudo`` is missing.
    """
    os_family = os_family or detect_os()
    plan = InstallPlan(os_family=os_family)

    if os_family not in (OS_LINUX, OS_MACOS):
        plan.error = "Unsupported operating system for automatic gh installation."
        return plan

    pm = detect_package_manager(os_family)
    if pm is None:
        if os_family == OS_MACOS:
            plan.error = "Homebrew not found. Install brew or install gh manually."
        else:
            plan.error = "No supported package manager (apt, dnf or yum) found to install gh."
        return plan

    steps = list(INSTALL_RECIPES[pm])
    needs_root = any(s.needs_sudo for s in steps)
    use_sudo = needs_root and not is_root()
    if use_sudo and not is_command_available("sudo"):
        plan.package_manager = pm
        plan.error = "sudo is not available to install gh."
        return plan

    plan.package_manager = pm
    plan.steps = steps
    plan.use_sudo = use_sudo
    logger.info("Install plan: %s (%d steps, sudo=%s)", pm, len(steps), use_sudo)
    return plan


def step_command(step: InstallStep, *, use_sudo: bool) -> list[str]:
    """Argv for a step, with ``sudo`` in front when it needs root."""
    cmd = list(step.cmd)
    if step.needs_sudo and use_sudo:
        cmd = ["sudo", *cmd]
    return cmd


# ── Execution ───────────────────────────────────────────────────


def run_install_step(step: InstallStep, *, use_sudo: bool) -> dict[str, Any]:
    """Run one install step attached to the terminal.

    Returns:
        ``{"ok": True, "returncode": 0}`` on success,
        ``{"ok": False, "returncode": N, "error": "..."}`` on failure.
    """
    cmd = step_command(step, use_sudo=use_sudo)
    logger.info("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd)
    except FileNotFoundError:
        return {"ok": False, "returncode": 127, "error": f"Command not found: {cmd[0]}"}
    except OSError as e:
        return {"ok": False, "returncode": 126, "error": str(e)}

    if result.returncode == 0:
        return {"ok": True, "returncode": 0}
    return {
        "ok": False,
        "returncode": result.returncode,
        "error": f"{step.label} failed (exit {result.returncode})",
    }


def ensure_installed(
    *,
    dry_run: bool = False,
    os_family: str | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> InstallResult:
    """Make sure gh is on PATH, installing it when it isn't.

    Args:
        dry_run: Resolve and return the plan without running it.
        os_family: Override OS detection (``linux``/``macos``/other).
        on_progress: Called with short human-readable progress lines.
    """
    progress = on_progress or (lambda _msg: None)

    if gh_available():
        return InstallResult(
            ok=True,
            already_installed=True,
            version=gh_version(),
        )

    progress("gh not found. Trying to install...")
    plan = resolve_install_plan(os_family)
    result = InstallResult(plan=plan, dry_run=dry_run)

    if plan.error:
        result.error = plan.error
        return result

    if dry_run:
        result.ok = True
        return result

    progress(f"Installing gh via {plan.package_manager}...")
    for step in plan.steps:
        outcome = run_install_step(step, use_sudo=plan.use_sudo)
        if outcome["ok"]:
            continue
        if step.allow_failure:
            logger.info("Ignoring failed optional step: %s", step.label)
            result.warnings.append(f"Optional step failed: {step.label}")
            continue
        result.error = outcome["error"]
        return result

    if not gh_available():
        result.error = "gh installation did not complete successfully."
        return result

    result.ok = True
    result.version = gh_version()
    return result
