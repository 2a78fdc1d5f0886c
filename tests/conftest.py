"""
Shared test fixtures and configuration.

Nothing here touches the real ``gh``, ``git`` or package managers:
the runner seam in ``gh_manager.core.services`` is replaced by fakes.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest

from gh_manager.core.models.config import ManagerConfig

GH_VERSION_OUTPUT = "gh version 2.40.1 (2023-12-13)\nhttps://github.com/cli/cli/releases/tag/v2.40.1\n"


@dataclass
class GhCall:
    args: tuple[str, ...]
    capture: bool
    stdin: str | None


class FakeGh:
    """Stand-in for ``run_gh`` that records calls and replays responses."""

    def __init__(self) -> None:
        self.installed = True
        self.calls: list[GhCall] = []
        self._responses: dict[tuple[str, ...], tuple[int, str, str]] = {
            ("--version",): (0, GH_VERSION_OUTPUT, ""),
            ("auth", "status"): (0, "", "github.com\n  ✓ Logged in to github.com account octocat\n"),
        }

    def respond(self, *prefix: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self._responses[prefix] = (returncode, stdout, stderr)

    def __call__(
        self,
        *args: str,
        cwd: Path | None = None,
        capture: bool = True,
        stdin: str | None = None,
        timeout: int | None = None,
    ) -> subprocess.CompletedProcess[str]:
        self.calls.append(GhCall(args=args, capture=capture, stdin=stdin))
        returncode, stdout, stderr = self._match(args)
        return subprocess.CompletedProcess(
            ["gh", *args],
            returncode,
            stdout if capture else None,
            stderr if capture else None,
        )

    def _match(self, args: tuple[str, ...]) -> tuple[int, str, str]:
        best: tuple[str, ...] | None = None
        for prefix in self._responses:
            if args[: len(prefix)] == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        return self._responses[best] if best is not None else (0, "", "")

    def called(self, *prefix: str) -> list[GhCall]:
        return [c for c in self.calls if c.args[: len(prefix)] == prefix]

    def arg_lists(self) -> list[tuple[str, ...]]:
        return [c.args for c in self.calls]


class FakeGit:
    """Stand-in for ``run_git``; only answers the origin lookup."""

    def __init__(self) -> None:
        self.origin: str | None = "git@github.com:octo/widgets.git"

    def __call__(self, *args: str, cwd: Path | None = None, timeout: int = 15):
        if args[:3] == ("remote", "get-url", "origin") and self.origin:
            return subprocess.CompletedProcess(["git", *args], 0, self.origin + "\n", "")
        return subprocess.CompletedProcess(["git", *args], 2, "", "error: No such remote 'origin'\n")


class StepRecorder:
    """Stand-in for ``run_install_step``."""

    def __init__(self) -> None:
        self.steps: list[tuple[str, ...]] = []
        self.fail_labels: set[str] = set()
        self.on_last = None

    def __call__(self, step, *, use_sudo: bool) -> dict:
        self.steps.append(step.cmd)
        if step.label in self.fail_labels:
            return {"ok": False, "returncode": 1, "error": f"{step.label} failed (exit 1)"}
        if self.on_last is not None and step.label == "install gh":
            self.on_last()
        return {"ok": True, "returncode": 0}


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """No inherited repo/token, and no gh-manager.yml from the real cwd."""
    for var in ("GITHUB_REPO", "GITHUB_TOKEN", "GHM_LOG_LEVEL", "GHM_LOG_FILE", "GHM_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def install_steps(monkeypatch: pytest.MonkeyPatch) -> StepRecorder:
    """Never run real install commands."""
    recorder = StepRecorder()
    monkeypatch.setattr("gh_manager.core.services.gh_install.run_install_step", recorder)
    return recorder


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    fake = FakeGit()
    monkeypatch.setattr("gh_manager.core.services.gh_runner.run_git", fake)
    return fake


@pytest.fixture
def fake_gh(monkeypatch: pytest.MonkeyPatch, fake_git: FakeGit) -> FakeGh:
    """Replace every ``run_gh``/``gh_available`` lookup with one fake."""
    fake = FakeGh()
    for module in ("gh_runner", "gh_auth", "gh_ops"):
        monkeypatch.setattr(f"gh_manager.core.services.{module}.run_gh", fake)
    for module in ("gh_runner", "gh_install", "gh_ops"):
        monkeypatch.setattr(
            f"gh_manager.core.services.{module}.gh_available", lambda: fake.installed
        )
    return fake


@pytest.fixture
def config() -> ManagerConfig:
    return ManagerConfig(repo="octo/widgets")


@pytest.fixture
def token_config() -> ManagerConfig:
    return ManagerConfig(repo="octo/widgets", token="ghp_example")


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """``setup_logging`` replaces root handlers; put them back."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
