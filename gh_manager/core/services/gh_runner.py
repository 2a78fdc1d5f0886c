"""
Low-level runners for the ``gh`` and ``git`` binaries.

Every service goes through these functions, so tests only need to
fake this one seam.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# Timeout for short, captured probes (version, auth status, remotes)
PROBE_TIMEOUT = 15


def run_gh(
    *args: str,
    cwd: Path | None = None,
    capture: bool = True,
    stdin: str | None = None,
    timeout: int | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a gh CLI command and return the result.

    With ``capture=False`` gh writes straight to the terminal (and can
    prompt), so ``stdout``/``stderr`` on the result are ``None``.
    """
    logger.debug("gh %s", " ".join(args))
    return subprocess.run(
        ["gh", *args],
        cwd=str(cwd) if cwd else None,
        capture_output=capture,
        text=True,
        timeout=timeout,
        input=stdin,
    )


def run_git(
    *args: str,
    cwd: Path | None = None,
    timeout: int = PROBE_TIMEOUT,
) -> subprocess.CompletedProcess[str]:
    """Run a git command and return the result."""
    logger.debug("git %s", " ".join(args))
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        text=True,
        timeout=timeout,
    )


def gh_available() -> bool:
    """True when the gh binary is on PATH."""
    return shutil.which("gh") is not None


def gh_version(cwd: Path | None = None) -> str | None:
    """First line of ``gh --version``, or None if it can't be read."""
    try:
        r = run_gh("--version", cwd=cwd, timeout=PROBE_TIMEOUT)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("gh --version failed: %s", e)
        return None
    if r.returncode != 0 or not (r.stdout or "").strip():
        return None
    return r.stdout.strip().splitlines()[0]


def remote_origin_url(cwd: Path | None = None) -> str | None:
    """The ``origin`` remote URL of the repo at ``cwd`` (None if unset)."""
    try:
        r = run_git("remote", "get-url", "origin", cwd=cwd)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("git remote get-url origin failed: %s", e)
        return None
    url = (r.stdout or "").strip()
    return url if r.returncode == 0 and url else None
