"""
Platform detection — OS family and system package manager.

Read-only probes, no side effects.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil

logger = logging.getLogger(__name__)

OS_LINUX = "linux"
OS_MACOS = "macos"
OS_UNKNOWN = "unknown"

# (package manager id, binary) in priority order
_LINUX_PACKAGE_MANAGERS: tuple[tuple[str, str], ...] = (
    ("apt", "apt-get"),
    ("dnf", "dnf"),
    ("yum", "yum"),
)
_MACOS_PACKAGE_MANAGERS: tuple[tuple[str, str], ...] = (
    ("brew", "brew"),
)


def is_command_available(name: str) -> bool:
    """True when ``name`` resolves on PATH."""
    return shutil.which(name) is not None


def detect_os(system: str | None = None) -> str:
    """Map ``platform.system()`` to ``linux``, ``macos`` or ``unknown``."""
    system = system if system is not None else platform.system()
    if system.startswith("Linux"):
        return OS_LINUX
    if system.startswith("Darwin"):
        return OS_MACOS
    return OS_UNKNOWN


def detect_package_manager(os_family: str) -> str | None:
    """First available package manager for the OS family, or None.

    Linux checks apt, dnf and yum in that order; macOS checks brew.
    """
    if os_family == OS_LINUX:
        candidates = _LINUX_PACKAGE_MANAGERS
    elif os_family == OS_MACOS:
        candidates = _MACOS_PACKAGE_MANAGERS
    else:
        return None

    for pm, binary in candidates:
        if is_command_available(binary):
            logger.debug("Package manager detected: %s (%s)", pm, binary)
            return pm
    return None


def is_root() -> bool:
    """True when running as uid 0 (always False where uids don't exist)."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0
