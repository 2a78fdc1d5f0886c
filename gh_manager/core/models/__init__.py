"""
Domain models for gh-manager.
"""

from gh_manager.core.models.config import DEFAULT_HOSTNAME, DEFAULT_REPO, ManagerConfig

__all__ = ["DEFAULT_HOSTNAME", "DEFAULT_REPO", "ManagerConfig"]
