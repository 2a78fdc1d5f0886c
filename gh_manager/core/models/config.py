"""
Manager configuration — the explicit settings every service receives.

Built by ``gh_manager.core.config.loader.load_config`` from the optional
``gh-manager.yml`` file and the process environment.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator

DEFAULT_REPO = "Prisma-Consultoria/siscan-rpa"
DEFAULT_HOSTNAME = "github.com"


class ManagerConfig(BaseModel):
    """Settings for one gh-manager invocation."""

    repo: str = Field(default=DEFAULT_REPO, min_length=1)
    hostname: str = Field(default=DEFAULT_HOSTNAME, min_length=1)
    git_protocol: Literal["https", "ssh"] = "https"

    # Names of the environment variables that override repo / supply the token
    repo_env: str = "GITHUB_REPO"
    token_env: str = "GITHUB_TOKEN"

    # Only ever populated from the environment, never from the config file
    token: SecretStr | None = None

    @field_validator("repo")
    @classmethod
    def _strip_repo(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("repository identifier must be a non-empty string")
        return v

    @property
    def has_token(self) -> bool:
        return bool(self.token and self.token.get_secret_value())

    def resolve_repo(self, repo: str | None = None) -> str:
        """Return ``repo`` when given and non-empty, else the configured default."""
        if repo and repo.strip():
            return repo.strip()
        return self.repo
