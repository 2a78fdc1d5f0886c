"""
Tests for CLI commands — dispatch, exit codes and output.
"""

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from gh_manager.core.models.config import DEFAULT_REPO
from gh_manager.core.services import gh_install
from gh_manager.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "gh-manager" in result.output
        assert "GITHUB_TOKEN" in result.output
        assert "personal-access-tokens/new" in result.output

    @pytest.mark.parametrize("args", [["help"], ["-h"]])
    def test_help_aliases(self, runner, args):
        result = runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "auth-login" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    @pytest.mark.parametrize("command", ["deploy", "issues", "--bogus"])
    def test_invalid_subcommand(self, runner, fake_gh, command):
        result = runner.invoke(cli, [command])
        assert result.exit_code != 0
        assert "Usage:" in result.output
        assert fake_gh.calls == []

    def test_no_command_runs_bootstrap(self, runner, fake_gh):
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert fake_gh.called("repo", "view", DEFAULT_REPO)

    def test_bad_config_file(self, runner, fake_gh, tmp_path: Path):
        config = tmp_path / "gh-manager.yml"
        config.write_text("token: nope\n")
        result = runner.invoke(cli, ["--config", str(config), "repo-check"])
        assert result.exit_code == 1
        assert "tokens must not be stored" in result.output


class TestEnsureInstalledCommand:
    def test_already_installed(self, runner, fake_gh):
        result = runner.invoke(cli, ["ensure-installed"])
        assert result.exit_code == 0
        assert "already installed: gh version 2.40.1" in result.output

    def test_unsupported_os(self, runner, fake_gh, install_steps, monkeypatch):
        fake_gh.installed = False
        monkeypatch.setattr(gh_install, "detect_os", lambda: "unknown")

        result = runner.invoke(cli, ["ensure-installed"])

        assert result.exit_code == 1
        assert "Unsupported operating system" in result.output
        assert install_steps.steps == []

    def test_install_prints_next_steps(self, runner, fake_gh, install_steps, monkeypatch):
        fake_gh.installed = False
        monkeypatch.setattr(gh_install, "detect_os", lambda: "macos")
        monkeypatch.setattr(gh_install, "detect_package_manager", lambda os_family: "brew")
        install_steps.on_last = lambda: setattr(fake_gh, "installed", True)

        result = runner.invoke(cli, ["ensure-installed"])

        assert result.exit_code == 0
        assert install_steps.steps == [("brew", "install", "gh")]
        assert "Installing gh via brew" in result.output
        assert "gh installed successfully" in result.output
        assert "Next steps" in result.output

    def test_dry_run_json(self, runner, fake_gh, install_steps, monkeypatch):
        fake_gh.installed = False
        monkeypatch.setattr(gh_install, "detect_os", lambda: "linux")
        monkeypatch.setattr(gh_install, "detect_package_manager", lambda os_family: "yum")
        monkeypatch.setattr(gh_install, "is_root", lambda: True)

        result = runner.invoke(cli, ["ensure-installed", "--dry-run", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["dry_run"] is True
        assert data["plan"]["package_manager"] == "yum"
        assert data["plan"]["steps"][-1]["command"] == ["yum", "install", "-y", "gh"]
        assert install_steps.steps == []


class TestStatusCommand:
    def test_authenticated(self, runner, fake_gh):
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "gh: gh version 2.40.1" in result.output
        assert "gh authentication: ok" in result.output
        assert "remote origin: git@github.com:octo/widgets.git" in result.output
        assert "Next steps" not in result.output

    def test_not_authenticated(self, runner, fake_gh):
        fake_gh.respond("auth", "status", returncode=1, stderr="You are not logged in")
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "not authenticated" in result.output
        assert "Next steps" in result.output

    def test_not_installed(self, runner, fake_gh):
        fake_gh.installed = False
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "gh is not installed" in result.output

    def test_json(self, runner, fake_gh):
        result = runner.invoke(cli, ["status", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["authenticated"] is True
        assert data["version"].startswith("gh version")


class TestAuthLoginCommand:
    def test_invalid_mode(self, runner, fake_gh):
        result = runner.invoke(cli, ["auth-login", "sso"])
        assert result.exit_code == 1
        assert "Invalid login mode: sso" in result.output
        assert fake_gh.calls == []

    def test_token_prompt_empty(self, runner, fake_gh):
        result = runner.invoke(cli, ["auth-login", "token"], input="\n")
        assert result.exit_code == 1
        assert "No token provided" in result.output
        assert fake_gh.called("auth", "login") == []

    def test_token_prompt(self, runner, fake_gh):
        result = runner.invoke(cli, ["auth-login", "token"], input="ghp_typed\n")
        assert result.exit_code == 0
        assert fake_gh.called("auth", "login")[0].stdin == "ghp_typed"
        assert "ghp_typed" not in result.output

    def test_auto_with_env_token(self, runner, fake_gh):
        result = runner.invoke(cli, ["auth-login"], env={"GITHUB_TOKEN": "ghp_env"})
        assert result.exit_code == 0
        login = fake_gh.called("auth", "login")[0]
        assert "--with-token" in login.args
        assert login.stdin == "ghp_env"
        assert "Authentication complete" in result.output
        assert "Repository access validated" in result.output

    def test_auto_without_token_goes_web(self, runner, fake_gh):
        result = runner.invoke(cli, ["auth-login", "auto"])
        assert result.exit_code == 0
        assert fake_gh.called("auth", "login")[0].args == ("auth", "login")
        assert "GITHUB_TOKEN not set" in result.output

    def test_auto_fallback_warning_comes_before_login(self, runner, fake_gh):
        result = runner.invoke(cli, ["auth-login", "auto"])
        assert result.exit_code == 0
        out = result.output
        assert out.index("GITHUB_TOKEN not set") < out.index("Running interactive gh login")
        assert out.count("GITHUB_TOKEN not set") == 1

    def test_repo_check_failure_after_login_warns(self, runner, fake_gh):
        fake_gh.respond("repo", "view", returncode=1)
        result = runner.invoke(cli, ["auth-login", "web"], env={"GITHUB_REPO": "octo/private"})
        assert result.exit_code == 0
        assert "Failed to validate repository octo/private" in result.output

    def test_login_failure(self, runner, fake_gh):
        fake_gh.respond("auth", "login", returncode=1)
        result = runner.invoke(cli, ["auth-login", "web"])
        assert result.exit_code == 1
        assert "gh auth login failed" in result.output


class TestRepoCommands:
    def test_repo_check_default_repo(self, runner, fake_gh):
        result = runner.invoke(cli, ["repo-check"])
        assert result.exit_code == 0
        assert fake_gh.called("repo", "view", DEFAULT_REPO)

    def test_repo_check_env_repo(self, runner, fake_gh):
        result = runner.invoke(cli, ["repo-check"], env={"GITHUB_REPO": "octo/env"})
        assert result.exit_code == 0
        assert "Validating access to repository octo/env" in result.output
        assert fake_gh.called("repo", "view", "octo/env")

    def test_repo_check_failure_exit_code(self, runner, fake_gh):
        fake_gh.respond("repo", "view", returncode=4)
        result = runner.invoke(cli, ["repo-check", "octo/missing"])
        assert result.exit_code == 4

    def test_issue_list(self, runner, fake_gh):
        result = runner.invoke(cli, ["issue-list", "octo/widgets", "--state", "all", "-L", "50"])
        assert result.exit_code == 0
        assert fake_gh.called("issue", "list")[0].args == (
            "issue", "list", "--repo", "octo/widgets", "--state", "all", "--limit", "50",
        )

    def test_issue_list_bad_state(self, runner, fake_gh):
        result = runner.invoke(cli, ["issue-list", "--state", "draft"])
        assert result.exit_code == 2
        assert fake_gh.called("issue", "list") == []

    def test_milestone_list(self, runner, fake_gh):
        result = runner.invoke(cli, ["milestone-list", "octo/widgets"])
        assert result.exit_code == 0
        assert fake_gh.called("api")[0].args == ("api", "repos/octo/widgets/milestones")

    def test_install_warnings_shown_before_proxy(self, runner, fake_gh, install_steps, monkeypatch):
        fake_gh.installed = False
        monkeypatch.setattr(gh_install, "detect_os", lambda: "linux")
        monkeypatch.setattr(gh_install, "detect_package_manager", lambda os_family: "dnf")
        monkeypatch.setattr(gh_install, "is_root", lambda: True)
        install_steps.fail_labels = {"install dnf config-manager plugin"}
        install_steps.on_last = lambda: setattr(fake_gh, "installed", True)

        result = runner.invoke(cli, ["repo-check", "octo/widgets"])

        assert result.exit_code == 0
        assert "Optional step failed: install dnf config-manager plugin" in result.output
        assert fake_gh.called("repo", "view", "octo/widgets")

    def test_quiet_hides_progress_lines(self, runner, fake_gh):
        result = runner.invoke(cli, ["-q", "repo-check", "octo/widgets"])
        assert result.exit_code == 0
        assert "[gh-manager]" not in result.output
        assert fake_gh.called("repo", "view", "octo/widgets")

    def test_quiet_keeps_errors(self, runner, fake_gh):
        fake_gh.respond("repo", "view", returncode=1)
        result = runner.invoke(cli, ["--quiet", "repo-check", "octo/missing"])
        assert result.exit_code == 1
        assert "Validating access" not in result.output
        assert "gh repo view octo/missing failed" in result.output

    def test_config_file_repo(self, runner, fake_gh, tmp_path: Path):
        config = tmp_path / "gh-manager.yml"
        config.write_text(textwrap.dedent("""\
            repo: acme/from-file
        """))
        result = runner.invoke(cli, ["--config", str(config), "milestone-list"])
        assert result.exit_code == 0
        assert fake_gh.called("api", "repos/acme/from-file/milestones")


class TestBootstrapCommand:
    def test_authenticated(self, runner, fake_gh):
        result = runner.invoke(cli, ["bootstrap", "octo/widgets"])
        assert result.exit_code == 0
        assert "gh is already installed" in result.output
        assert fake_gh.called("repo", "view", "octo/widgets")

    def test_unauthenticated_skips_repo_check(self, runner, fake_gh):
        fake_gh.respond("auth", "status", returncode=1)
        result = runner.invoke(cli, ["bootstrap"])
        assert result.exit_code == 0
        assert "Skipping repository check" in result.output
        assert fake_gh.called("repo", "view") == []

    def test_install_failure(self, runner, fake_gh, monkeypatch):
        fake_gh.installed = False
        monkeypatch.setattr(gh_install, "detect_os", lambda: "unknown")
        result = runner.invoke(cli, ["bootstrap"])
        assert result.exit_code == 1
        assert "Unsupported operating system" in result.output
