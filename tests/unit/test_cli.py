"""Tests for the command-line interface and command implementations."""

from __future__ import annotations

import io
import json
import os
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import httpx
import pytest
from click.testing import CliRunner
from rich.console import Console

from release_mobile.cli import cli, main
from release_mobile.cli.commands import (
    ReleaseOptions,
    run_jira_changelog,
    run_notify_slack,
    run_notify_slack_error,
    run_release,
)
from release_mobile.config.loader import load_config
from release_mobile.core.version import Version

if TYPE_CHECKING:
    from pathlib import Path

    from release_mobile.config.models import ReleaseMobileConfig

SLACK_ENV = {"SLACK_WEBHOOK_SHOP": "https://hooks.slack.test/shop"}
JIRA_ENV = {"JIRA_WEBHOOK_URL": "https://jira.test/hook", "JIRA_WEBHOOK_TOKEN": "secret"}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove integration settings inherited from the real environment."""
    for key in list(os.environ):
        if key.startswith(("SLACK_WEBHOOK_", "JIRA_WEBHOOK_", "CLOUD_DISTRIBUTION")):
            monkeypatch.delenv(key)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def in_project(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run commands from inside the sample project."""
    monkeypatch.chdir(project_dir)
    return project_dir


def _consoles() -> tuple[Console, Console, io.StringIO, io.StringIO]:
    out, err = io.StringIO(), io.StringIO()
    return Console(file=out, width=200), Console(file=err, width=200), out, err


def _recording_client(requests: list[httpx.Request], status: int = 200) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, text="ok")

    return httpx.Client(transport=httpx.MockTransport(handler))


class TestCliBasics:
    """Tests for the command group."""

    def test_version(self, runner: CliRunner):
        """--version prints the package version."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "release-mobile" in result.output

    def test_lists_commands(self, runner: CliRunner):
        """Every command is registered."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in (
            "release",
            "changelog",
            "prod_changelog",
            "notify_slack",
            "notify_slack_error",
            "jira_changelog",
            "invalidate",
        ):
            assert name in result.output

    def test_unknown_command_exits_with_usage(self, in_project: Path):
        """main() maps usage errors to exit code 64."""
        with pytest.raises(SystemExit) as exc_info:
            main(["does-not-exist"])

        assert exc_info.value.code == 64

    def test_missing_required_option_exits_with_usage(self, in_project: Path):
        """A missing --version is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["prod_changelog"])

        assert exc_info.value.code == 64


class TestChangelogCommand:
    """Tests for the changelog command."""

    def test_prints_section(self, runner: CliRunner, in_project: Path):
        """The header and entries of the version are printed as written."""
        result = runner.invoke(cli, ["changelog", "1.2.2+40"])

        assert result.exit_code == 0
        assert "Changelog for version 1.2.2+40:" in result.output
        assert "# 1.2.2+40 [20.02.2024 09:30]" in result.output
        assert "- [improvement] Faster image loading" in result.output
        assert "Wrong currency symbol" not in result.output

    def test_verbose_flag(self, runner: CliRunner, in_project: Path):
        """The hidden --verbose flag is accepted."""
        result = runner.invoke(cli, ["--verbose", "changelog", "1.2.2+40", "--ci"])

        assert result.exit_code == 0

    def test_unknown_version(self, runner: CliRunner, in_project: Path):
        """An unknown version exits with NO_INPUT."""
        result = runner.invoke(cli, ["changelog", "9.9.9"])

        assert result.exit_code == 66
        assert "No changelog found for version 9.9.9" in result.output

    def test_missing_changelog(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """No changelog file exits with NO_INPUT."""
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["changelog", "1.0.0"])

        assert result.exit_code == 66
        assert "No CHANGELOG.md file found." in result.output


class TestProdChangelogCommand:
    """Tests for the prod_changelog command."""

    def test_prints_cleaned_changes(self, runner: CliRunner, in_project: Path):
        """Changes since the production version are printed without markers."""
        result = runner.invoke(cli, ["prod_changelog", "--version", "1.2.1"])

        assert result.exit_code == 0
        assert "-  Add login screen" in result.output
        assert "-  Crash on start" in result.output
        assert "-  Faster image loading" in result.output
        assert "[1201]" not in result.output
        assert "flaky" not in result.output
        assert "Wrong currency symbol" not in result.output

    def test_no_new_changes(self, runner: CliRunner, in_project: Path):
        """Asking for the newest version exits with IO_ERROR."""
        result = runner.invoke(cli, ["prod_changelog", "--ci", "--version", "1.2.3"])

        assert result.exit_code == 74
        assert "There are no new changes for version 1.2.3." in result.output

    def test_empty_changelog(self, runner: CliRunner, in_project: Path):
        """An empty changelog exits with NO_INPUT."""
        (in_project / "CHANGELOG.md").write_text("")

        result = runner.invoke(cli, ["prod_changelog", "--version", "1.2.3"])

        assert result.exit_code == 66
        assert "CHANGELOG.md is empty." in result.output

    def test_missing_version_option(self, runner: CliRunner, in_project: Path):
        """--version is required."""
        result = runner.invoke(cli, ["prod_changelog"])

        assert result.exit_code != 0
        assert "--version" in result.output


class TestReleaseCommand:
    """Tests for the release command."""

    def test_release(self, runner: CliRunner, in_project: Path, mock_repo: MagicMock):
        """Version, changelog, commit, tag and push happen in order."""
        with patch("release_mobile.cli.commands.release.GitRepository", return_value=mock_repo):
            result = runner.invoke(cli, ["release", "--tag-prefix", "app"])

        assert result.exit_code == 0, result.output
        assert "Released version 1.2.4+42" in result.output
        assert "version: 1.2.4+42" in (in_project / "pubspec.yaml").read_text()

        changelog = (in_project / "CHANGELOG.md").read_text().splitlines()
        assert changelog[0].startswith("# 1.2.4+42 [")
        assert changelog[2] == "- [dev-improvement] Developer changes."

        mock_repo.checkout.assert_called_once_with("develop")
        mock_repo.commit_all.assert_called_once_with("Pre-release updates")
        mock_repo.create_tag.assert_called_once_with("app_1.2.4")
        mock_repo.push_release.assert_called_once_with(
            "app_1.2.4", ci=False, remote="origin", ci_remote="originSSH"
        )

    def test_release_with_overrides(
        self, runner: CliRunner, in_project: Path, mock_repo: MagicMock
    ):
        """Explicit version, build number and branch are used."""
        with patch("release_mobile.cli.commands.release.GitRepository", return_value=mock_repo):
            result = runner.invoke(
                cli,
                ["release", "--ci", "--branch", "main", "--set-version", "2.0.0", "--set-bn", "100"],
            )

        assert result.exit_code == 0, result.output
        assert "version: 2.0.0+100" in (in_project / "pubspec.yaml").read_text()
        mock_repo.checkout.assert_called_once_with("main")
        mock_repo.create_tag.assert_called_once_with("2.0.0")
        assert mock_repo.push_release.call_args.kwargs["ci"] is True

    def test_invalid_version_aborts_before_writing(
        self, runner: CliRunner, in_project: Path, mock_repo: MagicMock
    ):
        """Nothing is written or committed for an invalid explicit version."""
        original = (in_project / "pubspec.yaml").read_text()

        with patch("release_mobile.cli.commands.release.GitRepository", return_value=mock_repo):
            result = runner.invoke(cli, ["release", "--set-version", "2.0"])

        assert result.exit_code == 70
        assert (in_project / "pubspec.yaml").read_text() == original
        mock_repo.commit_all.assert_not_called()

    def test_invalid_build_number_aborts_before_writing(
        self, runner: CliRunner, in_project: Path, mock_repo: MagicMock
    ):
        """Nothing is written or committed for a non-numeric build number."""
        original = (in_project / "pubspec.yaml").read_text()

        with patch("release_mobile.cli.commands.release.GitRepository", return_value=mock_repo):
            result = runner.invoke(cli, ["release", "--set-bn", "abc"])

        assert result.exit_code == 70
        assert "Invalid build number: abc" in result.output
        assert (in_project / "pubspec.yaml").read_text() == original
        mock_repo.commit_all.assert_not_called()

    def test_missing_manifest(
        self, runner: CliRunner, in_project: Path, mock_repo: MagicMock
    ):
        """No pubspec.yaml exits with NO_INPUT."""
        (in_project / "pubspec.yaml").unlink()

        with patch("release_mobile.cli.commands.release.GitRepository", return_value=mock_repo):
            result = runner.invoke(cli, ["release"])

        assert result.exit_code == 66
        assert "No pubspec.yaml file found." in result.output

    def test_unexpected_error(self, config: ReleaseMobileConfig, mock_repo: MagicMock):
        """Errors outside the known kinds exit with SOFTWARE."""
        mock_repo.checkout.side_effect = RuntimeError("boom")
        console, err_console, _, err = _consoles()

        with pytest.raises(SystemExit) as exc_info:
            run_release(ReleaseOptions(), config, console, err_console, repo=mock_repo)

        assert exc_info.value.code == 70
        assert "boom" in err.getvalue()

    def test_run_release_returns_version(
        self, config: ReleaseMobileConfig, mock_repo: MagicMock
    ):
        """The released version is returned."""
        console, err_console, _, _ = _consoles()

        version = run_release(ReleaseOptions(), config, console, err_console, repo=mock_repo)

        assert version == Version(1, 2, 4, 42)


class TestNotifySlack:
    """Tests for the Slack notification commands."""

    def test_sends_current_changelog(self, project_dir: Path):
        """The newest section is sent when it belongs to the current version."""
        config = load_config(project_dir, environ=SLACK_ENV)
        console, err_console, _, _ = _consoles()
        requests: list[httpx.Request] = []

        with _recording_client(requests) as client:
            text = run_notify_slack("shop", None, False, config, console, err_console, client)

        assert text == (
            "# 1.2.3+41 [01.03.2024 10:00]\n"
            "\n"
            "- [feature] Add login screen [1201]\n"
            "- [dev-fix] Fix flaky widget test\n"
            "- [fix] Crash on start [1202]\n"
        )
        assert str(requests[0].url) == "https://hooks.slack.test/shop"
        assert json.loads(requests[0].content) == {"text": text}

    def test_custom_message_only(self, project_dir: Path):
        """A custom message is sent alone."""
        config = load_config(project_dir, environ=SLACK_ENV)
        console, err_console, _, _ = _consoles()
        requests: list[httpx.Request] = []

        with _recording_client(requests) as client:
            text = run_notify_slack("SHOP", "Build is up", False, config, console, err_console, client)

        assert text == "Build is up"
        assert json.loads(requests[0].content) == {"text": "Build is up"}

    def test_custom_message_with_changelog(self, project_dir: Path):
        """The custom message follows the changelog."""
        config = load_config(project_dir, environ=SLACK_ENV)
        console, err_console, _, _ = _consoles()

        with _recording_client([]) as client:
            text = run_notify_slack("shop", "Ready", True, config, console, err_console, client)

        assert text.startswith("# 1.2.3+41 [")
        assert text.endswith("- [fix] Crash on start [1202]\n\nReady")

    def test_newest_section_is_another_version(self, project_dir: Path):
        """A changelog not yet updated for the manifest version fails."""
        (project_dir / "pubspec.yaml").write_text("version: 1.2.4+42\n")
        config = load_config(project_dir, environ=SLACK_ENV)
        console, err_console, _, err = _consoles()
        requests: list[httpx.Request] = []

        with _recording_client(requests) as client:
            with pytest.raises(SystemExit) as exc_info:
                run_notify_slack("shop", None, False, config, console, err_console, client)

        assert exc_info.value.code == 74
        assert requests == []
        assert "1.2.4" in err.getvalue()

    def test_unknown_app(self, project_dir: Path):
        """An app without a webhook fails without sending anything."""
        config = load_config(project_dir, environ=SLACK_ENV)
        console, err_console, _, err = _consoles()

        with pytest.raises(SystemExit) as exc_info:
            run_notify_slack("wallet", None, False, config, console, err_console)

        assert exc_info.value.code == 70
        assert "Webhook not found for: wallet" in err.getvalue()

    def test_no_webhooks_via_cli(self, runner: CliRunner, in_project: Path):
        """The CLI reports missing webhook configuration."""
        result = runner.invoke(cli, ["notify_slack", "--appName", "shop"])

        assert result.exit_code == 70
        assert "SLACK_WEBHOOK_APPNAME" in result.output

    def test_cli_passes_message_flag(
        self, runner: CliRunner, in_project: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """--messageWithChangelog true sends the message together with the changelog."""
        monkeypatch.setenv("SLACK_WEBHOOK_SHOP", "https://hooks.slack.test/shop")

        with patch("release_mobile.cli.commands.notify.send_slack_message") as mock_send:
            result = runner.invoke(
                cli,
                ["notify_slack", "--appName", "shop", "--message", "Hi", "--messageWithChangelog", "true"],
            )

        assert result.exit_code == 0, result.output
        url, text = mock_send.call_args[0]
        assert url == "https://hooks.slack.test/shop"
        assert text.endswith("\nHi")

    def test_error_notification(self, project_dir: Path):
        """The failure message names the current version and the app."""
        config = load_config(project_dir, environ=SLACK_ENV)
        console, err_console, _, _ = _consoles()
        requests: list[httpx.Request] = []

        with _recording_client(requests) as client:
            text = run_notify_slack_error("shop", config, console, err_console, client)

        assert "version: 1.2.3 for project: shop" in text
        assert json.loads(requests[0].content) == {"text": text}


class TestJiraChangelog:
    """Tests for the jira_changelog command."""

    def test_sends_section_with_issues(self, project_dir: Path):
        """The section and its issue numbers are posted with the token."""
        config = load_config(project_dir, environ=JIRA_ENV)
        console, err_console, out, _ = _consoles()
        requests: list[httpx.Request] = []

        with _recording_client(requests, status=200) as client:
            status = run_jira_changelog("1.2.3+41", config, console, err_console, client)

        assert status == 200
        assert "Response status: 200" in out.getvalue()
        (request,) = requests
        assert request.headers["X-Automation-Webhook-Token"] == "secret"
        body = json.loads(request.content)
        assert body["issues"] == ["1201", "1202"]
        assert body["data"]["releaseVersion"] == "1.2.3+41"
        assert body["data"]["changelog"].startswith("# 1.2.3+41 [01.03.2024 10:00]\n- [feature]")

    def test_unknown_version(self, project_dir: Path):
        """Nothing is sent for a version without a section."""
        config = load_config(project_dir, environ=JIRA_ENV)
        console, err_console, _, _ = _consoles()
        requests: list[httpx.Request] = []

        with _recording_client(requests) as client:
            with pytest.raises(SystemExit) as exc_info:
                run_jira_changelog("9.9.9", config, console, err_console, client)

        assert exc_info.value.code == 66
        assert requests == []

    def test_not_configured(self, runner: CliRunner, in_project: Path):
        """A missing Jira webhook fails."""
        result = runner.invoke(cli, ["jira_changelog", "1.2.3+41"])

        assert result.exit_code == 70
        assert "JIRA_WEBHOOK_URL" in result.output


class TestInvalidateCommand:
    """Tests for the invalidate command."""

    def test_invalidate(self, runner: CliRunner, in_project: Path, monkeypatch: pytest.MonkeyPatch):
        """The configured distribution is invalidated."""
        monkeypatch.setenv("CLOUD_DISTRIBUTION", "E2ABC")

        with patch("subprocess.run", return_value=MagicMock(stdout="{}")) as mock_run:
            result = runner.invoke(cli, ["invalidate", "--ci"])

        assert result.exit_code == 0, result.output
        assert "Cache successfully invalidated" in result.output
        assert "E2ABC" in mock_run.call_args[0][0]

    def test_not_configured(self, runner: CliRunner, in_project: Path):
        """Without CLOUD_DISTRIBUTION the command fails."""
        result = runner.invoke(cli, ["invalidate"])

        assert result.exit_code == 70
        assert "CLOUD_DISTRIBUTION" in result.output
