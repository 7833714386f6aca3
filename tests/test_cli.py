"""
Tests for pkgforge.cli
======================

This module contains tests for the command-line interface.
Tests use Typer's CliRunner for testing CLI commands; uv is replaced by
the in-memory package manager double.

Test Organization
-----------------
- TestVersionCommand: Tests for --version flag
- TestListingCommands: Tests for plugins, licenses and license
- TestNewCommand: Tests for the new command
- TestOptionParsing: Tests for --plugin and --git-config parsing
- TestHelpOutput: Tests for help text
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from pkgforge import __version__
from pkgforge.cli import app, parse_git_config, resolve_plugins
from pkgforge.errors import ConfigurationError, PromptAborted
from pkgforge.plugins import Codecov, GitHubPages, TravisCI


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_uv(monkeypatch: pytest.MonkeyPatch, package_manager):
    """Make the generator use the package manager double."""
    monkeypatch.setattr("pkgforge.generator.UvPackageManager", lambda: package_manager)
    return package_manager


def output(result) -> str:
    """Command output with rich line wrapping undone."""
    return " ".join(result.stdout.split())


def new_args(temp_dir: Path, *extra: str) -> list[str]:
    return ["new", "mypkg", "--user", "me", "--dir", str(temp_dir), "--no-git", "--quiet", *extra]


# =============================================================================
# Version Command Tests
# =============================================================================

class TestVersionCommand:
    """Tests for the --version flag."""

    def test_version_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_short_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "pkgforge" in result.stdout


# =============================================================================
# Listing Command Tests
# =============================================================================

class TestListingCommands:
    """Tests for the informational commands."""

    def test_plugins(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["plugins"])
        assert result.exit_code == 0
        assert "TravisCI" in result.stdout
        assert "Codecov" in result.stdout

    def test_licenses(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["licenses"])
        assert result.exit_code == 0
        for identifier in ("MIT", "ISC", "BSD-2-Clause", "BSD-3-Clause"):
            assert identifier in result.stdout

    def test_license_text(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["license", "mit"])
        assert result.exit_code == 0
        assert "Permission is hereby granted" in result.stdout

    def test_unknown_license(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["license", "GPL"])
        assert result.exit_code == 1
        assert "not available" in output(result)


# =============================================================================
# New Command Tests
# =============================================================================

class TestNewCommand:
    """Tests for the new command."""

    def test_creates_package(self, runner: CliRunner, temp_dir: Path, fake_uv) -> None:
        result = runner.invoke(app, new_args(temp_dir))

        assert result.exit_code == 0, result.stdout
        assert (temp_dir / "mypkg" / "pyproject.toml").exists()
        assert (temp_dir / "mypkg" / "README.md").exists()
        assert fake_uv.registered == [temp_dir / "mypkg"]

    def test_plugins_by_name_and_code(self, runner: CliRunner, temp_dir: Path, fake_uv) -> None:
        result = runner.invoke(app, new_args(temp_dir, "-p", "travis", "-p", "4"))

        assert result.exit_code == 0, result.stdout
        pkg = temp_dir / "mypkg"
        assert (pkg / ".travis.yml").exists()
        assert "codecov.io" in (pkg / "README.md").read_text()

    def test_template_options(self, runner: CliRunner, temp_dir: Path, fake_uv) -> None:
        result = runner.invoke(
            app,
            new_args(temp_dir, "--license", "ISC", "--authors", "Jane", "--min-version", "3.12", "--no-develop"),
        )

        assert result.exit_code == 0, result.stdout
        pkg = temp_dir / "mypkg"
        assert "Jane" in (pkg / "LICENSE").read_text().splitlines()[0]
        assert (pkg / ".python-version").read_text() == "3.12\n"
        assert fake_uv.registered == []

    def test_unknown_plugin(self, runner: CliRunner, temp_dir: Path, fake_uv) -> None:
        result = runner.invoke(app, new_args(temp_dir, "-p", "jenkins"))
        assert result.exit_code == 1
        assert "Unknown plugin" in output(result)
        assert not (temp_dir / "mypkg").exists()

    def test_invalid_license(self, runner: CliRunner, temp_dir: Path, fake_uv) -> None:
        result = runner.invoke(app, new_args(temp_dir, "--license", "WTFPL"))
        assert result.exit_code == 1
        assert "is not available" in output(result)

    def test_existing_directory(self, runner: CliRunner, temp_dir: Path, fake_uv) -> None:
        (temp_dir / "mypkg").mkdir()
        result = runner.invoke(app, new_args(temp_dir))
        assert result.exit_code == 1
        assert "already exists" in output(result)

    def test_interactive_fast(
        self, runner: CliRunner, temp_dir: Path, fake_uv, prompter, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        scripted = prompter(["1 d", "", ""])
        monkeypatch.setattr("pkgforge.interactive.QuestionaryPrompter", lambda: scripted)

        result = runner.invoke(app, new_args(temp_dir, "--interactive", "--fast"))

        assert result.exit_code == 0, result.stdout
        assert scripted.asked[0].startswith("Select plugins")
        assert (temp_dir / "mypkg" / ".travis.yml").exists()

    def test_interactive_abort(
        self, runner: CliRunner, temp_dir: Path, fake_uv, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        class AbortingPrompter:
            def echo(self, message: str) -> None:
                pass

            def text(self, message: str, default: str = "") -> str:
                raise PromptAborted("Prompt cancelled")

        monkeypatch.setattr("pkgforge.interactive.QuestionaryPrompter", AbortingPrompter)

        result = runner.invoke(app, new_args(temp_dir, "-i", "--fast"))

        assert result.exit_code == 1
        assert not (temp_dir / "mypkg").exists()


# =============================================================================
# Option Parsing Tests
# =============================================================================

class TestOptionParsing:
    """Tests for the option parsing helpers."""

    def test_parse_git_config(self) -> None:
        assert parse_git_config(["user.name=A B", "commit.gpgsign=false"]) == {
            "user.name": "A B",
            "commit.gpgsign": "false",
        }

    def test_parse_git_config_invalid(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_git_config(["user.name"])

    def test_resolve_plugins(self) -> None:
        plugins = resolve_plugins(["Travis", "4", "pages"])
        assert [type(p) for p in plugins] == [TravisCI, Codecov, GitHubPages]


# =============================================================================
# Help Output Tests
# =============================================================================

class TestHelpOutput:
    """Tests for help text."""

    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "new" in result.stdout
        assert "plugins" in result.stdout

    def test_new_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["new", "--help"])
        assert result.exit_code == 0
        assert "--plugin" in result.stdout
