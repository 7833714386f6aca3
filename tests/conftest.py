"""
pytest configuration and shared fixtures for pkgforge tests.

This module provides fixtures and configuration used across all test modules.
Fixtures defined here are automatically available to all tests.

Fixtures
--------
isolated_git_config : None
    Points git at an empty global config for every test, so defaults read
    from git config are deterministic.

package_manager : FakePackageManager
    In-memory stand-in for uv that writes a minimal project skeleton.

prompter : type[ScriptedPrompter]
    Prompter that replays canned answers.

git_identity : dict[str, str]
    Repository git config with a commit identity.
"""

import shutil
from pathlib import Path

import pytest
import tomlkit


# =============================================================================
# Test Doubles
# =============================================================================

class FakePackageManager:
    """
    Package manager double.

    Writes just enough of a project for the generator to work on and
    records every call. Set ``fail_on`` to a method name to make that
    method raise ``RuntimeError``, and ``installable`` to False to have
    nowhere to register the package.
    """

    def __init__(self, fail_on: str | None = None, installable: bool = True) -> None:
        self.active_project: Path | None = None
        self.fail_on = fail_on
        self.installable = installable
        self.calls: list[tuple] = []
        self.registered: list[Path] = []

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if self.fail_on == name:
            raise RuntimeError(f"{name} failed")

    def generate_skeleton(self, path: Path) -> None:
        path.mkdir(parents=True)
        self._record("generate_skeleton", path)
        package = path.name.replace("-", "_")
        (path / "src" / package).mkdir(parents=True)
        (path / "src" / package / "__init__.py").write_text("")

        doc = tomlkit.document()
        project = tomlkit.table()
        project.add("name", path.name)
        project.add("version", "0.1.0")
        project.add("dependencies", tomlkit.array())
        doc.add("project", project)
        (path / "pyproject.toml").write_text(tomlkit.dumps(doc))

    def activate(self, path: Path | None) -> None:
        self.active_project = path
        self._record("activate", path)

    def add_dependency(self, name: str) -> None:
        self._record("add_dependency", name, self.active_project)
        pyproject = self.active_project / "pyproject.toml"
        doc = tomlkit.parse(pyproject.read_text())
        doc["project"]["dependencies"].append(f"{name}>=8.0")
        pyproject.write_text(tomlkit.dumps(doc))

    def update_lockfile(self) -> None:
        self._record("update_lockfile", self.active_project)
        (self.active_project / "uv.lock").write_text("version = 1\n")

    def register_local_package(self, path: Path) -> bool:
        self._record("register_local_package", path)
        if self.installable:
            self.registered.append(path)
        return self.installable


class ScriptedPrompter:
    """
    Prompter double replaying ``answers`` in order.

    An empty string accepts the question's default, like pressing enter.
    Every question asked is recorded in ``asked``.
    """

    def __init__(self, answers: list) -> None:
        self.answers = list(answers)
        self.asked: list[str] = []
        self.echoed: list[str] = []

    def _next(self, message: str):
        self.asked.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected question: {message}")
        return self.answers.pop(0)

    def text(self, message: str, default: str = "") -> str:
        answer = self._next(message)
        return default if answer == "" else answer

    def select(self, message: str, choices: list[str], default: str | None = None) -> str:
        answer = self._next(message)
        if answer == "":
            return default if default is not None else choices[0]
        assert answer in choices, f"{answer!r} not in {choices}"
        return answer

    def confirm(self, message: str, default: bool = True) -> bool:
        answer = self._next(message)
        return default if answer == "" else bool(answer)

    def echo(self, message: str) -> None:
        self.echoed.append(message)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_git_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test against an empty global git config."""
    config = tmp_path_factory.mktemp("gitconfig") / "config"
    config.write_text("")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")


@pytest.fixture
def package_manager() -> FakePackageManager:
    return FakePackageManager()


@pytest.fixture
def failing_package_manager():
    """Factory for package managers failing at a given step."""
    return FakePackageManager


@pytest.fixture
def prompter():
    return ScriptedPrompter


@pytest.fixture
def git_identity() -> dict[str, str]:
    return {
        "user.name": "Test Author",
        "user.email": "test@example.com",
        "commit.gpgsign": "false",
    }


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Directory packages are generated into."""
    packages = tmp_path / "packages"
    packages.mkdir()
    return packages


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """
    Configure pytest with custom markers.

    This function is called by pytest during startup to register
    custom markers used in our test suite.
    """
    config.addinivalue_line(
        "markers", "integration: marks tests requiring external tools (git)"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests when git is not installed."""
    if shutil.which("git") is not None:
        return
    skip_git = pytest.mark.skip(reason="git is not installed")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_git)
