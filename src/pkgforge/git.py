"""
pkgforge.git - Repository Collaborator
======================================

A thin wrapper around the ``git`` executable. Every command runs with
``check=True``: a failing git call raises ``subprocess.CalledProcessError``
and the generator rolls the package back.

Usage Example
-------------
>>> repo = GitRepo.init(Path("/tmp/mypkg"))
>>> repo.commit("Initial commit")
>>> repo.set_remote("origin", "https://github.com/me/mypkg")
"""

from __future__ import annotations

import subprocess
from pathlib import Path


def git_config_get(key: str) -> str | None:
    """
    Read a value from the user's global git configuration.

    Returns None when git is not installed or the key is unset.
    """
    try:
        result = subprocess.run(
            ["git", "config", "--global", "--get", key],
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return None  # Git not installed

    value = result.stdout.strip()
    if result.returncode != 0 or not value:
        return None
    return value


class GitRepo:
    """A git working tree rooted at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def init(cls, path: Path) -> GitRepo:
        """Initialize an empty repository at ``path``."""
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        subprocess.run(
            ["git", "init", "--quiet", str(path)],
            check=True,
            capture_output=True,
        )
        return cls(path)

    def _run(self, *args: str) -> str:
        result = subprocess.run(
            ["git", *args],
            cwd=self.path,
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()

    def set_config(self, key: str, value: str) -> None:
        """Set a repository-local configuration value."""
        self._run("config", key, value)

    def commit(self, message: str) -> None:
        """Commit the index. Empty commits are allowed."""
        self._run("commit", "--quiet", "--allow-empty", "-m", message)

    def add(self, *paths: str) -> None:
        """Stage ``paths`` (relative to the repository root)."""
        if paths:
            self._run("add", "--", *paths)

    def current_branch(self) -> str:
        """Name of the checked-out branch."""
        return self._run("symbolic-ref", "--short", "HEAD")

    def create_branch(self, name: str) -> None:
        """Create branch ``name`` at HEAD and check it out."""
        self._run("checkout", "--quiet", "-b", name)

    def checkout(self, name: str) -> None:
        self._run("checkout", "--quiet", name)

    def set_remote(self, name: str, url: str) -> None:
        """Add remote ``name``, or repoint it if it already exists."""
        if name in self._run("remote").split():
            self._run("remote", "set-url", name, url)
        else:
            self._run("remote", "add", name, url)

    def remote_url(self, name: str) -> str:
        return self._run("remote", "get-url", name)

    def branches(self) -> list[str]:
        """Local branch names."""
        output = self._run("branch", "--format=%(refname:short)")
        return [line for line in output.splitlines() if line]
