"""
pkgforge.package_manager - Package-Manager Collaborator
=======================================================

The generator needs five things from a package manager:

    generate_skeleton(path)       create pyproject.toml and src/<pkg>/
    activate(path | None)         switch the project later calls act on
    add_dependency(name)          add a dependency to the active project
    update_lockfile()             regenerate the active project's uv.lock
    register_local_package(path)  install the new package in development mode;
                                  False when there is nowhere to install it

:class:`UvPackageManager` implements them with ``uv``. Every command runs
with ``check=True``, so a failing call raises
``subprocess.CalledProcessError`` and triggers the generator's rollback.

Project Switching
-----------------
Whatever project is active before the generator switches context must be
active again afterwards, whether generation succeeds or fails. Always go
through :func:`activated`:

>>> with activated(pm, package_dir):
...     pm.add_dependency("pytest")
"""

from __future__ import annotations

import platform
import subprocess
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

import tomlkit
from packaging.specifiers import SpecifierSet


class PackageManager(Protocol):
    """Interface the generator consumes."""

    active_project: Path | None

    def generate_skeleton(self, path: Path) -> None: ...

    def activate(self, path: Path | None) -> None: ...

    def add_dependency(self, name: str) -> None: ...

    def update_lockfile(self) -> None: ...

    def register_local_package(self, path: Path) -> bool: ...


@contextmanager
def activated(pm: PackageManager, path: Path | None) -> Iterator[PackageManager]:
    """Activate ``path`` for the duration of the block, then restore."""
    previous = pm.active_project
    pm.activate(path)
    try:
        yield pm
    finally:
        pm.activate(previous)


class UvPackageManager:
    """
    Package manager backed by the ``uv`` executable.

    Parameters
    ----------
    project : Path | None
        Initially active project. None means uv's own project discovery
        from the current directory.

    executable : str
        Name or path of the uv binary.

    python : str | None
        Interpreter that packages are installed into when no project is
        active. Defaults to the running interpreter, but only when it
        belongs to a virtual environment.
    """

    def __init__(
        self,
        project: Path | None = None,
        executable: str = "uv",
        python: str | None = None,
    ) -> None:
        self.active_project = project
        self.executable = executable
        self.python = python

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            [self.executable, *args],
            check=True,
            capture_output=True,
            text=True,
        )

    def _project_args(self) -> list[str]:
        if self.active_project is None:
            return []
        return ["--project", str(self.active_project)]

    def generate_skeleton(self, path: Path) -> None:
        self._run(
            "init",
            "--lib",
            "--vcs", "none",
            "--no-readme",
            "--no-pin-python",
            "--no-workspace",
            "--name", Path(path).name,
            str(path),
        )

    def activate(self, path: Path | None) -> None:
        self.active_project = Path(path) if path is not None else None

    def add_dependency(self, name: str) -> None:
        self._run("add", "--no-sync", *self._project_args(), name)

    def update_lockfile(self) -> None:
        self._run("lock", *self._project_args())

    def install_target(self, path: Path) -> str | None:
        """
        Interpreter to install ``path`` into when no project is active.

        Returns None outside a virtual environment, or when the running
        interpreter does not satisfy the package's ``requires-python``.
        """
        if self.python is not None:
            return self.python
        if sys.prefix == sys.base_prefix:
            return None

        doc = tomlkit.parse((Path(path) / "pyproject.toml").read_text(encoding="utf-8"))
        requires = doc.get("project", {}).get("requires-python")
        if requires and not SpecifierSet(str(requires)).contains(
            platform.python_version(), prereleases=True
        ):
            return None
        return sys.executable

    def register_local_package(self, path: Path) -> bool:
        """
        Install ``path`` in development mode.

        With an active project the package becomes an editable dependency
        of it. Otherwise it is installed into :meth:`install_target`;
        returns False, without running anything, when there is none.
        """
        if self.active_project is not None:
            self._run("add", "--no-sync", *self._project_args(), "--editable", str(path))
            return True

        python = self.install_target(path)
        if python is None:
            return False
        self._run("pip", "install", "--python", python, "--editable", str(path))
        return True
