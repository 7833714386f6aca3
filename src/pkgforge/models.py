"""
pkgforge.models - Pydantic Models for Package Templates
=======================================================

This module defines the configuration objects that describe how a new
package is scaffolded. A :class:`Template` is built once, either directly
or through :func:`pkgforge.interactive.interactive_template`, and is
read-only from then on; :func:`pkgforge.generator.generate` consumes it.

Architecture Notes
------------------
The models are organized in a hierarchy:

    Template (frozen)
    ├── user, host, license, authors, dir
    ├── min_version, ssh, manifest
    └── plugins: {plugin kind -> plugin instance}
            ├── Documenter / GitHubPages
            ├── TravisCI / AppVeyor / GitLabCI
            └── Codecov / Coveralls

    Badge (frozen)
    ├── label
    ├── image
    └── link

Plugins are keyed by their class. A Template holds at most one plugin of
each kind; when several instances of one kind are supplied the last one
wins and takes the slot of the first.

Usage Example
-------------
>>> from pkgforge.models import Template
>>> from pkgforge.plugins import Codecov, TravisCI
>>> t = Template(user="me", plugins=[TravisCI(), Codecov()])
>>> t.has_plugin(Codecov)
True
"""

from __future__ import annotations

import platform
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pkgforge.errors import ConfigurationError
from pkgforge.git import git_config_get
from pkgforge.licenses import resolve_license
from pkgforge.plugins.base import Badge, Plugin


__all__ = ["DEFAULT_HOST", "DEFAULT_LICENSE", "Badge", "Template", "default_min_version"]


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_HOST = "github.com"
DEFAULT_LICENSE = "MIT"


def default_min_version() -> str:
    """Version of the running interpreter."""
    return platform.python_version()


# =============================================================================
# Template
# =============================================================================

class Template(BaseModel):
    """
    Reusable, immutable configuration for scaffolding packages.

    Attributes
    ----------
    user : str
        Account on the code hosting service. Defaults to the
        ``github.user`` git config value; required if that is unset.

    host : str
        Code hosting service, used for remote URLs and badge links.

    license : str
        License identifier, or ``""`` for no LICENSE file.

    authors : str
        Copyright holder(s). Defaults to the ``user.name`` git config value.

    dir : Path
        Directory in which new packages are created. Always absolute.

    min_version : str
        Minimum supported Python version (PEP 440).

    ssh : bool
        Use an SSH remote URL instead of HTTPS.

    manifest : bool
        Track ``uv.lock`` in version control instead of ignoring it.

    plugins : dict[type[Plugin], Plugin]
        Enabled plugins keyed by kind, in insertion order. Accepts a list
        of plugin instances at construction.

    Raises
    ------
    ConfigurationError
        On an unknown license, an unparsable version, or a missing user.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    user: str = ""
    host: str = DEFAULT_HOST
    license: str = DEFAULT_LICENSE
    authors: str = Field(default_factory=lambda: git_config_get("user.name") or "")
    dir: Path = Field(default_factory=Path.cwd)
    min_version: str = Field(default_factory=default_min_version)
    ssh: bool = False
    manifest: bool = False
    plugins: dict[type[Plugin], Plugin] = Field(default_factory=dict)

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @model_validator(mode="before")
    @classmethod
    def fill_user(cls, data: Any) -> Any:
        """Fall back to the ``github.user`` git config value."""
        if isinstance(data, dict) and not data.get("user"):
            user = git_config_get("github.user")
            if user is None:
                raise ConfigurationError(
                    "No user given and git config option github.user is not set"
                )
            data = {**data, "user": user}
        return data

    @field_validator("license")
    @classmethod
    def validate_license(cls, v: str) -> str:
        return resolve_license(v)

    @field_validator("dir")
    @classmethod
    def expand_dir(cls, v: Path) -> Path:
        return Path(v).expanduser().absolute()

    @field_validator("min_version")
    @classmethod
    def validate_min_version(cls, v: str) -> str:
        try:
            return str(Version(str(v)))
        except InvalidVersion:
            raise ConfigurationError(f"Invalid minimum version '{v}'") from None

    @field_validator("plugins", mode="before")
    @classmethod
    def fold_plugins(cls, v: Any) -> dict[type[Plugin], Plugin]:
        """Key plugins by kind; a later plugin of the same kind wins."""
        if isinstance(v, dict):
            v = v.values()
        folded: dict[type[Plugin], Plugin] = {}
        for plugin in v if isinstance(v, Iterable) else [v]:
            if not isinstance(plugin, Plugin):
                raise ConfigurationError(f"{plugin!r} is not a plugin")
            folded[type(plugin)] = plugin
        return folded

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def has_plugin(self, kind: type[Plugin]) -> bool:
        return kind in self.plugins

    def get_plugin(self, kind: type[Plugin]) -> Plugin | None:
        return self.plugins.get(kind)

    def remote_url(self, package_name: str) -> str:
        """URL of the package's repository on ``host``."""
        if self.ssh:
            return f"git@{self.host}:{self.user}/{package_name}.git"
        return f"https://{self.host}/{self.user}/{package_name}"

    def describe(self) -> str:
        """Multi-line human-readable summary."""
        lines = [
            "Template:",
            f"  → User: {self.user}",
            f"  → Host: {self.host}",
            f"  → License: {self.license or 'None'}",
            f"  → Authors: {self.authors or 'None'}",
            f"  → Package directory: {self.dir}",
            f"  → Minimum Python version: {self.min_version}",
            f"  → SSH remote: {'Yes' if self.ssh else 'No'}",
            f"  → Commit lockfile: {'Yes' if self.manifest else 'No'}",
        ]
        if self.plugins:
            lines.append("  → Plugins:")
            lines.extend(f"    • {p.describe()}" for p in self.plugins.values())
        else:
            lines.append("  → Plugins: None")
        return "\n".join(lines)
