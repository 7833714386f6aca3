"""
pkgforge.plugins.documenter - Documentation Plugins
===================================================

:class:`Documenter` adds a Sphinx documentation tree to the package:

    docs/
    ├── conf.py            build configuration
    ├── index.rst          landing page with the package's API
    ├── requirements.txt   documentation build dependencies
    └── _static/           copied asset files

Extra ``conf.py`` assignments can be supplied through ``options``; names
that pkgforge itself writes are reserved. Documentation can be deployed
by a CI service (``deploy``), which also decides which badges are shown.

:class:`GitHubPages` is a separate kind deploying to GitHub Pages through
Travis CI. When it is enabled the generator also creates an empty
``gh-pages`` branch.
"""

from __future__ import annotations

import ast
import shutil
from datetime import date
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import Field, field_validator

from pkgforge.errors import ConfigurationError
from pkgforge.files import gen_file
from pkgforge.naming import import_name
from pkgforge.plugins.base import Badge, Plugin
from pkgforge.substitution import render_for_template
from pkgforge.templates import TEMPLATES_DIR


if TYPE_CHECKING:
    from typing import Self

    from pkgforge.models import Template
    from pkgforge.prompts import Prompter


# conf.py names written by the plugin itself
RESERVED_OPTIONS = (
    "project",
    "author",
    "copyright",
    "extensions",
    "html_static_path",
    "html_css_files",
    "html_js_files",
    "html_context",
    "html_baseurl",
)

DOCS_IMAGE_STABLE = "https://img.shields.io/badge/docs-stable-blue.svg"
DOCS_IMAGE_DEV = "https://img.shields.io/badge/docs-dev-blue.svg"


class DeployTarget(str, Enum):
    """CI services that can publish the documentation."""

    TRAVIS = "travis"
    GITLAB = "gitlab"


def parse_options(text: str) -> dict[str, Any]:
    """
    Parse space separated ``key=value`` pairs.

    Values are Python literals (``html_theme='alabaster'``, ``numfig=True``).

    Raises
    ------
    ConfigurationError
        On a pair without ``=``, an invalid name, or a non-literal value.
    """
    options: dict[str, Any] = {}
    for pair in text.split():
        key, sep, value = pair.partition("=")
        if not sep or not key.isidentifier():
            raise ConfigurationError(f"Invalid key-value pair '{pair}'")
        try:
            options[key] = ast.literal_eval(value)
        except (ValueError, SyntaxError):
            raise ConfigurationError(
                f"Value for '{key}' is not a Python literal: {value}"
            ) from None
    return options


class Documenter(Plugin):
    """
    Sphinx documentation.

    Attributes
    ----------
    assets : list[Path]
        Files copied into ``docs/_static/``. CSS and JavaScript files are
        also registered in ``conf.py``. Must exist.

    options : dict[str, Any]
        Extra ``conf.py`` assignments. Names in ``RESERVED_OPTIONS`` are
        rejected.

    deploy : DeployTarget | None
        CI service publishing the documentation, if any.
    """

    assets: list[Path] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)
    deploy: DeployTarget | None = None

    @field_validator("assets")
    @classmethod
    def validate_assets(cls, v: list[Path]) -> list[Path]:
        assets = [Path(a).expanduser().absolute() for a in v]
        for asset in assets:
            if not asset.is_file():
                raise ConfigurationError(f"Asset file {asset} does not exist")
        return assets

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: dict[str, Any]) -> dict[str, Any]:
        for key in v:
            if key in RESERVED_OPTIONS:
                raise ConfigurationError(f"conf.py option {key} is reserved")
            if not key.isidentifier():
                raise ConfigurationError(f"conf.py option {key!r} is not a valid name")
        return v

    def ignore_entries(self) -> list[str]:
        return ["/docs/_build/"]

    def badges(self, user: str, package_name: str) -> list[Badge]:
        if self.deploy is DeployTarget.TRAVIS:
            base = f"https://{user}.github.io/{package_name}"
            return [
                Badge(label="Stable", image=DOCS_IMAGE_STABLE, link=f"{base}/stable"),
                Badge(label="Dev", image=DOCS_IMAGE_DEV, link=f"{base}/dev"),
            ]
        if self.deploy is DeployTarget.GITLAB:
            return [
                Badge(
                    label="Dev",
                    image=DOCS_IMAGE_DEV,
                    link=f"https://{user}.gitlab.io/{package_name}/dev",
                ),
            ]
        return []

    def generate(
        self,
        template: Template,
        package_dir: Path,
        package_name: str,
    ) -> list[str]:
        docs_dir = package_dir / "docs"
        static_dir = docs_dir / "_static"
        static_dir.mkdir(parents=True, exist_ok=True)

        for asset in self.assets:
            shutil.copy(asset, static_dir / asset.name)
        if not self.assets:
            (static_dir / ".gitkeep").touch()

        baseurl = ""
        if self.deploy is DeployTarget.TRAVIS:
            baseurl = f"https://{template.user}.github.io/{package_name}/"

        view = {
            "PKGNAME": package_name,
            "IMPORT_NAME": import_name(package_name),
            "AUTHORS": template.authors,
            "HOST": template.host,
            "YEAR": date.today().year,
            "CSS_FILES": [a.name for a in self.assets if a.suffix == ".css"],
            "JS_FILES": [a.name for a in self.assets if a.suffix == ".js"],
            "OPTIONS": list(self.options.items()),
            "BASEURL": baseurl,
        }
        for name in ("conf.py", "index.rst"):
            source = TEMPLATES_DIR / "docs" / f"{name}.j2"
            text = render_for_template(source.read_text(encoding="utf-8"), template, view)
            gen_file(docs_dir / name, text)
        gen_file(docs_dir / "requirements.txt", "sphinx\n")

        return ["docs/"]

    @classmethod
    def prompt_deploy(cls, prompter: Prompter) -> DeployTarget | None:
        answer = prompter.select(
            f"{cls.__name__}: Deploy documentation via",
            choices=["none", *(t.value for t in DeployTarget)],
            default="none",
        )
        return None if answer == "none" else DeployTarget(answer)

    @classmethod
    def build_interactively(cls, prompter: Prompter) -> Self:
        name = cls.__name__
        assets = prompter.text(
            f"{name}: Enter any documentation asset files (separated by spaces)",
            default="",
        ).split()
        options = parse_options(
            prompter.text(
                f"{name}: Enter any extra conf.py key-value pairs (joined by '=')",
                default="",
            )
        )
        return cls(assets=assets, options=options, deploy=cls.prompt_deploy(prompter))

    def describe(self) -> str:
        return (
            f"{type(self).__name__}: {len(self.assets)} extra asset(s), "
            f"{len(self.options)} extra option(s)"
        )


class GitHubPages(Documenter):
    """Documentation published to GitHub Pages by Travis CI."""

    deploy: DeployTarget | None = DeployTarget.TRAVIS

    @field_validator("deploy")
    @classmethod
    def validate_deploy(cls, v: DeployTarget | None) -> DeployTarget | None:
        if v is not DeployTarget.TRAVIS:
            raise ConfigurationError("GitHubPages documentation is deployed by Travis CI")
        return v

    @classmethod
    def prompt_deploy(cls, prompter: Prompter) -> DeployTarget | None:
        return DeployTarget.TRAVIS
