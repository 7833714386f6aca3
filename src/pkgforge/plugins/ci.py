"""
pkgforge.plugins.ci - Continuous Integration Plugins
====================================================

Each CI plugin writes one configuration file rendered from a bundled
template. The templates branch on the Template-derived flags
(``COVERAGE``, ``CODECOV``, ``DOCUMENTER``, ``AFTER``), so enabling a
coverage or documentation plugin changes the CI file without the CI
plugin knowing about it.

A CI plugin may itself declare coverage support through its ``coverage``
field; that is folded into the ``COVERAGE`` flag.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pkgforge.plugins.base import Badge, GenericPlugin
from pkgforge.plugins.coverage import COVERAGE_IGNORE


if TYPE_CHECKING:
    from typing import Self

    from pkgforge.prompts import Prompter


class CIPlugin(GenericPlugin):
    """Base class for CI services."""

    coverage: bool = False


class TravisCI(CIPlugin):
    """Travis CI, configured by ``.travis.yml``."""

    destination: ClassVar[str] = ".travis.yml"
    default_config: ClassVar[str | None] = "travis.yml.j2"
    badge_templates: ClassVar[tuple[Badge, ...]] = (
        Badge(
            label="Build Status",
            image="https://travis-ci.com/{{ USER }}/{{ PKGNAME }}.svg?branch=main",
            link="https://travis-ci.com/{{ USER }}/{{ PKGNAME }}",
        ),
    )


class AppVeyor(CIPlugin):
    """AppVeyor (Windows builds), configured by ``.appveyor.yml``."""

    destination: ClassVar[str] = ".appveyor.yml"
    default_config: ClassVar[str | None] = "appveyor.yml.j2"
    badge_templates: ClassVar[tuple[Badge, ...]] = (
        Badge(
            label="Build Status",
            image="https://ci.appveyor.com/api/projects/status/github/{{ USER }}/{{ PKGNAME }}?svg=true",
            link="https://ci.appveyor.com/project/{{ USER }}/{{ PKGNAME }}",
        ),
    )


class GitLabCI(CIPlugin):
    """
    GitLab CI, configured by ``.gitlab-ci.yml``.

    GitLab computes coverage itself, so coverage is on by default and adds
    a coverage badge.
    """

    destination: ClassVar[str] = ".gitlab-ci.yml"
    default_config: ClassVar[str | None] = "gitlab-ci.yml.j2"
    default_ignore: ClassVar[tuple[str, ...]] = COVERAGE_IGNORE
    badge_templates: ClassVar[tuple[Badge, ...]] = (
        Badge(
            label="Build Status",
            image="https://gitlab.com/{{ USER }}/{{ PKGNAME }}/badges/main/pipeline.svg",
            link="https://gitlab.com/{{ USER }}/{{ PKGNAME }}/pipelines",
        ),
    )

    coverage: bool = True

    def badges(self, user: str, package_name: str) -> list[Badge]:
        badges = super().badges(user, package_name)
        if self.coverage:
            badges.append(
                Badge(
                    label="Coverage",
                    image=f"https://gitlab.com/{user}/{package_name}/badges/main/coverage.svg",
                    link=f"https://gitlab.com/{user}/{package_name}/commits/main",
                )
            )
        return badges

    @classmethod
    def build_interactively(cls, prompter: Prompter) -> Self:
        plugin = super().build_interactively(prompter)
        coverage = prompter.confirm("GitLabCI: Enable test coverage analysis?", default=True)
        return plugin.model_copy(update={"coverage": coverage})

    def describe(self) -> str:
        return f"{super().describe()}, coverage {'on' if self.coverage else 'off'}"
