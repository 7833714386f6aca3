"""
pkgforge.plugins.coverage - Coverage Reporting Plugins
======================================================

Coverage services mostly need no configuration file of their own: the CI
templates upload reports when ``CODECOV`` or ``COVERALLS`` is set. A
config file can still be supplied through ``config_file``.
"""

from __future__ import annotations

from typing import ClassVar

from pkgforge.plugins.base import Badge, GenericPlugin


COVERAGE_IGNORE = (".coverage", "coverage.xml", "htmlcov/")


class Codecov(GenericPlugin):
    """Upload coverage to codecov.io."""

    destination: ClassVar[str] = ".codecov.yml"
    default_ignore: ClassVar[tuple[str, ...]] = COVERAGE_IGNORE
    badge_templates: ClassVar[tuple[Badge, ...]] = (
        Badge(
            label="Codecov",
            image="https://codecov.io/gh/{{ USER }}/{{ PKGNAME }}/branch/main/graph/badge.svg",
            link="https://codecov.io/gh/{{ USER }}/{{ PKGNAME }}",
        ),
    )


class Coveralls(GenericPlugin):
    """Upload coverage to coveralls.io."""

    destination: ClassVar[str] = ".coveralls.yml"
    default_ignore: ClassVar[tuple[str, ...]] = COVERAGE_IGNORE
    badge_templates: ClassVar[tuple[Badge, ...]] = (
        Badge(
            label="Coveralls",
            image="https://coveralls.io/repos/github/{{ USER }}/{{ PKGNAME }}/badge.svg?branch=main",
            link="https://coveralls.io/github/{{ USER }}/{{ PKGNAME }}?branch=main",
        ),
    )
