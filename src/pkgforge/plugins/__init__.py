"""
pkgforge.plugins - Composable Package Plugins
=============================================

Plugins contribute ignore entries, README badges and generated files to
a new package. See :mod:`pkgforge.plugins.base` for the contract.

Available Kinds
---------------
- ``TravisCI``, ``AppVeyor``, ``GitLabCI``: continuous integration
- ``Codecov``, ``Coveralls``: coverage reporting
- ``Documenter``, ``GitHubPages``: Sphinx documentation

Ordering
--------
``BADGE_ORDER`` fixes the README position of the badges of the listed
kinds. Badges of any other kind follow, in the Template's insertion order.

``PLUGIN_MENU`` maps the short codes typed at the interactive plugin
prompt to plugin kinds.
"""

from pkgforge.plugins.base import Badge, GenericPlugin, Plugin
from pkgforge.plugins.ci import AppVeyor, CIPlugin, GitLabCI, TravisCI
from pkgforge.plugins.coverage import Codecov, Coveralls
from pkgforge.plugins.documenter import DeployTarget, Documenter, GitHubPages


BADGE_ORDER: list[type[Plugin]] = [
    GitHubPages,
    Documenter,
    TravisCI,
    AppVeyor,
    GitLabCI,
    Codecov,
    Coveralls,
]

PLUGIN_MENU: dict[str, type[Plugin]] = {
    "1": TravisCI,
    "2": AppVeyor,
    "3": GitLabCI,
    "4": Codecov,
    "5": Coveralls,
    "6": Documenter,
    "7": GitHubPages,
}


__all__ = [
    "BADGE_ORDER",
    "PLUGIN_MENU",
    "AppVeyor",
    "Badge",
    "CIPlugin",
    "Codecov",
    "Coveralls",
    "DeployTarget",
    "Documenter",
    "GenericPlugin",
    "GitHubPages",
    "GitLabCI",
    "Plugin",
    "TravisCI",
]
