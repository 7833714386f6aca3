"""
pkgforge.substitution - Text Substitution Engine
================================================

Every generated text artifact (CI configuration, documentation sources,
badge URLs) is rendered through this module. Rendering uses Jinja2 with
the default ``Undefined`` so a missing key never raises:

- ``{{ KEY }}`` on a missing key renders as an empty string
- ``{% if KEY %}...{% endif %}`` on a missing or false key is omitted
- ``{% for k, v in PAIRS %}`` iterates lists of key/value pairs

Template-Derived View
---------------------
:func:`render_for_template` starts from a baseline view computed from a
:class:`~pkgforge.models.Template`:

    USER            account identifier
    VERSION         "major.minor" of the minimum Python version
    DOCUMENTER      a documentation plugin is enabled
    CODECOV         the Codecov plugin is enabled
    COVERALLS       the Coveralls plugin is enabled
    COVERAGE        any coverage reporting is enabled
    AFTER           documentation or coverage work runs after the tests
    DEPLOY_TRAVIS   documentation is published by Travis CI
    DEPLOY_GITLAB   documentation is published by GitLab CI

Usage Example
-------------
>>> render("{% if DOCS %}docs{% endif %}{{ NAME }}!", {"NAME": "pkg"})
'pkg!'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, select_autoescape
from packaging.version import Version


if TYPE_CHECKING:
    from pkgforge.models import Template


def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment used for all rendering.

    Autoescaping is disabled because the output is configuration and
    source code, not HTML.
    """
    env = Environment(
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    # Python literal for values written into generated source files
    env.filters["pyrepr"] = repr

    return env


_env = create_jinja_env()


def render(text: str, view: Mapping[str, Any]) -> str:
    """
    Render ``text`` against ``view``.

    Parameters
    ----------
    text : str
        Template text using Jinja2 placeholder syntax.

    view : Mapping[str, Any]
        Placeholder values. Keys absent from the view are falsy/empty.

    Returns
    -------
    str
        The rendered text. ``text`` itself is not modified.
    """
    return _env.from_string(text).render(**view)


def template_view(template: Template) -> dict[str, Any]:
    """
    Compute the baseline view for a Template.

    Plugins never inspect each other; every cross-plugin flag is computed
    here from the Template's plugin mapping.
    """
    # Imported here: the plugins themselves render through this module.
    from pkgforge.plugins import CIPlugin, Codecov, Coveralls, DeployTarget, Documenter

    version = Version(template.min_version)
    plugins = list(template.plugins.values())

    view: dict[str, Any] = {
        "USER": template.user,
        # No prerelease marker here, unlike version_floor.
        "VERSION": f"{version.major}.{version.minor}",
        "DOCUMENTER": any(isinstance(p, Documenter) for p in plugins),
        "CODECOV": template.has_plugin(Codecov),
        "COVERALLS": template.has_plugin(Coveralls),
    }
    view["COVERAGE"] = (
        view["CODECOV"]
        or view["COVERALLS"]
        or any(isinstance(p, CIPlugin) and p.coverage for p in plugins)
    )
    view["AFTER"] = view["DOCUMENTER"] or view["COVERAGE"]

    targets = {p.deploy for p in plugins if isinstance(p, Documenter)}
    view["DEPLOY_TRAVIS"] = DeployTarget.TRAVIS in targets
    view["DEPLOY_GITLAB"] = DeployTarget.GITLAB in targets
    return view


def render_for_template(
    text: str,
    template: Template,
    view: Mapping[str, Any] | None = None,
) -> str:
    """
    Render ``text`` with the Template's baseline view plus ``view``.

    Keys supplied in ``view`` take precedence over the baseline.
    """
    merged = template_view(template)
    if view:
        merged.update(view)
    return render(text, merged)


def version_floor(version: str | Version) -> str:
    """
    Format a version as the floor of its release series.

    Returns ``"major.minor"`` for final releases (or any patch release).
    Prereleases of ``major.minor.0`` floor to ``"major.minor.0a0"``, the
    PEP 440 form that still admits the series' own prereleases in a
    ``>=`` specifier.

    Examples
    --------
    >>> version_floor("3.12.4")
    '3.12'
    >>> version_floor("3.14.0rc1")
    '3.14.0a0'
    """
    v = Version(str(version))
    if not v.is_prerelease or v.micro > 0:
        return f"{v.major}.{v.minor}"
    return f"{v.major}.{v.minor}.0a0"
