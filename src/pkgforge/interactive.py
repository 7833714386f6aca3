"""
pkgforge.interactive - Interactive Template Builder
===================================================

Builds a :class:`~pkgforge.models.Template` by asking a fixed sequence of
questions:

    1. user           account on the code hosting service
    2. host           code hosting service
    3. license        one license from a closed menu, or none
    4. authors        copyright holder(s)
    5. dir            directory new packages are created in
    6. min_version    minimum Python version
    7. ssh            SSH or HTTPS remote
    8. manifest       commit uv.lock or ignore it
    9. plugins        plugin kinds by short code, each configured in turn

A field supplied as a keyword argument is used verbatim and its question
is skipped entirely. In fast mode only the user and plugin questions are
asked; every other field takes the Template default.

The result is an ordinary Template: building one interactively and
building one directly from the same values gives equal objects.

Usage Example
-------------
>>> from pkgforge.interactive import interactive_template
>>> t = interactive_template(fast=True)        # prompts for user, plugins
>>> t = interactive_template(license="ISC")     # license is not asked
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pkgforge.errors import ConfigurationError
from pkgforge.git import git_config_get
from pkgforge.licenses import License
from pkgforge.models import DEFAULT_HOST, DEFAULT_LICENSE, Template, default_min_version
from pkgforge.plugins import PLUGIN_MENU, Plugin
from pkgforge.prompts import Prompter, QuestionaryPrompter


# Menu entry for "no license"
NO_LICENSE = "None"

TEMPLATE_FIELDS = (
    "user",
    "host",
    "license",
    "authors",
    "dir",
    "min_version",
    "ssh",
    "manifest",
    "plugins",
)


class InteractiveConfig(BaseModel):
    """
    Defaults and menus used by the interactive builder.

    Attributes
    ----------
    default_license : str
        License preselected in the license menu (``""`` for none).

    default_host : str
        Default answer to the hosting service question.

    plugin_menu : dict[str, type[Plugin]]
        Short code to plugin kind.

    done_code : str
        Code that ends plugin selection.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    default_license: str = DEFAULT_LICENSE
    default_host: str = DEFAULT_HOST
    plugin_menu: dict[str, type[Plugin]] = Field(default_factory=lambda: dict(PLUGIN_MENU))
    done_code: str = "d"


def prompt_license(prompter: Prompter, config: InteractiveConfig) -> str:
    choices = [lic.value for lic in License] + [NO_LICENSE]
    answer = prompter.select(
        "License",
        choices=choices,
        default=config.default_license or NO_LICENSE,
    )
    return "" if answer == NO_LICENSE else answer


def prompt_plugins(prompter: Prompter, config: InteractiveConfig) -> list[Plugin]:
    """
    Ask which plugin kinds to enable and configure each one.

    Raises
    ------
    ConfigurationError
        On a code that is not in the menu.
    """
    prompter.echo("Available plugins:")
    for code, kind in config.plugin_menu.items():
        prompter.echo(f"  [{code}] {kind.__name__}")

    answer = prompter.text(
        f"Select plugins by code, separated by spaces ('{config.done_code}' when done)",
        default=config.done_code,
    )

    plugins: list[Plugin] = []
    for code in answer.split():
        if code == config.done_code:
            break
        kind = config.plugin_menu.get(code)
        if kind is None:
            valid = ", ".join(config.plugin_menu)
            raise ConfigurationError(f"Unknown plugin code '{code}'. Valid: {valid}")
        plugins.append(kind.build_interactively(prompter))
    return plugins


def interactive_template(
    *,
    fast: bool = False,
    prompter: Prompter | None = None,
    config: InteractiveConfig | None = None,
    **kwargs: Any,
) -> Template:
    """
    Build a Template by prompting for every field not given in ``kwargs``.

    Parameters
    ----------
    fast : bool, default=False
        Only ask for the user and the plugins.

    prompter : Prompter | None
        Where questions go. Defaults to terminal prompts.

    config : InteractiveConfig | None
        Menu defaults.

    **kwargs
        Template fields to use verbatim.

    Raises
    ------
    ConfigurationError
        On an unknown keyword, or an answer the Template rejects.
    """
    unknown = set(kwargs) - set(TEMPLATE_FIELDS)
    if unknown:
        raise ConfigurationError(f"Unknown Template field(s): {', '.join(sorted(unknown))}")

    prompter = prompter or QuestionaryPrompter()
    config = config or InteractiveConfig()
    answers = dict(kwargs)

    if "user" not in answers:
        answers["user"] = prompter.text(
            "Username", default=git_config_get("github.user") or ""
        ).strip()

    if not fast:
        if "host" not in answers:
            answers["host"] = prompter.text(
                "Code hosting service", default=config.default_host
            ).strip()
        if "license" not in answers:
            answers["license"] = prompt_license(prompter, config)
        if "authors" not in answers:
            answers["authors"] = prompter.text(
                "Package author(s)", default=git_config_get("user.name") or ""
            ).strip()
        if "dir" not in answers:
            answers["dir"] = Path(
                prompter.text("Path to package directory", default=str(Path.cwd())).strip()
            )
        if "min_version" not in answers:
            answers["min_version"] = prompter.text(
                "Minimum Python version", default=default_min_version()
            ).strip()
        if "ssh" not in answers:
            answers["ssh"] = prompter.confirm("Set remote to SSH?", default=False)
        if "manifest" not in answers:
            answers["manifest"] = prompter.confirm("Commit uv.lock?", default=False)

    if "plugins" not in answers:
        answers["plugins"] = prompt_plugins(prompter, config)

    return Template(**answers)
