"""
pkgforge.plugins.base - The Plugin Contract
===========================================

A plugin is an immutable pydantic model that contributes to a generated
package in up to three ways:

- ``ignore_entries()``: paths to add to ``.gitignore``
- ``badges(user, package_name)``: README badges
- ``generate(template, package_dir, package_name)``: files on disk

Plus two construction/display hooks:

- ``build_interactively(prompter)``: classmethod that prompts for the
  kind's configuration and returns an instance
- ``describe()``: one-line summary

A plugin never holds a reference to the Template that contains it and
never inspects other plugins. The generator passes the Template in
explicitly, and cross-plugin flags (``COVERAGE``, ``AFTER``, ...) are
computed by :mod:`pkgforge.substitution`.

GenericPlugin
-------------
Most plugins just render one configuration file from a template and
contribute a few badges. :class:`GenericPlugin` implements that once;
subclasses only declare class attributes:

    destination      where the rendered file goes, relative to the package
    default_config   bundled template name in ``templates/plugins/``, or None
    default_ignore   ignore entries used when none are given
    badge_templates  badges, with ``{{ USER }}``/``{{ PKGNAME }}`` placeholders
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pkgforge.errors import ConfigurationError
from pkgforge.files import gen_file
from pkgforge.naming import import_name
from pkgforge.substitution import render, render_for_template
from pkgforge.templates import TEMPLATES_DIR


if TYPE_CHECKING:
    from typing import Self

    from pkgforge.models import Template
    from pkgforge.prompts import Prompter


class Badge(BaseModel):
    """
    A README badge: an image linking somewhere.

    Examples
    --------
    >>> Badge(label="Docs", image="https://img/docs.svg", link="https://docs").to_markdown()
    '[![Docs](https://img/docs.svg)](https://docs)'
    """

    model_config = ConfigDict(frozen=True)

    label: str
    image: str
    link: str

    def to_markdown(self) -> str:
        return f"[![{self.label}]({self.image})]({self.link})"

    def substitute(self, view: dict[str, Any]) -> Badge:
        """Render placeholders in every field."""
        return Badge(
            label=render(self.label, view),
            image=render(self.image, view),
            link=render(self.link, view),
        )


class Plugin(BaseModel):
    """
    Base class for all plugin kinds.

    The kind of a plugin is its class; a Template holds at most one
    instance per kind. Every hook has a no-op default so a kind only
    overrides what it contributes.
    """

    model_config = ConfigDict(frozen=True)

    def ignore_entries(self) -> list[str]:
        return []

    def badges(self, user: str, package_name: str) -> list[Badge]:
        return []

    def generate(
        self,
        template: Template,
        package_dir: Path,
        package_name: str,
    ) -> list[str]:
        """
        Write this plugin's files into ``package_dir``.

        Returns
        -------
        list[str]
            Paths created, relative to ``package_dir``; directories end
            with ``/``. They are staged in the generated package's first
            commit.
        """
        return []

    @classmethod
    def build_interactively(cls, prompter: Prompter) -> Self:
        return cls()

    def describe(self) -> str:
        return type(self).__name__


class GenericPlugin(Plugin):
    """
    A plugin that renders a single configuration file.

    Attributes
    ----------
    config_file : Path | None
        Template for the configuration file. Defaults to the kind's bundled
        template; None means no file is written.

    ignore : list[str]
        Entries for ``.gitignore``. Defaults to the kind's ``default_ignore``.

    view : dict[str, Any]
        Extra placeholder values used when rendering ``config_file``.
    """

    destination: ClassVar[str] = ""
    default_config: ClassVar[str | None] = None
    default_ignore: ClassVar[tuple[str, ...]] = ()
    badge_templates: ClassVar[tuple[Badge, ...]] = ()

    config_file: Path | None = None
    ignore: list[str] = Field(default_factory=list)
    view: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def default_config_path(cls) -> Path | None:
        if cls.default_config is None:
            return None
        return TEMPLATES_DIR / "plugins" / cls.default_config

    @model_validator(mode="before")
    @classmethod
    def apply_kind_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            data.setdefault("config_file", cls.default_config_path())
            data.setdefault("ignore", list(cls.default_ignore))
        return data

    @field_validator("config_file")
    @classmethod
    def validate_config_file(cls, v: Path | None) -> Path | None:
        if v is None:
            return None
        v = Path(v).expanduser().absolute()
        if not v.is_file():
            raise ConfigurationError(f"Config file {v} does not exist")
        return v

    def ignore_entries(self) -> list[str]:
        return list(self.ignore)

    def badges(self, user: str, package_name: str) -> list[Badge]:
        view = {"USER": user, "PKGNAME": package_name}
        return [badge.substitute(view) for badge in self.badge_templates]

    def generate(
        self,
        template: Template,
        package_dir: Path,
        package_name: str,
    ) -> list[str]:
        if self.config_file is None:
            return []
        text = render_for_template(
            self.config_file.read_text(encoding="utf-8"),
            template,
            {"PKGNAME": package_name, "IMPORT_NAME": import_name(package_name), **self.view},
        )
        gen_file(package_dir / self.destination, text)
        return [self.destination]

    @classmethod
    def build_interactively(cls, prompter: Prompter) -> Self:
        name = cls.__name__
        default = cls.default_config_path()
        answer = prompter.text(
            f"{name}: Enter the config template filename ('none' for no file)",
            default=str(default) if default else "none",
        ).strip()
        if not answer:
            config_file = default
        elif answer.lower() == "none":
            config_file = None
        else:
            config_file = Path(answer)

        answer = prompter.text(
            f"{name}: Enter any .gitignore entries (separated by spaces)",
            default=" ".join(cls.default_ignore),
        )
        return cls(config_file=config_file, ignore=answer.split())

    def describe(self) -> str:
        if self.config_file is None:
            config = "None"
        elif self.config_file == self.default_config_path():
            config = "Default"
        else:
            config = str(self.config_file)
        return (
            f"{type(self).__name__}: Config file: {config}, "
            f"{len(self.ignore)} gitignore entries"
        )
