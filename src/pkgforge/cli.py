"""
pkgforge.cli - Command Line Interface
=====================================

This module provides the command-line interface for pkgforge using Typer.

Architecture
------------
The CLI is structured around Typer's app pattern:

    app (main entry point)
    ├── new       - Generate a new package
    ├── plugins   - List available plugins
    ├── licenses  - List bundled licenses
    └── license   - Show a license text

``new`` is scriptable by default: every Template field has an option,
and unspecified fields take the Template defaults. With ``--interactive``
the fields that were not given on the command line are prompted for.

Usage Examples
--------------
Non-interactive:
    $ pkgforge new mypkg --user me --plugin travis --plugin codecov

Interactive (prompts for everything not given):
    $ pkgforge new mypkg --interactive

Fast interactive (only user and plugins are asked):
    $ pkgforge new mypkg --interactive --fast

See Also
--------
- generator.py: Package generation pipeline
- interactive.py: Prompt-driven Template construction
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Annotated, Any

import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pkgforge import __version__
from pkgforge.errors import ConfigurationError, PromptAborted
from pkgforge.generator import generate, generate_interactive
from pkgforge.interactive import InteractiveConfig
from pkgforge.licenses import License, available_licenses, read_license
from pkgforge.models import Template
from pkgforge.plugins import (
    PLUGIN_MENU,
    AppVeyor,
    Codecov,
    Coveralls,
    Documenter,
    GitHubPages,
    GitLabCI,
    Plugin,
    TravisCI,
)


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="pkgforge",
    help="Plugin-driven Python package scaffolding.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)

console = Console()

# Plugin names accepted by --plugin
PLUGIN_NAMES: dict[str, type[Plugin]] = {
    "travis": TravisCI,
    "appveyor": AppVeyor,
    "gitlab": GitLabCI,
    "codecov": Codecov,
    "coveralls": Coveralls,
    "docs": Documenter,
    "pages": GitHubPages,
}


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]pkgforge[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Plugin-driven Python package scaffolding[/]",
            border_style="green",
        ))
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]pkgforge[/] - Plugin-driven Python package scaffolding.

    [bold]Quick Start:[/]

        pkgforge new mypkg --interactive
    """


# =============================================================================
# Option Parsing Helpers
# =============================================================================

def parse_git_config(pairs: list[str]) -> dict[str, str]:
    """Parse repeated ``key=value`` options."""
    config: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ConfigurationError(f"Invalid git config '{pair}', expected key=value")
        config[key] = value
    return config


def resolve_plugins(names: list[str]) -> list[Plugin]:
    """Instantiate plugins with default settings from names or menu codes."""
    plugins: list[Plugin] = []
    for name in names:
        kind = PLUGIN_NAMES.get(name.lower()) or PLUGIN_MENU.get(name)
        if kind is None:
            valid = ", ".join(PLUGIN_NAMES)
            raise ConfigurationError(f"Unknown plugin '{name}'. Valid: {valid}")
        plugins.append(kind())
    return plugins


# =============================================================================
# New Command
# =============================================================================

@app.command()
def new(
    name: Annotated[str, typer.Argument(help="Name of the package to create")],
    user: Annotated[
        str | None,
        typer.Option("--user", "-u", help="Account on the code hosting service"),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option("--host", help="Code hosting service, e.g. github.com"),
    ] = None,
    license_: Annotated[
        str | None,
        typer.Option("--license", "-l", help="License identifier, or '' for none"),
    ] = None,
    authors: Annotated[
        str | None,
        typer.Option("--authors", "-a", help="Copyright holder(s)"),
    ] = None,
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Directory to create the package in"),
    ] = None,
    min_version: Annotated[
        str | None,
        typer.Option("--min-version", help="Minimum supported Python version"),
    ] = None,
    ssh: Annotated[
        bool | None,
        typer.Option("--ssh/--https", help="Remote URL scheme"),
    ] = None,
    manifest: Annotated[
        bool | None,
        typer.Option("--manifest/--no-manifest", help="Commit uv.lock instead of ignoring it"),
    ] = None,
    plugin: Annotated[
        list[str] | None,
        typer.Option("--plugin", "-p", help="Plugin to enable (repeatable): " + ", ".join(PLUGIN_NAMES)),
    ] = None,
    git_config: Annotated[
        list[str] | None,
        typer.Option("--git-config", help="Repository git config as key=value (repeatable)"),
    ] = None,
    no_git: Annotated[
        bool,
        typer.Option("--no-git", help="Skip git initialization"),
    ] = False,
    no_develop: Annotated[
        bool,
        typer.Option("--no-develop", help="Don't install the package in development mode"),
    ] = False,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Prompt for settings not given as options"),
    ] = False,
    fast: Annotated[
        bool,
        typer.Option("--fast", help="With --interactive, only prompt for user and plugins"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Don't print progress"),
    ] = False,
) -> None:
    """
    Generate a new Python package.

    [bold]Examples:[/]

        # Defaults, plus Travis CI and Codecov
        pkgforge new mypkg --user me -p travis -p codecov

        # Prompt for everything not given
        pkgforge new mypkg --interactive
    """
    given: dict[str, Any] = {
        "user": user,
        "host": host,
        "license": license_,
        "authors": authors,
        "dir": directory,
        "min_version": min_version,
        "ssh": ssh,
        "manifest": manifest,
    }
    fields = {key: value for key, value in given.items() if value is not None}

    try:
        if plugin is not None:
            fields["plugins"] = resolve_plugins(plugin)
        options = {
            "git": not no_git,
            "git_config": parse_git_config(git_config or []),
            "develop": not no_develop,
            "verbose": not quiet,
        }

        if interactive:
            generate_interactive(name, fast=fast, config=InteractiveConfig(), **options, **fields)
        else:
            generate(name, Template(**fields), **options)

    except PromptAborted:
        raise typer.Abort()
    except ConfigurationError as e:
        rprint(f"[red]Error:[/] {e}")
        raise typer.Exit(1)
    except subprocess.CalledProcessError as e:
        command = " ".join(str(arg) for arg in e.cmd)
        rprint(f"[red]Error:[/] '{command}' failed")
        if e.stderr:
            rprint(f"[dim]{e.stderr.strip()}[/]")
        raise typer.Exit(1)


# =============================================================================
# Listing Commands
# =============================================================================

@app.command()
def plugins() -> None:
    """List available plugins."""
    table = Table(title="Plugins")
    table.add_column("Code", style="cyan")
    table.add_column("Name", style="cyan")
    table.add_column("Plugin", style="green")
    table.add_column("Description")

    names = {kind: plugin_name for plugin_name, kind in PLUGIN_NAMES.items()}
    for code, kind in PLUGIN_MENU.items():
        summary = (kind.__doc__ or "").strip().splitlines()[0] if kind.__doc__ else ""
        table.add_row(code, names.get(kind, ""), kind.__name__, summary)

    console.print(table)


@app.command()
def licenses() -> None:
    """List bundled licenses."""
    table = Table(title="Licenses")
    table.add_column("Identifier", style="cyan")
    table.add_column("Name", style="green")
    for identifier, full_name in available_licenses().items():
        table.add_row(identifier, full_name)
    console.print(table)


@app.command(name="license")
def show_license(
    identifier: Annotated[
        str,
        typer.Argument(help="License identifier, e.g. " + ", ".join(lic.value for lic in License)),
    ],
) -> None:
    """Show the text of a bundled license."""
    try:
        text = read_license(identifier)
    except ConfigurationError as e:
        rprint(f"[red]Error:[/] {e}")
        raise typer.Exit(1)
    typer.echo(text)
