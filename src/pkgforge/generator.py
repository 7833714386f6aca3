"""
pkgforge.generator - Package Generation
=======================================

This module turns a :class:`~pkgforge.models.Template` into a package on
disk. It drives the package manager and git, writes the base artifacts,
and hands over to each plugin.

Architecture
------------
The generator follows a pipeline pattern:

    1. Check that the package directory does not exist yet
    2. Create the skeleton (pyproject.toml, src/<pkg>/) with the package manager
    3. Initialize a git repository, set its remote, create gh-pages if needed
    4. Write the test module, .python-version, README and LICENSE
    5. Run every plugin's generator, in Template order
    6. Write .gitignore and commit everything
    7. Install the new package in development mode

The pipeline is all-or-nothing: if any step fails, the package directory
is removed and the original exception is re-raised.

Generated Files
---------------
Each step returns the paths it created, relative to the package directory
(directories end with ``/``). The combined list is what gets committed;
it is not an exact inventory of the directory.

Usage Example
-------------
>>> from pkgforge.generator import generate
>>> from pkgforge.models import Template
>>> from pkgforge.plugins import Codecov, TravisCI
>>>
>>> t = Template(user="me", plugins=[TravisCI(), Codecov()])
>>> result = generate("mypkg", t)
>>> result.files
['src/', 'pyproject.toml', 'tests/', '.python-version', 'README.md', ...]

See Also
--------
- models.py: Template configuration
- plugins/: Plugin contract and kinds
- interactive.py: Building Templates from prompts
"""

from __future__ import annotations

import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomlkit
from packaging.requirements import Requirement
from packaging.utils import canonicalize_name
from packaging.version import Version
from rich.console import Console
from rich.panel import Panel

from pkgforge.errors import GenerationError, PackageExistsError
from pkgforge.files import gen_file
from pkgforge.git import GitRepo
from pkgforge.interactive import interactive_template
from pkgforge.licenses import read_license
from pkgforge.naming import import_name, validate_package_name
from pkgforge.package_manager import PackageManager, UvPackageManager, activated
from pkgforge.plugins import BADGE_ORDER, GitHubPages
from pkgforge.substitution import version_floor


if TYPE_CHECKING:
    from pkgforge.interactive import InteractiveConfig
    from pkgforge.models import Template
    from pkgforge.prompts import Prompter


# =============================================================================
# Module-Level Configuration
# =============================================================================

console = Console()

MANIFEST_FILE = "pyproject.toml"
LOCKFILE = "uv.lock"
TEST_DEPENDENCY = "pytest"

# Always present in .gitignore
DEFAULT_IGNORE = (".DS_Store", "/dev/")

REMOTE_NAME = "origin"
PAGES_BRANCH = "gh-pages"
INITIAL_COMMIT_MESSAGE = "Initial commit"
COMMIT_MESSAGE = "Files generated by pkgforge"


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class GenerationResult:
    """
    Result of a package generation.

    Attributes
    ----------
    package_dir : Path
        Absolute path to the created package.

    files : list[str]
        Files and directories generated, relative to ``package_dir``.

    branches : list[str]
        Git branches created (empty without git).

    warnings : list[str]
        Advisory messages, e.g. branches that still need pushing.
    """

    package_dir: Path
    files: list[str] = field(default_factory=list)
    branches: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# =============================================================================
# Rollback
# =============================================================================


@contextmanager
def rollback_on_error(package_dir: Path) -> Iterator[None]:
    """
    Remove ``package_dir`` if the block raises, then re-raise.

    A failure to remove the directory propagates as well, chained to the
    original exception.
    """
    try:
        yield
    except BaseException:
        if package_dir.exists():
            shutil.rmtree(package_dir)
        raise


# =============================================================================
# Git Repository
# =============================================================================


def init_repository(
    package_dir: Path,
    template: Template,
    package_name: str,
    git_config: dict[str, str] | None = None,
    out: Console = console,
) -> GitRepo:
    """
    Initialize the package's repository.

    Creates an empty initial commit, points ``origin`` at the hosting
    service and, when GitHubPages is enabled, creates a ``gh-pages`` branch
    with its own empty commit before returning to the primary branch.
    """
    repo = GitRepo.init(package_dir)
    for key, value in (git_config or {}).items():
        repo.set_config(key, value)

    repo.commit(INITIAL_COMMIT_MESSAGE)
    remote = template.remote_url(package_name)
    repo.set_remote(REMOTE_NAME, remote)
    out.print(f"  Set remote {REMOTE_NAME} to {remote}")

    if template.has_plugin(GitHubPages):
        primary = repo.current_branch()
        repo.create_branch(PAGES_BRANCH)
        repo.commit(INITIAL_COMMIT_MESSAGE)
        repo.checkout(primary)
        out.print(f"  Created empty {PAGES_BRANCH} branch")

    return repo


# =============================================================================
# Base Artifacts
# =============================================================================


def move_test_dependency(pyproject: Path) -> None:
    """
    Move the test framework from ``[project].dependencies`` into the
    ``test`` extra of ``[project.optional-dependencies]``.

    Raises
    ------
    GenerationError
        If the test framework is not a dependency.
    """
    doc = tomlkit.parse(pyproject.read_text(encoding="utf-8"))
    project = doc["project"]
    dependencies = project.get("dependencies", [])

    for index, dependency in enumerate(dependencies):
        if canonicalize_name(Requirement(str(dependency)).name) == TEST_DEPENDENCY:
            break
    else:
        raise GenerationError(f"{TEST_DEPENDENCY} is not a dependency in {pyproject}")

    requirement = str(dependencies[index])
    del dependencies[index]

    if "optional-dependencies" not in project:
        project["optional-dependencies"] = tomlkit.table()
    project["optional-dependencies"]["test"] = [requirement]

    pyproject.write_text(tomlkit.dumps(doc), encoding="utf-8")


def gen_tests(package_dir: Path, template: Template, pm: PackageManager) -> list[str]:
    """
    Create the test entrypoint.

    pytest is added as a test-only dependency and the lockfile is
    regenerated, with the package's own project active.
    """
    with activated(pm, package_dir):
        pm.add_dependency(TEST_DEPENDENCY)
        move_test_dependency(package_dir / MANIFEST_FILE)
        pm.update_lockfile()

    name = import_name(package_dir.name)
    text = (
        f'"""Tests for {package_dir.name}."""\n'
        "\n"
        f"import {name}\n"
        "\n"
        "\n"
        f"def test_{name}() -> None:\n"
        "    # Write your own tests here.\n"
        f"    assert {name}\n"
    )
    gen_file(package_dir / "tests" / f"test_{name}.py", text)
    return ["tests/"]


def gen_require(package_dir: Path, template: Template) -> list[str]:
    """
    Record the minimum Python version.

    Sets ``requires-python`` in pyproject.toml and pins ``.python-version``.
    """
    pyproject = package_dir / MANIFEST_FILE
    doc = tomlkit.parse(pyproject.read_text(encoding="utf-8"))
    doc["project"]["requires-python"] = f">={version_floor(template.min_version)}"
    pyproject.write_text(tomlkit.dumps(doc), encoding="utf-8")

    version = Version(template.min_version)
    gen_file(package_dir / ".python-version", f"{version.major}.{version.minor}")
    return [".python-version"]


def readme_text(template: Template, package_name: str) -> str:
    """
    README contents: a heading followed by one badge block per plugin.

    Plugins in ``BADGE_ORDER`` come first, in that order; the rest follow
    in Template order. Blocks are separated by blank lines and plugins
    without badges are skipped.
    """
    kinds = [kind for kind in BADGE_ORDER if template.has_plugin(kind)]
    kinds += [kind for kind in template.plugins if kind not in kinds]

    blocks = [f"# {package_name}"]
    for kind in kinds:
        badges = template.plugins[kind].badges(template.user, package_name)
        if badges:
            blocks.append("\n".join(badge.to_markdown() for badge in badges))
    return "\n\n".join(blocks)


def gen_readme(package_dir: Path, template: Template) -> list[str]:
    gen_file(package_dir / "README.md", readme_text(template, package_dir.name))
    return ["README.md"]


def gitignore_entries(template: Template) -> list[str]:
    """
    Sorted, deduplicated ``.gitignore`` entries.

    The defaults are always present. The lockfile is ignored (at the
    repository root only) unless the Template tracks it.
    """
    entries = list(DEFAULT_IGNORE)
    for plugin in template.plugins.values():
        entries.extend(plugin.ignore_entries())
    if not template.manifest and LOCKFILE not in entries:
        entries.append(f"/{LOCKFILE}")
    return sorted(set(entries))


def gen_gitignore(package_dir: Path, template: Template) -> list[str]:
    """Create ``.gitignore``; also reports the lockfile when it is tracked."""
    gen_file(package_dir / ".gitignore", "\n".join(gitignore_entries(template)))
    files = [".gitignore"]
    if template.manifest:
        files.append(LOCKFILE)
    return files


def gen_license(package_dir: Path, template: Template) -> list[str]:
    """Create LICENSE, unless the Template has no license."""
    if not template.license:
        return []

    text = f"Copyright (c) {date.today().year} {template.authors}\n"
    text += read_license(template.license)
    gen_file(package_dir / "LICENSE", text)
    return ["LICENSE"]


# =============================================================================
# Main Generation Function
# =============================================================================


def generate(
    package_name: str,
    template: Template,
    *,
    git: bool = True,
    git_config: dict[str, str] | None = None,
    develop: bool = True,
    package_manager: PackageManager | None = None,
    verbose: bool = True,
) -> GenerationResult:
    """
    Generate a package named ``package_name`` from ``template``.

    Parameters
    ----------
    package_name : str
        Name of the new package; a trailing ``.py`` is dropped.

    template : Template
        Configuration to generate from. Not modified.

    git : bool, default=True
        Create a git repository and commit the generated files.

    git_config : dict[str, str] | None
        Repository-local git configuration, e.g. ``{"user.name": ...}``.

    develop : bool, default=True
        Install the new package in development mode afterwards. When the
        package manager has nowhere to install it, a warning is recorded
        instead and the package is kept.

    package_manager : PackageManager | None
        Defaults to :class:`UvPackageManager`.

    verbose : bool, default=True
        Display progress information to the console.

    Returns
    -------
    GenerationResult

    Raises
    ------
    ConfigurationError
        If the package name is invalid.
    PackageExistsError
        If the package directory already exists. Nothing is touched.
    subprocess.CalledProcessError
        If git or the package manager fails. The package directory has
        been removed.
    """
    package_name = validate_package_name(package_name)
    package_dir = template.dir / package_name
    if package_dir.exists():
        raise PackageExistsError(f"{package_dir} already exists")

    pm = package_manager or UvPackageManager()
    out = console if verbose else Console(quiet=True)
    result = GenerationResult(package_dir=package_dir)

    out.print()
    out.print(
        Panel(
            f"[bold blue]Creating package:[/] [green]{package_name}[/]\n"
            f"[dim]Directory: {template.dir} | "
            f"Python: {template.min_version} | "
            f"License: {template.license or 'None'}[/]",
            title="[bold]pkgforge[/]",
            border_style="blue",
        )
    )

    with rollback_on_error(package_dir):
        out.print("[bold]📁 Creating package skeleton...[/]")
        pm.generate_skeleton(package_dir)

        repo = None
        if git:
            out.print("[bold]🔧 Initializing git repository...[/]")
            repo = init_repository(package_dir, template, package_name, git_config, out)

        out.print("[bold]📝 Generating files...[/]")
        files = ["src/", MANIFEST_FILE]
        files += gen_tests(package_dir, template, pm)
        files += gen_require(package_dir, template)
        files += gen_readme(package_dir, template)
        files += gen_license(package_dir, template)
        for plugin in template.plugins.values():
            files += plugin.generate(template, package_dir, package_name)

        if repo is not None:
            files += gen_gitignore(package_dir, template)
            repo.add(*files)
            repo.commit(COMMIT_MESSAGE)
            out.print(f"  Committed {len(files)} files/directories: {', '.join(files)}")

            result.branches = repo.branches()
            if len(result.branches) > 1:
                advice = "Remember to push all created branches to your remote: git push --all"
                result.warnings.append(advice)
                out.print(f"  [yellow]⚠[/] {advice}")

        if develop and not pm.register_local_package(package_dir):
            advice = (
                "No active project or virtual environment to install into; "
                f"run: uv pip install --editable {package_dir}"
            )
            result.warnings.append(advice)
            out.print(f"  [yellow]⚠[/] {advice}")

    result.files = files

    out.print()
    out.print(
        Panel(
            f"[bold green]✨ Package created successfully![/]\n\n"
            f"[dim]Location:[/] {package_dir}",
            title="[bold green]Success[/]",
            border_style="green",
        )
    )
    return result


def generate_interactive(
    package_name: str,
    *,
    fast: bool = False,
    prompter: Prompter | None = None,
    config: InteractiveConfig | None = None,
    git: bool = True,
    git_config: dict[str, str] | None = None,
    develop: bool = True,
    package_manager: PackageManager | None = None,
    verbose: bool = True,
    **kwargs: Any,
) -> Template:
    """
    Build a Template interactively, then generate ``package_name`` with it.

    Keyword arguments not consumed here are Template fields and are not
    prompted for.

    Returns
    -------
    Template
        The Template that was built, for reuse.
    """
    template = interactive_template(fast=fast, prompter=prompter, config=config, **kwargs)
    generate(
        package_name,
        template,
        git=git,
        git_config=git_config,
        develop=develop,
        package_manager=package_manager,
        verbose=verbose,
    )
    return template
