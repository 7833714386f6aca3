"""
pkgforge - Plugin-Driven Python Package Scaffolding
===================================================

pkgforge creates new Python packages from a reusable, immutable
:class:`Template`. A Template holds identity settings (user, host,
license, authors, target directory, minimum Python version) and a set of
plugins; each plugin contributes README badges, ``.gitignore`` entries
and generated files such as CI configuration or a Sphinx docs tree.

Features
--------
- **Composable plugins**: CI (Travis, AppVeyor, GitLab), coverage
  (Codecov, Coveralls) and documentation (Sphinx, GitHub Pages)
- **Git ready**: repository, remote and first commit created for you
- **uv managed**: pyproject.toml, lockfile and test extra via uv
- **All or nothing**: a failed generation leaves nothing behind
- **Interactive**: build Templates from prompts, or in fast mode

Quick Start
-----------
```bash
# Create a package interactively
pkgforge new mypkg --interactive

# Or with options
pkgforge new mypkg --user me --license ISC --plugin travis --plugin codecov
```

Example
-------
>>> from pkgforge import Template, generate
>>> from pkgforge.plugins import TravisCI, Codecov
>>> t = Template(user="me", plugins=[TravisCI(), Codecov()])
>>> generate("mypkg", t)

Architecture
------------
The package is organized into these main modules:

- ``models``: the Template configuration model
- ``plugins``: plugin contract and plugin kinds
- ``substitution``: Jinja2 rendering of generated text
- ``interactive``: prompt-driven Template construction
- ``generator``: the all-or-nothing generation pipeline
- ``git`` / ``package_manager``: git and uv collaborators
- ``cli``: Typer command line interface
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from pkgforge.errors import ConfigurationError, PackageExistsError, PkgforgeError
from pkgforge.generator import GenerationResult, generate, generate_interactive
from pkgforge.interactive import InteractiveConfig, interactive_template
from pkgforge.licenses import available_licenses
from pkgforge.models import Badge, Template


__all__ = [
    "Badge",
    "ConfigurationError",
    "GenerationResult",
    "InteractiveConfig",
    "PackageExistsError",
    "PkgforgeError",
    "Template",
    # Version info
    "__version__",
    "available_licenses",
    # Core functions
    "generate",
    "generate_interactive",
    "interactive_template",
]
