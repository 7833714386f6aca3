"""Package name validation."""

from __future__ import annotations

import keyword
import re

from pkgforge.errors import ConfigurationError


_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


def validate_package_name(name: str) -> str:
    """
    Validate a package (distribution) name and strip a ``.py`` suffix.

    Names must start with a letter and contain only letters, numbers,
    hyphens, and underscores; the import name must not be a keyword.

    Raises
    ------
    ConfigurationError
        If the name doesn't meet the requirements.
    """
    name = name.strip()
    name = name.removesuffix(".py")
    if not _NAME_PATTERN.match(name):
        raise ConfigurationError(
            f"Invalid package name '{name}'. Names must start with a letter "
            "and contain only letters, numbers, hyphens, and underscores."
        )
    if keyword.iskeyword(import_name(name)):
        raise ConfigurationError(f"'{name}' is a Python keyword and cannot be a package name.")
    return name


def import_name(name: str) -> str:
    """
    Convert a package name to its import name.

    >>> import_name("my-cool-pkg")
    'my_cool_pkg'
    """
    return name.replace("-", "_").lower()
