"""
pkgforge.licenses - License Identifiers and Texts
=================================================

pkgforge bundles the text of a few short permissive licenses under
``templates/licenses/``. A Template's ``license`` field must be empty
(no LICENSE file) or resolve to one of these identifiers.

The copyright line is not part of the stored text; the generator
prepends ``Copyright (c) {year} {authors}`` when writing LICENSE.
"""

from __future__ import annotations

from enum import Enum

from pkgforge.errors import ConfigurationError
from pkgforge.templates import TEMPLATES_DIR


class License(str, Enum):
    """
    Licenses whose text is bundled with pkgforge.

    Values are SPDX identifiers.
    """

    MIT = "MIT"
    ISC = "ISC"
    BSD2 = "BSD-2-Clause"
    BSD3 = "BSD-3-Clause"

    @property
    def full_name(self) -> str:
        """Full license name for menus and listings."""
        names = {
            License.MIT: "MIT License",
            License.ISC: "ISC License",
            License.BSD2: 'BSD 2-Clause "Simplified" License',
            License.BSD3: 'BSD 3-Clause "New" or "Revised" License',
        }
        return names[self]

    def read_text(self) -> str:
        """Return the bundled license text."""
        path = TEMPLATES_DIR / "licenses" / f"{self.value}.txt"
        return path.read_text(encoding="utf-8")


def resolve_license(code: str) -> str:
    """
    Resolve a license code to its canonical identifier.

    Matching is case-insensitive. The empty string resolves to itself and
    means "no license".

    Raises
    ------
    ConfigurationError
        If the code is not a known license identifier.
    """
    code = code.strip()
    if not code:
        return ""
    for lic in License:
        if lic.value.lower() == code.lower():
            return lic.value
    valid = ", ".join(lic.value for lic in License)
    raise ConfigurationError(f"License '{code}' is not available. Valid: {valid}")


def read_license(code: str) -> str:
    """Return the text of the license identified by ``code``."""
    return License(resolve_license(code)).read_text()


def available_licenses() -> dict[str, str]:
    """Map of license identifier to full name."""
    return {lic.value: lic.full_name for lic in License}
