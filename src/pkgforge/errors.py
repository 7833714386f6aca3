"""
pkgforge.errors - Exception Taxonomy
====================================

Every error pkgforge raises on its own behalf derives from
:class:`PkgforgeError`. Failures of the external tools (``git``, ``uv``)
are not wrapped: they surface as ``subprocess.CalledProcessError`` after
the generator has rolled back.

Note
----
:class:`ConfigurationError` is not a ``ValueError``. Pydantic wraps
``ValueError`` raised inside validators into a ``ValidationError`` and
passes other exception types through, so bad configuration always
surfaces as a ``ConfigurationError``.
"""


class PkgforgeError(Exception):
    """Base class for pkgforge errors."""


class ConfigurationError(PkgforgeError):
    """Invalid template, plugin or interactive configuration."""


class PackageExistsError(FileExistsError, ConfigurationError):
    """The target package directory already exists."""


class GenerationError(PkgforgeError):
    """A generated artifact is not in the state the generator expects."""


class PromptAborted(PkgforgeError):
    """The user cancelled an interactive prompt."""
