"""
pkgforge.templates - Bundled Template Files
===========================================

Files rendered or copied by the generator and the plugins.

Layout
------
licenses/
    License texts, one ``<SPDX id>.txt`` per bundled license. The
    copyright line is prepended at generation time.

plugins/
    Default configuration files for the CI and coverage plugins
    (``travis.yml.j2``, ``gitlab-ci.yml.j2``, ...).

docs/
    Sphinx sources written by the documentation plugin.

Template Context
----------------
Plugin templates are rendered by
:func:`pkgforge.substitution.render_for_template` and can use ``USER``,
``VERSION``, ``PKGNAME``, ``DOCUMENTER``, ``CODECOV``, ``COVERALLS``,
``COVERAGE`` and ``AFTER``. Missing keys render as empty/false.
"""

from pathlib import Path


TEMPLATES_DIR = Path(__file__).resolve().parent
