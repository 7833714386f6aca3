"""
Tests for pkgforge.models
=========================

This module contains tests for the Template model: field defaults,
validation, plugin folding and accessors.

Test Organization
-----------------
- TestTemplateDefaults: Defaults and git config fallbacks
- TestTemplateValidation: Rejected configurations
- TestTemplatePlugins: Plugin keying and ordering
- TestTemplateAccessors: remote_url and describe
- TestLicenses: License resolution
- TestPackageNames: Package name validation
"""

import platform
import subprocess
from pathlib import Path

import pydantic
import pytest

from pkgforge.errors import ConfigurationError
from pkgforge.licenses import License, available_licenses, read_license, resolve_license
from pkgforge.models import Template
from pkgforge.naming import import_name, validate_package_name
from pkgforge.plugins import Codecov, Documenter, GitLabCI, TravisCI


def set_global_git_config(key: str, value: str) -> None:
    subprocess.run(["git", "config", "--global", key, value], check=True)


# =============================================================================
# Defaults
# =============================================================================

class TestTemplateDefaults:
    """Tests for Template field defaults."""

    def test_defaults(self, tmp_path: Path) -> None:
        t = Template(user="me", dir=tmp_path)
        assert t.host == "github.com"
        assert t.license == "MIT"
        assert t.min_version == platform.python_version()
        assert t.ssh is False
        assert t.manifest is False
        assert t.plugins == {}

    def test_dir_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert Template(user="me").dir == tmp_path

    def test_dir_made_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        t = Template(user="me", dir="relative")
        assert t.dir.is_absolute()
        assert t.dir == tmp_path / "relative"

    def test_dir_expands_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        assert Template(user="me", dir="~/code").dir == tmp_path / "code"

    def test_min_version_normalized(self) -> None:
        assert Template(user="me", min_version="3.12.0").min_version == "3.12.0"
        assert Template(user="me", min_version="3.14.0-rc1").min_version == "3.14.0rc1"

    def test_authors_empty_without_git_config(self) -> None:
        assert Template(user="me").authors == ""

    @pytest.mark.integration
    def test_user_and_authors_from_git_config(self) -> None:
        set_global_git_config("github.user", "octocat")
        set_global_git_config("user.name", "Mona Lisa")
        t = Template()
        assert t.user == "octocat"
        assert t.authors == "Mona Lisa"

    def test_license_case_insensitive(self) -> None:
        assert Template(user="me", license="isc").license == "ISC"
        assert Template(user="me", license="bsd-3-clause").license == "BSD-3-Clause"

    def test_empty_license(self) -> None:
        assert Template(user="me", license="").license == ""


# =============================================================================
# Validation
# =============================================================================

class TestTemplateValidation:
    """Tests for rejected Template configurations."""

    def test_missing_user(self) -> None:
        with pytest.raises(ConfigurationError, match="github.user"):
            Template()

    def test_unknown_license(self) -> None:
        with pytest.raises(ConfigurationError, match="not available"):
            Template(user="me", license="WTFPL")

    def test_invalid_min_version(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid minimum version"):
            Template(user="me", min_version="three")

    def test_non_plugin(self) -> None:
        with pytest.raises(ConfigurationError, match="is not a plugin"):
            Template(user="me", plugins=["travis"])

    def test_configuration_error_not_wrapped(self) -> None:
        with pytest.raises(ConfigurationError):
            Template(user="me", license="nope")
        assert not issubclass(ConfigurationError, ValueError)

    def test_frozen(self) -> None:
        t = Template(user="me")
        with pytest.raises(pydantic.ValidationError):
            t.user = "other"


# =============================================================================
# Plugins
# =============================================================================

class TestTemplatePlugins:
    """Tests for plugin keying."""

    def test_keyed_by_kind(self) -> None:
        travis, codecov = TravisCI(), Codecov()
        t = Template(user="me", plugins=[travis, codecov])
        assert t.plugins == {TravisCI: travis, Codecov: codecov}
        assert t.has_plugin(TravisCI)
        assert not t.has_plugin(Documenter)
        assert t.get_plugin(Codecov) is codecov
        assert t.get_plugin(Documenter) is None

    def test_insertion_order(self) -> None:
        t = Template(user="me", plugins=[Codecov(), Documenter(), TravisCI()])
        assert list(t.plugins) == [Codecov, Documenter, TravisCI]

    def test_last_duplicate_wins_first_slot(self) -> None:
        first = GitLabCI(coverage=True)
        last = GitLabCI(coverage=False)
        t = Template(user="me", plugins=[first, TravisCI(), last])
        assert list(t.plugins) == [GitLabCI, TravisCI]
        assert t.plugins[GitLabCI] is last

    def test_accepts_mapping(self) -> None:
        travis = TravisCI()
        t = Template(user="me", plugins={TravisCI: travis})
        assert t.plugins == {TravisCI: travis}

    def test_subkind_is_distinct(self) -> None:
        from pkgforge.plugins import GitHubPages

        t = Template(user="me", plugins=[Documenter(), GitHubPages()])
        assert list(t.plugins) == [Documenter, GitHubPages]


# =============================================================================
# Accessors
# =============================================================================

class TestTemplateAccessors:
    """Tests for remote_url and describe."""

    def test_https_remote(self) -> None:
        t = Template(user="me", host="gitlab.com")
        assert t.remote_url("pkg") == "https://gitlab.com/me/pkg"

    def test_ssh_remote(self) -> None:
        t = Template(user="me", ssh=True)
        assert t.remote_url("pkg") == "git@github.com:me/pkg.git"

    def test_describe(self, tmp_path: Path) -> None:
        t = Template(user="me", dir=tmp_path, license="", plugins=[TravisCI()])
        text = t.describe()
        assert text.startswith("Template:")
        assert "User: me" in text
        assert "License: None" in text
        assert f"Package directory: {tmp_path}" in text
        assert "TravisCI: Config file: Default, 0 gitignore entries" in text

    def test_describe_without_plugins(self) -> None:
        assert "Plugins: None" in Template(user="me").describe()


# =============================================================================
# Licenses
# =============================================================================

class TestLicenses:
    """Tests for the bundled licenses."""

    def test_every_license_has_text(self) -> None:
        for lic in License:
            assert lic.read_text().strip()

    def test_resolve(self) -> None:
        assert resolve_license("mit") == "MIT"
        assert resolve_license(" ") == ""
        with pytest.raises(ConfigurationError):
            resolve_license("GPL-3.0")

    def test_read_license(self) -> None:
        assert not read_license("MIT").startswith("Copyright")
        assert "Permission is hereby granted" in read_license("mit")

    def test_available_licenses(self) -> None:
        licenses = available_licenses()
        assert licenses["MIT"] == "MIT License"
        assert set(licenses) == {"MIT", "ISC", "BSD-2-Clause", "BSD-3-Clause"}


# =============================================================================
# Package Names
# =============================================================================

class TestPackageNames:
    """Tests for package name validation."""

    def test_strips_py_suffix(self) -> None:
        assert validate_package_name("Foo.py") == "Foo"

    @pytest.mark.parametrize("name", ["my-pkg", "my_pkg", "Pkg2"])
    def test_valid(self, name: str) -> None:
        assert validate_package_name(name) == name

    @pytest.mark.parametrize("name", ["", "2pkg", "my pkg", "pkg!", "class"])
    def test_invalid(self, name: str) -> None:
        with pytest.raises(ConfigurationError):
            validate_package_name(name)

    def test_import_name(self) -> None:
        assert import_name("My-Pkg") == "my_pkg"
