"""
pkgforge test suite
===================

This package contains tests for pkgforge.

Test Modules
------------
- test_substitution.py: Rendering, Template-derived flags, version floors
- test_models.py: Template model, licenses and package names
- test_plugins.py: Plugin kinds and their interactive construction
- test_interactive.py: Prompt-driven Template construction
- test_generator.py: Package generation pipeline and rollback
- test_git.py: Git repository wrapper
- test_package_manager.py: uv command lines and project switching
- test_cli.py: Command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_generator.py

    # Run specific test class
    pytest tests/test_generator.py::TestRollback
"""
