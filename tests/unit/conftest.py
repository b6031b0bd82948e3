"""Pytest configuration and fixtures for dependsload tests."""

import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

tests_root = Path(__file__).parent.parent
if str(tests_root) not in sys.path:
    sys.path.insert(0, str(tests_root))

from dependsload.loader import FeatureLoader  # noqa: E402


@pytest.fixture
def features_root(tmp_path: Path) -> Path:
    """Create an empty features root directory.

    Returns
    -------
    Path
        Directory that directive directories are resolved against
    """
    root = tmp_path / "features"
    root.mkdir()
    return root


@pytest.fixture
def write_feature(features_root: Path) -> Callable[[str, str], Path]:
    """Write a feature file below the features root.

    Returns
    -------
    Callable[[str, str], Path]
        Function taking a path relative to the root and the Gherkin text
    """

    def _write(relative_path: str, content: str) -> Path:
        feature_file = features_root / relative_path
        feature_file.parent.mkdir(parents=True, exist_ok=True)
        feature_file.write_text(textwrap.dedent(content).lstrip())
        return feature_file

    return _write


@pytest.fixture
def loader(features_root: Path) -> FeatureLoader:
    return FeatureLoader(features_root)


@pytest.fixture
def setup_features(write_feature: Callable[[str, str], Path]) -> Path:
    """Write the shared ``setup`` directory used by most resolver tests."""
    return write_feature(
        "setup/users.feature",
        """
        Feature: Users

          Scenario: Create Base User
            Given an empty user table
            When I create the base user
            Then the base user exists

          Scenario: Create Admin User
            DependsLoad setup:Create Base User
            Given the base user exists
            When I promote the base user
            Then an admin exists
        """,
    )
