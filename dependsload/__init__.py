"""Resolve ``DependsLoad`` scenario dependencies for behave suites."""

from __future__ import annotations

from dependsload.core import (
    DependencyDirective,
    DependencyResolver,
    PassStateTracker,
    ResolutionState,
    SuiteBuilder,
    SuitePlan,
    parse_directives,
)
from dependsload.exceptions import (
    CyclicDependencyError,
    DependencyNotFoundError,
    DependsLoadError,
    DirectoryNotFoundError,
    FeatureParseError,
)
from dependsload.loader import DirectoryCache, FeatureLoader
from dependsload.model import Scenario, ScenarioMetadata

__all__ = [
    "DependencyDirective",
    "DependencyResolver",
    "PassStateTracker",
    "ResolutionState",
    "SuiteBuilder",
    "SuitePlan",
    "parse_directives",
    "CyclicDependencyError",
    "DependencyNotFoundError",
    "DependsLoadError",
    "DirectoryNotFoundError",
    "FeatureParseError",
    "DirectoryCache",
    "FeatureLoader",
    "Scenario",
    "ScenarioMetadata",
]
