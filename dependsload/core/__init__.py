"""Core dependency resolution functionality."""

from __future__ import annotations

from dependsload.core.directives import DependencyDirective, parse_directives
from dependsload.core.resolver import DependencyResolver, ResolutionState
from dependsload.core.suite import SuiteBuilder, SuitePlan
from dependsload.core.tracker import PassStateTracker

__all__ = [
    "DependencyDirective",
    "parse_directives",
    "DependencyResolver",
    "ResolutionState",
    "SuiteBuilder",
    "SuitePlan",
    "PassStateTracker",
]
