"""Recursive resolution of scenario dependencies into an ordered suite."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from dependsload.core.directives import DependencyDirective, parse_directives
from dependsload.exceptions import CyclicDependencyError, DependencyNotFoundError
from dependsload.loader import DirectoryCache
from dependsload.model import Scenario, titles_match

logger = logging.getLogger(__name__)


@dataclass
class ResolutionState:
    """State of one suite build.

    Attributes
    ----------
    cache : DirectoryCache
        Scenarios of every directory referenced so far
    admitted : set[str]
        Signatures already placed in ``output``
    resolved : set[str]
        Signatures whose directives have been fully resolved
    output : list[Scenario]
        Admission order, dependencies before dependents
    """

    cache: DirectoryCache
    admitted: set[str] = field(default_factory=set)
    resolved: set[str] = field(default_factory=set)
    output: list[Scenario] = field(default_factory=list)

    def is_admitted(self, scenario: Scenario) -> bool:
        return scenario.signature in self.admitted

    def admit(self, scenario: Scenario, groups: Iterable[str] | None = None) -> bool:
        """Append a scenario to the output unless its signature is already there.

        Parameters
        ----------
        scenario : Scenario
            Scenario to admit
        groups : Iterable[str] | None
            Active group filter; replaces the scenario's groups when given

        Returns
        -------
        bool
            True if the scenario was appended
        """
        if scenario.signature in self.admitted:
            return False

        if groups:
            scenario.metadata.set_groups(groups)

        self.output.append(scenario)
        self.admitted.add(scenario.signature)
        logger.debug("Admitted %s", scenario.signature)
        return True


class DependencyResolver:
    """Pull the dependency closure of scenarios into a resolution state.

    Parameters
    ----------
    state : ResolutionState
        Shared state of the current suite build
    groups : Iterable[str] | None
        Active group filter applied to every admitted scenario
    """

    def __init__(self, state: ResolutionState, groups: Iterable[str] | None = None) -> None:
        self.state = state
        self.groups = list(groups) if groups else []

    def resolve(
        self,
        scenario: Scenario,
        directives: list[DependencyDirective],
        services: dict[str, Any] | None = None,
    ) -> None:
        """Admit every dependency of ``scenario`` and then the scenario itself.

        Parameters
        ----------
        scenario : Scenario
            Scenario declaring the directives
        directives : list[DependencyDirective]
            Directives parsed from the scenario's groups
        services : dict[str, Any] | None
            Service bindings propagated to every scenario pulled in

        Raises
        ------
        DirectoryNotFoundError
            If a directive names a missing directory
        DependencyNotFoundError
            If no scenario in the directory matches a directive title
        CyclicDependencyError
            If a directive leads back to a scenario being resolved
        """
        self._resolve(scenario, directives, services, [])

    def _resolve(
        self,
        scenario: Scenario,
        directives: list[DependencyDirective],
        services: dict[str, Any] | None,
        chain: list[str],
    ) -> None:
        chain = chain + [scenario.signature]
        filename = scenario.metadata.filename
        actor = scenario.metadata.current("actor")
        dependencies: list[str] = []

        for directive in directives:
            candidates = self.state.cache.get(directive.directory, filename)
            matches = [
                candidate
                for candidate in candidates
                if titles_match(candidate.signature, directive.scenario_title)
            ]

            if not matches:
                raise DependencyNotFoundError(
                    filename, directive.scenario_title, directive.directory
                )

            for match in matches:
                if match.signature in dependencies:
                    continue

                if match.signature in chain:
                    raise CyclicDependencyError(filename, chain + [match.signature])

                match.preload()
                dependencies.append(match.signature)

                # a match resolves its own dependencies with its own actor
                if match.signature not in self.state.resolved:
                    nested = parse_directives(match.metadata.groups)
                    if nested:
                        self._resolve(match, nested, services, chain)

                if services is not None:
                    match.metadata.set_services(services)
                match.metadata.set_current(actor=actor)

                self.state.admit(match, self.groups)

        scenario.metadata.set_dependencies(dependencies)
        self.state.resolved.add(scenario.signature)
        logger.debug(
            "Resolved %d dependencies for %s", len(dependencies), scenario.signature
        )
        self.state.admit(scenario, self.groups)
