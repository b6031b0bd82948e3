"""Build the dependency-ordered scenario list of a suite run."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from dependsload.core.directives import parse_directives
from dependsload.core.resolver import DependencyResolver, ResolutionState
from dependsload.loader import DirectoryCache, FeatureLoader
from dependsload.model import Scenario

logger = logging.getLogger(__name__)


@dataclass
class SuitePlan:
    """Finalized, deduplicated and dependency-ordered scenarios."""

    scenarios: list[Scenario] = field(default_factory=list)

    @property
    def signatures(self) -> list[str]:
        return [scenario.signature for scenario in self.scenarios]

    def __len__(self) -> int:
        return len(self.scenarios)


class SuiteBuilder:
    """Select candidate scenarios and resolve their dependency closures.

    Parameters
    ----------
    loader : FeatureLoader
        Loader used for directories referenced by directives
    groups : Iterable[str] | None
        Only scenarios carrying one of these groups are candidates
    exclude_groups : Iterable[str] | None
        Scenarios carrying one of these groups are not candidates
    title_filter : str | None
        Regular expression a candidate title must match
    services : dict[str, Any] | None
        Service bindings added to every candidate
    actor : str | None
        Actor for candidates that do not name one
    """

    def __init__(
        self,
        loader: FeatureLoader,
        groups: Iterable[str] | None = None,
        exclude_groups: Iterable[str] | None = None,
        title_filter: str | None = None,
        services: dict[str, Any] | None = None,
        actor: str | None = None,
    ) -> None:
        self.loader = loader
        self.groups = list(groups) if groups else []
        self.exclude_groups = list(exclude_groups) if exclude_groups else []
        self.title_filter = re.compile(title_filter) if title_filter else None
        self.services = dict(services) if services else {}
        self.actor = actor

    def is_candidate(self, scenario: Scenario) -> bool:
        groups = scenario.metadata.groups

        if self.groups and not set(self.groups) & set(groups):
            return False

        if self.exclude_groups and set(self.exclude_groups) & set(groups):
            return False

        if self.title_filter and not self.title_filter.search(scenario.title):
            return False

        return True

    def build(self, scenarios: Iterable[Scenario]) -> SuitePlan:
        """Resolve every candidate scenario into one ordered plan.

        Parameters
        ----------
        scenarios : Iterable[Scenario]
            Scenarios of the suite, in collection order

        Returns
        -------
        SuitePlan
            Dependencies precede dependents, every signature appears once
        """
        state = ResolutionState(cache=DirectoryCache(self.loader))
        resolver = DependencyResolver(state, groups=self.groups)
        candidates = 0

        for scenario in scenarios:
            scenario.preload()

            if not self.is_candidate(scenario):
                continue

            candidates += 1

            if state.is_admitted(scenario):
                logger.debug("%s already admitted as a dependency", scenario.signature)
                continue

            services = scenario.metadata.services
            services.update(self.services)
            scenario.metadata.set_services(services)

            if scenario.metadata.current("actor") is None and self.actor is not None:
                scenario.metadata.set_current(actor=self.actor)

            directives = parse_directives(scenario.metadata.groups)

            if directives:
                resolver.resolve(scenario, directives, services=services)
            else:
                state.admit(scenario, self.groups)

        logger.debug(
            "Planned %d scenarios from %d candidates", len(state.output), candidates
        )
        return SuitePlan(scenarios=state.output)
