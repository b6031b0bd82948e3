"""behave runner that executes scenarios in dependency order."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from behave.model import Feature
from behave.model_core import Status
from behave.runner import Context, Runner

from dependsload.core.config import ConfigLoader
from dependsload.core.suite import SuiteBuilder, SuitePlan
from dependsload.core.tracker import PassStateTracker
from dependsload.loader import FeatureLoader
from dependsload.model import Scenario

logger = logging.getLogger(__name__)


class SuiteSession:
    """Planned scenarios of one run and the tracker that guards them.

    Parameters
    ----------
    plan : SuitePlan
        Ordered scenarios of the run
    tracker : PassStateTracker | None
        Pass-state tracker, a fresh one when None
    scenarios : Iterable[Scenario]
        Other wrappers of planned scenarios, e.g. the runner's own copy of a
        scenario that was planned from its dependency directory
    """

    def __init__(
        self,
        plan: SuitePlan,
        tracker: PassStateTracker | None = None,
        scenarios: Iterable[Scenario] = (),
    ) -> None:
        self.plan = plan
        self.tracker = tracker or PassStateTracker()
        # set when DependsLoadRunner drives the scenario hooks itself
        self.managed = False
        self._index = {
            id(scenario.model): scenario
            for scenario in plan.scenarios
            if scenario.model is not None
        }
        planned = {scenario.signature: scenario for scenario in plan.scenarios}

        for scenario in scenarios:
            source = planned.get(scenario.signature)
            if source is None or scenario.model is None or id(scenario.model) in self._index:
                continue

            scenario.metadata.set_dependencies(source.metadata.dependencies)
            scenario.metadata.set_services(source.metadata.services)
            scenario.metadata.set_current(actor=source.metadata.current("actor"))
            self._index[id(scenario.model)] = scenario

    def scenario_for(self, model: Any) -> Scenario | None:
        return self._index.get(id(model))

    def on_test_start(self, model: Any) -> Scenario | None:
        scenario = self.scenario_for(model)
        self.tracker.on_test_start(scenario)
        return scenario

    def on_test_success(self, model: Any) -> None:
        self.tracker.on_test_success(self.scenario_for(model))

    def before_scenario(self, context: Any, model: Any) -> None:
        """Skip the scenario if a dependency has not passed and bind its context."""
        scenario = self.on_test_start(model)
        if scenario is None:
            return

        context.actor = scenario.metadata.current("actor")
        context.services = scenario.metadata.services

    def after_scenario(self, context: Any, model: Any) -> None:
        """Record the scenario as passed when behave reports it passed."""
        if model.status == Status.passed:
            self.on_test_success(model)


def chain_hooks(
    first: Callable[..., Any], second: Callable[..., Any] | None
) -> Callable[..., Any]:
    """Return a behave hook calling ``first`` and then ``second``."""

    def hook(context: Any, *args: Any) -> None:
        first(context, *args)
        if second is not None:
            second(context, *args)

    return hook


def plan_features(
    features: Iterable[Any],
    settings: dict[str, Any],
    services: dict[str, Any] | None = None,
) -> tuple[SuitePlan, list[Scenario]]:
    """Build the suite plan of already parsed behave features.

    Parameters
    ----------
    features : Iterable[Any]
        Parsed behave features
    settings : dict[str, Any]
        Suite configuration
    services : dict[str, Any] | None
        Service bindings for every candidate

    Returns
    -------
    tuple[SuitePlan, list[Scenario]]
        The plan and the wrappers of every scenario in ``features``
    """
    loader = FeatureLoader(
        settings["path"],
        language=settings.get("language"),
        hidden_files=bool(settings.get("hidden_files")),
    )
    scenarios = [
        scenario
        for feature in features
        for scenario in loader.scenarios_from_feature(feature)
    ]
    builder = SuiteBuilder(
        loader,
        groups=settings.get("groups"),
        exclude_groups=settings.get("exclude_groups"),
        title_filter=settings.get("filter"),
        services=services,
        actor=settings.get("actor"),
    )
    return builder.build(scenarios), scenarios


def build_session(
    features: Iterable[Any],
    settings: dict[str, Any],
    services: dict[str, Any] | None = None,
) -> SuiteSession:
    """Plan ``features`` without reordering them and track the run."""
    plan, scenarios = plan_features(features, settings, services)
    return SuiteSession(plan, scenarios=scenarios)


def regroup_features(scenarios: Iterable[Scenario]) -> list[Feature]:
    """Wrap planned scenarios into behave features, preserving plan order.

    Consecutive scenarios from the same source feature share one feature
    copy; a feature whose scenarios are split by the plan appears once per run
    of consecutive scenarios.

    Parameters
    ----------
    scenarios : Iterable[Scenario]
        Planned scenarios wrapping behave models

    Returns
    -------
    list[Feature]
        Features to hand to the behave model runner
    """
    features: list[Feature] = []
    current_source = None

    for scenario in scenarios:
        model = scenario.model
        if model is None or getattr(model, "feature", None) is None:
            logger.warning("Cannot run %s without a behave feature", scenario.signature)
            continue

        source = model.feature
        if source is not current_source:
            features.append(
                Feature(
                    source.filename,
                    source.line,
                    source.keyword,
                    source.name,
                    tags=list(source.tags),
                    description=list(source.description or []),
                    background=source.background,
                    language=source.language,
                )
            )
            current_source = source

        features[-1].add_scenario(model)

    return features


class DependsLoadRunner(Runner):
    """behave runner that pulls in and orders scenario dependencies.

    Parameters
    ----------
    config : behave.configuration.Configuration
        behave configuration
    settings : dict[str, Any] | None
        Suite configuration; loaded with ConfigLoader when None
    """

    def __init__(self, config: Any, settings: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self.settings = settings if settings is not None else ConfigLoader().load_suite_config()
        self.session: SuiteSession | None = None

    def build_plan(self, features: Iterable[Any]) -> SuitePlan:
        plan, _ = plan_features(
            features, self.settings, services={"config": self.config, "runner": self}
        )
        return plan

    def install_session_hooks(self) -> None:
        """Drive the session from behave's scenario hooks, ahead of the user's."""
        for name, tracked in (
            ("before_scenario", self.session.before_scenario),
            ("after_scenario", self.session.after_scenario),
        ):
            self.hooks[name] = chain_hooks(tracked, self.hooks.get(name))

    def run_model(self, features: Any = None) -> bool:
        if features is None:
            features = self.features

        plan = self.build_plan(features)
        self.session = SuiteSession(plan)
        self.session.managed = True
        self.install_session_hooks()

        if self.context is None:
            self.context = Context(self)
        self.context.dependsload = self.session

        return super().run_model(regroup_features(plan.scenarios))
