from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from behave.model_core import Status
from behave.parser import parse_file

from dependsload import hooks
from dependsload.core.suite import SuitePlan
from dependsload.loader import FeatureLoader
from dependsload.runner import SuiteSession

LOGIN_FEATURE = """
Feature: Login

  Scenario: Log in as admin
    DependsLoad setup:Create Admin User
    Given a step
"""


def planned_session(loader: FeatureLoader) -> tuple[SuiteSession, list]:
    base, admin = loader.load("setup")
    base.metadata.set_current(actor="admin")
    base.metadata.set_services({"config": "cfg"})
    admin.metadata.set_dependencies([base.signature])
    admin.model.skip = MagicMock()
    return SuiteSession(SuitePlan(scenarios=[base, admin])), [base, admin]


def test_before_all_plans_the_parsed_features(
    features_root: Path,
    setup_features: Path,
    write_feature: Callable[[str, str], Path],
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    login = write_feature("login/login.feature", LOGIN_FEATURE)
    config_file = tmp_path / "dependsload.yaml"
    config_file.write_text(f"path: {features_root.name}\n")
    monkeypatch.setenv("DEPENDSLOAD_CONFIG", str(config_file))
    features = [parse_file(str(login)), parse_file(str(setup_features))]
    context = SimpleNamespace(_runner=SimpleNamespace(features=features), config=None)

    hooks.before_all(context)

    session = hooks.get_session(context)
    assert session.plan.signatures == [
        "setup/users.feature:Create Base User",
        "setup/users.feature:Create Admin User",
        "login/login.feature:Log in as admin",
    ]

    base, admin = features[1].scenarios
    base.set_status(Status.failed)
    hooks.after_scenario(context, base)
    hooks.before_scenario(context, admin)

    assert admin.should_skip
    assert admin.skip_reason == (
        "This test depends on setup/users.feature:Create Base User to pass"
    )


def test_before_all_without_features(
    features_root: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_file = tmp_path / "dependsload.yaml"
    config_file.write_text(f"path: {features_root.name}\n")
    monkeypatch.setenv("DEPENDSLOAD_CONFIG", str(config_file))
    context = SimpleNamespace()

    hooks.before_all(context)

    assert len(hooks.get_session(context).plan) == 0


def test_before_all_keeps_existing_session() -> None:
    session = SuiteSession(SuitePlan())
    context = SimpleNamespace(dependsload=session)

    hooks.before_all(context)

    assert context.dependsload is session


def test_before_scenario_binds_actor_and_services(loader, setup_features) -> None:
    session, (base, _) = planned_session(loader)
    context = SimpleNamespace(dependsload=session)

    hooks.before_scenario(context, base.model)

    assert context.actor == "admin"
    assert context.services == {"config": "cfg"}


def test_before_scenario_skips_unmet_dependents(loader, setup_features) -> None:
    session, (base, admin) = planned_session(loader)
    context = SimpleNamespace(dependsload=session)

    hooks.before_scenario(context, admin.model)

    admin.model.skip.assert_called_once_with(
        f"This test depends on {base.signature} to pass"
    )


def test_passed_dependency_lets_dependent_run(loader, setup_features) -> None:
    session, (base, admin) = planned_session(loader)
    context = SimpleNamespace(dependsload=session)
    base.model.set_status(Status.passed)

    hooks.after_scenario(context, base.model)
    hooks.before_scenario(context, admin.model)

    admin.model.skip.assert_not_called()


def test_failed_dependency_is_not_recorded(loader, setup_features) -> None:
    session, (base, _) = planned_session(loader)
    context = SimpleNamespace(dependsload=session)
    base.model.set_status(Status.failed)

    hooks.after_scenario(context, base.model)

    assert session.tracker.successful == {}


def test_hooks_without_session_do_nothing() -> None:
    context = SimpleNamespace()
    scenario = MagicMock(status=Status.passed)

    hooks.before_scenario(context, scenario)
    hooks.after_scenario(context, scenario)

    scenario.skip.assert_not_called()
    assert not hasattr(context, "actor")


def test_hooks_step_aside_for_a_managed_session(loader, setup_features) -> None:
    session, (base, admin) = planned_session(loader)
    session.managed = True
    context = SimpleNamespace(dependsload=session)
    base.model.set_status(Status.passed)

    hooks.after_scenario(context, base.model)
    hooks.before_scenario(context, admin.model)

    assert session.tracker.successful == {}
    admin.model.skip.assert_not_called()
