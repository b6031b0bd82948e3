import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from dependsload.core.suite import SuiteBuilder, SuitePlan
from dependsload.exceptions import DependencyNotFoundError
from dependsload.loader import FeatureLoader

BASE_USER = "setup/users.feature:Create Base User"
ADMIN_USER = "setup/users.feature:Create Admin User"


@pytest.fixture
def suite_features(
    setup_features: Path, write_feature: Callable[[str, str], Path]
) -> None:
    write_feature(
        "login/login.feature",
        """
        Feature: Login

          @smoke
          Scenario: Log in as admin
            DependsLoad setup:Create Admin User
            Given the admin exists
            When the admin logs in
            Then the dashboard is shown

          @smoke @slow
          Scenario: Log in as base user
            DependsLoad setup:Create Base User
            Given the base user exists
            When the base user logs in
            Then the dashboard is shown

          Scenario: Reset password
            Given a step
        """,
    )


def build(loader: FeatureLoader, **kwargs) -> SuitePlan:
    return SuiteBuilder(loader, **kwargs).build(loader.load_all())


def assert_topological(plan: SuitePlan) -> None:
    positions = {signature: index for index, signature in enumerate(plan.signatures)}
    for scenario in plan.scenarios:
        for dependency in scenario.metadata.dependencies:
            assert positions[dependency] < positions[scenario.signature]


class TestSuiteBuilder:
    def test_full_suite_order(self, loader: FeatureLoader, suite_features: None) -> None:
        plan = build(loader)

        assert plan.signatures == [
            BASE_USER,
            ADMIN_USER,
            "login/login.feature:Log in as admin",
            "login/login.feature:Log in as base user",
            "login/login.feature:Reset password",
        ]
        assert len(plan) == 5
        assert_topological(plan)

    def test_no_duplicates(self, loader: FeatureLoader, suite_features: None) -> None:
        plan = build(loader)

        assert len(plan.signatures) == len(set(plan.signatures))

    def test_resolution_is_deterministic(
        self, loader: FeatureLoader, suite_features: None
    ) -> None:
        assert build(loader).signatures == build(loader).signatures

    def test_group_filter_pulls_in_dependencies(
        self, loader: FeatureLoader, suite_features: None
    ) -> None:
        plan = build(loader, groups=["slow"])

        assert plan.signatures == [BASE_USER, "login/login.feature:Log in as base user"]
        assert all(s.metadata.groups == ["slow"] for s in plan.scenarios)

    def test_exclude_groups(self, loader: FeatureLoader, suite_features: None) -> None:
        plan = build(loader, groups=["smoke"], exclude_groups=["slow"])

        assert plan.signatures == [
            BASE_USER,
            ADMIN_USER,
            "login/login.feature:Log in as admin",
        ]

    def test_title_filter_applies_to_candidates_only(
        self, loader: FeatureLoader, suite_features: None
    ) -> None:
        plan = build(loader, title_filter="^Log in as admin$")

        assert plan.signatures == [
            BASE_USER,
            ADMIN_USER,
            "login/login.feature:Log in as admin",
        ]

    def test_default_actor_and_services(
        self, loader: FeatureLoader, suite_features: None
    ) -> None:
        plan = build(loader, actor="tester", services={"config": "cfg"}, title_filter="admin")

        actors = {s.signature: s.metadata.current("actor") for s in plan.scenarios}
        assert actors == {
            BASE_USER: None,
            ADMIN_USER: "tester",
            "login/login.feature:Log in as admin": "tester",
        }
        for scenario in plan.scenarios:
            assert scenario.metadata.service("config") == "cfg"

    def test_fresh_state_per_build(self, loader: FeatureLoader, suite_features: None) -> None:
        builder = SuiteBuilder(loader)

        first = builder.build(loader.load_all())
        second = builder.build(loader.load_all())

        assert first.signatures == second.signatures

    def test_missing_dependency_aborts_build(
        self, loader: FeatureLoader, write_feature: Callable[[str, str], Path]
    ) -> None:
        write_feature(
            "e/e.feature",
            """
            Feature: E

              Scenario: E
                DependsLoad e:Missing Title
                Given a step
            """,
        )

        with pytest.raises(DependencyNotFoundError):
            build(loader)

    def test_summary_is_a_debug_message(
        self,
        loader: FeatureLoader,
        suite_features: None,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="dependsload"):
            build(loader)

        assert "Planned" not in caplog.text

        with caplog.at_level(logging.DEBUG, logger="dependsload"):
            build(loader)

        assert "Planned 5 scenarios from 5 candidates" in caplog.text
