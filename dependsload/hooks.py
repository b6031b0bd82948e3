"""Hook helpers to call from a suite's ``environment.py``.

Under plain ``behave`` these plan the suite without reordering it and skip
scenarios whose dependencies have not passed. Under ``dependsload run`` the
runner drives the same tracking itself and the helpers step aside.

Example::

    from dependsload import hooks

    def before_all(context):
        hooks.before_all(context)

    def before_scenario(context, scenario):
        hooks.before_scenario(context, scenario)

    def after_scenario(context, scenario):
        hooks.after_scenario(context, scenario)
"""

from __future__ import annotations

import logging
from typing import Any

from dependsload.core.config import ConfigLoader
from dependsload.runner import SuiteSession, build_session

logger = logging.getLogger(__name__)

SESSION_ATTRIBUTE = "dependsload"


def get_session(context: Any) -> SuiteSession | None:
    return getattr(context, SESSION_ATTRIBUTE, None)


def before_all(context: Any) -> None:
    """Plan the features behave parsed unless a runner already did."""
    if get_session(context) is not None:
        return

    runner = getattr(context, "_runner", None)
    features = list(getattr(runner, "features", None) or [])
    settings = ConfigLoader().load_suite_config()

    session = build_session(
        features,
        settings,
        services={"config": getattr(context, "config", None), "runner": runner},
    )
    logger.debug("Tracking %d planned scenarios", len(session.plan))
    setattr(context, SESSION_ATTRIBUTE, session)


def before_scenario(context: Any, scenario: Any) -> None:
    """Skip the scenario if a dependency has not passed and bind its context."""
    session = get_session(context)
    if session is None or session.managed:
        return

    session.before_scenario(context, scenario)


def after_scenario(context: Any, scenario: Any) -> None:
    """Record the scenario as passed when behave reports it passed."""
    session = get_session(context)
    if session is None or session.managed:
        return

    session.after_scenario(context, scenario)
