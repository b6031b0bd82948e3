"""Skip scenarios whose dependencies have not passed in this run."""

from __future__ import annotations

import logging
from typing import Any

from dependsload.constants import SKIP_MESSAGE
from dependsload.model import Scenario

logger = logging.getLogger(__name__)


class PassStateTracker:
    """Track successful scenarios and skip dependents of unmet ones.

    The tracker is driven by the runner's sequential event dispatch: test
    start hooks read ``successful``, test success hooks append to it.
    """

    def __init__(self) -> None:
        self.successful: dict[str, None] = {}

    def unmet_dependencies(self, scenario: Scenario) -> list[str]:
        return [
            signature
            for signature in scenario.metadata.dependencies
            if signature not in self.successful
        ]

    def on_test_start(self, scenario: Any) -> None:
        """Skip the scenario if any recorded dependency has not succeeded."""
        if not isinstance(scenario, Scenario):
            return

        unmet = self.unmet_dependencies(scenario)
        if not unmet:
            return

        reason = SKIP_MESSAGE.format(signature=unmet[0])
        logger.info("Skipping %s: %s", scenario.signature, reason)
        scenario.skip(reason)

    def on_test_success(self, scenario: Any) -> None:
        """Record the scenario as passed for the rest of the run."""
        if not isinstance(scenario, Scenario):
            return

        self.successful[scenario.signature] = None
        logger.debug("Recorded success of %s", scenario.signature)
