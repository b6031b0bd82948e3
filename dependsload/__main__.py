#!/usr/bin/env python3
"""dependsload - dependency-ordered behave suites."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from behave.configuration import Configuration

from dependsload.cli.main import main
from dependsload.cli.parsing import apply_cli_overrides, parse_behave_args
from dependsload.constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE
from dependsload.core.config import ConfigLoader
from dependsload.core.suite import SuiteBuilder, SuitePlan
from dependsload.loader import FeatureLoader
from dependsload.runner import DependsLoadRunner
from dependsload.templates import CONFIG_TEMPLATE

logger = logging.getLogger(__name__)


class DependsLoad:
    """Main CLI interface for dependsload."""

    def __init__(self, config_loader: ConfigLoader | None = None) -> None:
        self._config_loader = config_loader or ConfigLoader()

    def _settings(
        self,
        config: str | None = None,
        path: str | None = None,
        groups: Any = None,
        exclude_groups: Any = None,
        title_filter: str | None = None,
        actor: str | None = None,
    ) -> dict[str, Any]:
        settings = self._config_loader.load_suite_config(config)
        apply_cli_overrides(settings, path, groups, exclude_groups, title_filter, actor)
        self._config_loader.validate_config(settings)
        return settings

    def _build_plan(self, settings: dict[str, Any]) -> SuitePlan:
        loader = FeatureLoader(
            settings["path"],
            language=settings.get("language"),
            hidden_files=bool(settings.get("hidden_files")),
        )
        builder = SuiteBuilder(
            loader,
            groups=settings.get("groups"),
            exclude_groups=settings.get("exclude_groups"),
            title_filter=settings.get("filter"),
            actor=settings.get("actor"),
        )
        return builder.build(loader.load_all())

    def plan(
        self,
        path: str | None = None,
        groups: Any = None,
        exclude_groups: Any = None,
        filter: str | None = None,
        actor: str | None = None,
        config: str | None = None,
        json_output: bool = False,
        verbose: bool = False,
    ) -> str | None:
        """Print the dependency-ordered scenarios of the suite.

        Parameters
        ----------
        path : str | None
            Features root override
        groups : Any
            Comma-separated groups to select
        exclude_groups : Any
            Comma-separated groups to leave out
        filter : str | None
            Regular expression scenario titles must match
        actor : str | None
            Default actor for scenarios without an actor tag
        config : str | None
            Configuration file (default: DEPENDSLOAD_CONFIG or dependsload.yaml)
        json_output : bool
            Return the plan as JSON instead of printing it
        verbose : bool
            Enable debug logging

        Returns
        -------
        str | None
            JSON document when json_output is set
        """
        if verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        settings = self._settings(config, path, groups, exclude_groups, filter, actor)
        suite_plan = self._build_plan(settings)

        if json_output:
            return json.dumps(
                [
                    {
                        "signature": scenario.signature,
                        "dependencies": scenario.metadata.dependencies,
                        "actor": scenario.metadata.current("actor"),
                    }
                    for scenario in suite_plan.scenarios
                ],
                indent=2,
            )

        for index, scenario in enumerate(suite_plan.scenarios, start=1):
            logger.info("%3d. %s", index, scenario.signature, extra={"stream": "stdout"})
            for dependency in scenario.metadata.dependencies:
                logger.info("       after %s", dependency, extra={"stream": "stdout"})

        return None

    def run(
        self,
        behave_args: Any = None,
        path: str | None = None,
        groups: Any = None,
        exclude_groups: Any = None,
        filter: str | None = None,
        actor: str | None = None,
        config: str | None = None,
        verbose: bool = False,
    ) -> int:
        """Run the suite with behave in dependency order.

        Parameters
        ----------
        behave_args : Any
            Extra behave command line arguments, as one string. Pass them as
            ``--behave-args="-f plain"`` so fire keeps the dashes inside the value
        path : str | None
            Features root override
        groups : Any
            Comma-separated groups to select
        exclude_groups : Any
            Comma-separated groups to leave out
        filter : str | None
            Regular expression scenario titles must match
        actor : str | None
            Default actor for scenarios without an actor tag
        config : str | None
            Configuration file
        verbose : bool
            Enable debug logging

        Returns
        -------
        int
            0 when the run passed, 1 otherwise
        """
        if verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        settings = self._settings(config, path, groups, exclude_groups, filter, actor)
        behave_config = Configuration(parse_behave_args(behave_args))

        if not behave_config.paths:
            behave_config.paths = [settings["path"]]

        if not behave_config.format:
            behave_config.format = [behave_config.default_format]

        runner = DependsLoadRunner(behave_config, settings=settings)
        failed = runner.run()

        return 1 if failed else 0

    def init(self, force: bool = False) -> None:
        """Create a default dependsload.yaml configuration file."""
        config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)
        config_file = Path(config_path)

        if config_file.exists() and not force:
            logger.error("%s already exists. Use --force to overwrite.", config_path)
            sys.exit(1)

        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, "w") as f:
            f.write(CONFIG_TEMPLATE)

        logger.info("Created %s configuration file.", config_path, extra={"stream": "stdout"})


if __name__ == "__main__":
    main()
