"""Load scenarios from feature directories."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from behave.model import ScenarioOutline
from behave.parser import ParserError, parse_file

from dependsload.constants import FEATURE_EXTENSION
from dependsload.exceptions import DirectoryNotFoundError, FeatureParseError
from dependsload.model import Scenario

logger = logging.getLogger(__name__)


class FeatureLoader:
    """Scan feature directories below a root and wrap their scenarios.

    Parameters
    ----------
    root : str | Path
        Directory that directive directory names are relative to
    language : str | None
        Gherkin language passed to the behave parser
    hidden_files : bool
        Whether dot-files and dot-directories are scanned
    """

    def __init__(
        self,
        root: str | Path,
        language: str | None = None,
        hidden_files: bool = False,
    ) -> None:
        self.root = Path(root)
        self.language = language
        self.hidden_files = hidden_files

    def feature_files(self, directory: Path) -> list[Path]:
        """List feature files below a directory in a stable order."""
        files: list[Path] = []

        for current, dirnames, filenames in os.walk(directory):
            if not self.hidden_files:
                dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            dirnames.sort()

            for name in sorted(filenames):
                if not self.hidden_files and name.startswith("."):
                    continue
                if Path(name).suffix.lower() == FEATURE_EXTENSION:
                    files.append(Path(current) / name)

        return files

    def load(self, directory: str, requested_by: str | None = None) -> list[Scenario]:
        """Load every scenario found below ``root / directory``.

        Parameters
        ----------
        directory : str
            Directory name as written in the directive
        requested_by : str | None
            Feature file of the scenario that referenced the directory

        Returns
        -------
        list[Scenario]
            Scenarios in file order, not yet preloaded

        Raises
        ------
        DirectoryNotFoundError
            If the directory does not exist under the root
        FeatureParseError
            If a feature file cannot be parsed
        """
        path = self.root / directory

        if not directory or not path.is_dir():
            raise DirectoryNotFoundError(requested_by, directory)

        scenarios = self._load_tree(path)
        logger.debug("Loaded %d scenarios from %s", len(scenarios), path)
        return scenarios

    def load_all(self) -> list[Scenario]:
        """Load every scenario below the root itself."""
        if not self.root.is_dir():
            raise DirectoryNotFoundError(None, str(self.root))

        return self._load_tree(self.root)

    def _load_tree(self, directory: Path) -> list[Scenario]:
        scenarios: list[Scenario] = []
        for feature_file in self.feature_files(directory):
            scenarios.extend(self.load_file(feature_file))
        return scenarios

    def load_file(self, feature_file: Path) -> list[Scenario]:
        try:
            feature = parse_file(str(feature_file), language=self.language)
        except ParserError as e:
            logger.error("Failed to parse feature file %s: %s", feature_file, e)
            raise FeatureParseError(feature_file, f"Invalid feature file: {e}") from e

        if feature is None:
            return []

        return self.scenarios_from_feature(feature)

    def scenarios_from_feature(self, feature: Any) -> list[Scenario]:
        """Wrap the scenarios of a parsed behave feature.

        Scenario outlines are unrolled into one scenario per example row.
        """
        scenarios: list[Scenario] = []
        feature_tags = list(feature.tags)

        for model in feature.scenarios:
            if isinstance(model, ScenarioOutline):
                for row, generated in enumerate(model.scenarios, start=1):
                    scenarios.append(
                        Scenario(
                            feature.filename,
                            model.name,
                            root=self.root,
                            tags=generated.tags,
                            feature_tags=feature_tags,
                            description=model.description,
                            row=row,
                            model=generated,
                        )
                    )
                continue

            scenarios.append(
                Scenario(
                    feature.filename,
                    model.name,
                    root=self.root,
                    tags=model.tags,
                    feature_tags=feature_tags,
                    description=model.description,
                    model=model,
                )
            )

        return scenarios


class DirectoryCache:
    """Scenarios per directory, each directory scanned at most once per run."""

    def __init__(self, loader: FeatureLoader) -> None:
        self.loader = loader
        self._entries: dict[str, list[Scenario]] = {}

    def __contains__(self, directory: str) -> bool:
        return directory in self._entries

    def get(self, directory: str, requested_by: str | None = None) -> list[Scenario]:
        if directory not in self._entries:
            self._entries[directory] = self.loader.load(directory, requested_by)
        return self._entries[directory]
