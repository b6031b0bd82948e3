"""Scenario records shared by the resolver and the pass-state tracker."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path, PurePath
from typing import Any

from dependsload.constants import (
    ACTOR_TAG_PREFIX,
    DIRECTIVE_KEYWORD,
    SIGNATURE_ROW_SEPARATOR,
)


def relative_location(filename: str | Path, root: str | Path | None) -> PurePath:
    """Return the feature file location relative to the root when possible.

    Parameters
    ----------
    filename : str | Path
        Feature file path
    root : str | Path | None
        Configured features root

    Returns
    -------
    PurePath
        Path relative to root, or the path as given when it lies outside root
    """
    path = Path(filename)

    if root is None:
        return path

    root_path = Path(root)

    for candidate, base in ((path, root_path), (path.resolve(), root_path.resolve())):
        try:
            return candidate.relative_to(base)
        except ValueError:
            continue

    return path


def build_signature(
    filename: str | Path,
    title: str,
    root: str | Path | None = None,
    row: int | None = None,
) -> str:
    """Build the deterministic signature of a scenario.

    Parameters
    ----------
    filename : str | Path
        Feature file containing the scenario
    title : str
        Scenario title
    root : str | Path | None
        Features root the location is made relative to
    row : int | None
        1-based example row for scenarios unrolled from an outline

    Returns
    -------
    str
        ``<location>:<title>`` with an optional ``|<row>`` suffix
    """
    signature = f"{relative_location(filename, root).as_posix()}:{title}"

    if row is not None:
        signature = f"{signature}{SIGNATURE_ROW_SEPARATOR}{row}"

    return signature


def comparable_title(signature: str) -> str:
    """Extract the title portion of a signature used for directive matching."""
    head = signature.split(SIGNATURE_ROW_SEPARATOR, 1)[0]
    parts = head.split(":", 1)

    if len(parts) < 2:
        return ""

    return parts[1].strip()


def titles_match(signature: str, title: str) -> bool:
    return comparable_title(signature).casefold() == title.strip().casefold()


class ScenarioMetadata:
    """Mutable metadata owned by a single scenario.

    Parameters
    ----------
    filename : str
        Feature file the scenario was loaded from
    """

    def __init__(self, filename: str) -> None:
        self._filename = filename
        self._groups: list[str] = []
        self._dependencies: list[str] = []
        self._services: dict[str, Any] = {}
        self._current: dict[str, Any] = {}
        self._skip: str | None = None

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def groups(self) -> list[str]:
        return list(self._groups)

    def set_groups(self, groups: Iterable[str]) -> None:
        self._groups = list(groups)

    @property
    def dependencies(self) -> list[str]:
        return list(self._dependencies)

    def set_dependencies(self, dependencies: Iterable[str]) -> None:
        self._dependencies = list(dependencies)

    @property
    def services(self) -> dict[str, Any]:
        return dict(self._services)

    def service(self, name: str) -> Any:
        return self._services.get(name)

    def set_services(self, services: dict[str, Any]) -> None:
        self._services = dict(services)

    def current(self, key: str) -> Any:
        return self._current.get(key)

    def set_current(self, **values: Any) -> None:
        self._current.update(values)

    @property
    def skip(self) -> str | None:
        return self._skip

    def set_skip(self, reason: str) -> None:
        self._skip = reason


class Scenario:
    """One runnable scenario together with its dependency metadata.

    Parameters
    ----------
    filename : str | Path
        Feature file the scenario comes from
    title : str
        Scenario title (the outline name for unrolled example rows)
    root : str | Path | None
        Features root used for the signature and directory
    tags : Iterable[str]
        Scenario-level tags without the leading ``@``
    feature_tags : Iterable[str]
        Tags inherited from the feature
    description : Iterable[str]
        Scenario description lines
    row : int | None
        Example row for unrolled outlines
    model : Any
        Wrapped behave scenario, if any
    """

    def __init__(
        self,
        filename: str | Path,
        title: str,
        root: str | Path | None = None,
        tags: Iterable[str] = (),
        feature_tags: Iterable[str] = (),
        description: Iterable[str] = (),
        row: int | None = None,
        model: Any = None,
    ) -> None:
        self.title = title
        self.row = row
        self.model = model
        self.signature = build_signature(filename, title, root, row)
        self.directory = relative_location(filename, root).parent.parts
        self.metadata = ScenarioMetadata(str(filename))
        self._tags = [str(tag) for tag in tags]
        self._feature_tags = [str(tag) for tag in feature_tags]
        self._description = [str(line) for line in description]
        self._preloaded = False

    @property
    def preloaded(self) -> bool:
        return self._preloaded

    def preload(self) -> None:
        """Fill groups and actor from tags and directive description lines."""
        if self._preloaded:
            return

        groups: list[str] = []
        for tag in self._feature_tags + self._tags:
            if tag not in groups:
                groups.append(tag)

        keyword = DIRECTIVE_KEYWORD.casefold()
        for line in self._description:
            line = line.strip()
            if line.casefold().startswith(keyword) and line not in groups:
                groups.append(line)

        self.metadata.set_groups(groups)

        for tag in self._tags:
            if tag.startswith(ACTOR_TAG_PREFIX):
                self.metadata.set_current(actor=tag[len(ACTOR_TAG_PREFIX):])
                break

        self._preloaded = True

    def skip(self, reason: str) -> None:
        """Mark the scenario skipped, forwarding to the behave model."""
        self.metadata.set_skip(reason)

        if self.model is not None:
            self.model.skip(reason)

    def __repr__(self) -> str:
        return f"Scenario({self.signature!r})"
