"""Extraction of ``DependsLoad`` directives from scenario tags."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from dependsload.constants import DIRECTIVE_PATTERN


@dataclass(frozen=True)
class DependencyDirective:
    """Reference to a scenario title inside a feature directory."""

    directory: str
    scenario_title: str

    def __str__(self) -> str:
        return f"{self.directory}:{self.scenario_title}"


def parse_directives(tags: Iterable[str]) -> list[DependencyDirective]:
    """Parse dependency directives out of a scenario's tags.

    Repeated identical tags are considered once. Tags that do not match the
    directive pattern are ordinary tags and are ignored.

    Parameters
    ----------
    tags : Iterable[str]
        Raw tag and annotation strings of a scenario

    Returns
    -------
    list[DependencyDirective]
        Directives in the order their tags appear
    """
    directives: list[DependencyDirective] = []

    for tag in dict.fromkeys(tags):
        for match in DIRECTIVE_PATTERN.finditer(tag):
            directives.append(
                DependencyDirective(
                    directory=match.group(1),
                    scenario_title=match.group(2).strip(),
                )
            )

    return directives
