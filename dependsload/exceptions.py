"""Errors raised while building a dependency-ordered suite."""

from __future__ import annotations

from pathlib import Path


class DependsLoadError(Exception):
    """Base class for fatal suite-build errors.

    Parameters
    ----------
    filename : str | Path | None
        Feature file of the scenario whose directive failed
    message : str
        Human-readable description of the problem
    """

    def __init__(self, filename: str | Path | None, message: str) -> None:
        self.filename = str(filename) if filename is not None else None
        self.message = message
        super().__init__(self._compose())

    def _compose(self) -> str:
        if self.filename:
            return f"{self.filename}: {self.message}"
        return self.message


class DirectoryNotFoundError(DependsLoadError):
    """Raised when a directive names a directory missing under the root."""

    def __init__(self, filename: str | Path | None, directory: str) -> None:
        self.directory = directory
        super().__init__(
            filename,
            f'DependsLoad - "{directory}" feature directory name is invalid or not available.\n'
            "Make sure the directory and scenario exists.",
        )


class DependencyNotFoundError(DependsLoadError):
    """Raised when no scenario in the directory matches the directive title."""

    def __init__(self, filename: str | Path | None, title: str, directory: str) -> None:
        self.title = title
        self.directory = directory
        super().__init__(
            filename,
            f'DependsLoad - "{title}" is invalid or not available in specified '
            f'"{directory}" feature directory.\n'
            "Make sure the directory and feature exists.",
        )


class CyclicDependencyError(DependsLoadError):
    """Raised when a directive re-enters a scenario already being resolved."""

    def __init__(self, filename: str | Path | None, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__(
            filename,
            "DependsLoad - circular dependency detected: " + " -> ".join(self.chain),
        )


class FeatureParseError(DependsLoadError):
    """Raised when a feature file cannot be parsed."""
