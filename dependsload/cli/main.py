"""CLI entry point for dependsload."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import fire

from dependsload.constants import DEBUG_ENV_VAR
from dependsload.exceptions import (
    CyclicDependencyError,
    DependencyNotFoundError,
    DependsLoadError,
    DirectoryNotFoundError,
)
from dependsload.logging import StreamFormatter, StreamRoutingFilter


def get_dependsload_base_class() -> type:
    """Get DependsLoad base class on-demand to avoid circular imports.

    Returns
    -------
    type
        DependsLoad base class
    """
    from dependsload.__main__ import DependsLoad

    return DependsLoad


class DependsLoadCLI:
    """CLI wrapper that turns run results into process exit codes.

    This is defined as a factory that creates a subclass of DependsLoad
    at runtime to avoid circular import issues.
    """

    _cached_class: type | None = None

    def __new__(cls) -> Any:
        if cls._cached_class is None:
            DependsLoad = get_dependsload_base_class()

            class DependsLoadCLIImpl(DependsLoad):
                """CLI wrapper implementation for DependsLoad."""

                def run(self, *args: Any, **kwargs: Any) -> None:
                    """Run the suite with behave and exit with its status."""
                    sys.exit(super().run(*args, **kwargs))

            cls._cached_class = DependsLoadCLIImpl

        return cls._cached_class()


def handle_resolution_error(error: DependsLoadError, debug_mode: bool) -> None:
    """Handle a fatal suite-build error.

    Parameters
    ----------
    error : DependsLoadError
        The error raised while resolving dependencies
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    DependsLoadError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"{error}\n", file=sys.stderr)

    if isinstance(error, DirectoryNotFoundError):
        print("Directive directories are resolved relative to `path` in", file=sys.stderr)
        print("dependsload.yaml (or --path).", file=sys.stderr)
    elif isinstance(error, DependencyNotFoundError):
        print("Scenario titles are compared case-insensitively and may only", file=sys.stderr)
        print("contain letters, digits, underscores, spaces and quotes.", file=sys.stderr)
    elif isinstance(error, CyclicDependencyError):
        print("Remove one of the DependsLoad directives in the chain.", file=sys.stderr)

    sys.exit(1)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    """Handle configuration error.

    Parameters
    ----------
    error : ValueError
        The value error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ValueError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Configuration error: {error}", file=sys.stderr)
    sys.exit(2)


def setup_logging() -> None:
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(StreamFormatter("%(message)s"))
    stdout_handler.addFilter(StreamRoutingFilter("stdout"))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(StreamFormatter("%(message)s"))
    stderr_handler.addFilter(StreamRoutingFilter("stderr"))

    logging.basicConfig(
        level=logging.INFO,
        handlers=[stdout_handler, stderr_handler],
    )


def main() -> None:
    """Entry point for Fire CLI with graceful error handling.

    Notes
    -----
    Fire maps the methods of DependsLoad to the ``plan``, ``run`` and ``init``
    commands and handles argument parsing and help text.
    """
    setup_logging()

    debug_mode = os.environ.get(DEBUG_ENV_VAR) == "1"

    try:
        fire.Fire(DependsLoadCLI())
    except DependsLoadError as e:
        handle_resolution_error(e, debug_mode)
    except ValueError as e:
        handle_value_error(e, debug_mode)
