"""CLI argument parsing and handling."""

from __future__ import annotations

from dependsload.cli.parsing import (
    apply_cli_overrides,
    parse_behave_args,
    parse_group_list,
)

__all__ = [
    "apply_cli_overrides",
    "parse_behave_args",
    "parse_group_list",
]
