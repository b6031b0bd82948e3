"""CLI argument parsing and parameter conversion utilities."""

from __future__ import annotations

import shlex
from typing import Any


def parse_group_list(groups: str | list[str] | tuple[str, ...]) -> list[str]:
    """Parse a group option into a list of group names.

    Parameters
    ----------
    groups : str | list[str] | tuple[str, ...]
        Comma-separated string, list, or tuple of group names; a leading
        ``@`` is dropped

    Returns
    -------
    list[str]
        Group names without empty entries
    """
    if isinstance(groups, (list, tuple)):
        items = [str(group) for group in groups]
    else:
        items = str(groups).split(",")

    return [item.strip().lstrip("@") for item in items if item.strip().lstrip("@")]


def parse_behave_args(behave_args: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Split extra behave arguments the way a shell would."""
    if behave_args is None:
        return []

    if isinstance(behave_args, (list, tuple)):
        return [str(arg) for arg in behave_args]

    return shlex.split(str(behave_args))


def apply_cli_overrides(
    config: dict[str, Any],
    path: str | None,
    groups: str | list[str] | tuple[str, ...] | None,
    exclude_groups: str | list[str] | tuple[str, ...] | None,
    title_filter: str | None,
    actor: str | None,
) -> None:
    """Apply CLI option overrides to merged configuration.

    Parameters
    ----------
    config : dict[str, Any]
        Configuration dictionary to modify in-place
    path : str | None
        Features root
    groups : str | list[str] | tuple[str, ...] | None
        Groups to select
    exclude_groups : str | list[str] | tuple[str, ...] | None
        Groups to leave out
    title_filter : str | None
        Regular expression for scenario titles
    actor : str | None
        Default actor
    """
    if path is not None:
        config["path"] = str(path)

    if groups is not None:
        config["groups"] = parse_group_list(groups)

    if exclude_groups is not None:
        config["exclude_groups"] = parse_group_list(exclude_groups)

    if title_filter is not None:
        config["filter"] = str(title_filter)

    if actor is not None:
        config["actor"] = str(actor)


__all__ = [
    "parse_group_list",
    "parse_behave_args",
    "apply_cli_overrides",
]
