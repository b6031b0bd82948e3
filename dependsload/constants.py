"""Global constants for dependsload.

This module contains the values shared between the directive parser, the
loader, the configuration layer and the CLI.
"""

import re

DIRECTIVE_KEYWORD = "DependsLoad"
"""Literal marker that introduces a dependency directive."""

DIRECTIVE_PATTERN = re.compile(
    r'^(?:DependsLoad)(?:\s)+([\w]*):([\w\s"]*)$',
    re.IGNORECASE | re.DOTALL | re.MULTILINE,
)
"""Pattern for ``DependsLoad <dir>:<scenario title>``.

Anchored per line, so one tag may carry several directives.

Group 1 is the bare-word directory, group 2 the scenario title. Titles may
only contain word characters, whitespace and double quotes.
"""

FEATURE_EXTENSION = ".feature"
"""Feature file suffix, matched case-insensitively."""

ACTOR_TAG_PREFIX = "actor:"
"""Scenario tag prefix selecting the acting persona, e.g. ``@actor:admin``."""

SIGNATURE_ROW_SEPARATOR = "|"
"""Separates a signature from the example row of an unrolled outline."""

SKIP_MESSAGE = "This test depends on {signature} to pass"
"""Skip reason used when a recorded dependency has not succeeded yet."""

CONFIG_ENV_VAR = "DEPENDSLOAD_CONFIG"
"""Environment variable pointing at an alternative configuration file."""

DEFAULT_CONFIG_FILE = "dependsload.yaml"
"""Configuration file looked up in the working directory."""

DEBUG_ENV_VAR = "DEPENDSLOAD_DEBUG"
"""Set to ``1`` to get tracebacks instead of operator-facing messages."""

DEFAULT_FEATURES_PATH = "features"
"""Root directory of feature directories when none is configured."""
