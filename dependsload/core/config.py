import copy
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import InterpolationResolutionError

from dependsload.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    DEFAULT_FEATURES_PATH,
)

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load and merge YAML configuration with defaults."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in defaults."""
        self.BUILT_IN_DEFAULTS = {
            "path": DEFAULT_FEATURES_PATH,
            "groups": [],
            "exclude_groups": [],
            "filter": None,
            "actor": None,
            "hidden_files": False,
            "language": None,
        }

    def config_path(self, config_path: str | None = None) -> Path:
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)
        return Path(config_path)

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks DEPENDSLOAD_CONFIG env var,
            then falls back to dependsload.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with all variable interpolations resolved,
            empty when the file does not exist

        Raises
        ------
        omegaconf.errors.InterpolationResolutionError
            If undefined variables are referenced or circular references exist
        """
        config_file = self.config_path(config_path)

        if not config_file.exists():
            return {}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return {}

        if "vars" in cfg:
            vars_dict = OmegaConf.to_container(cfg.vars, resolve=False)
            for key, value in vars_dict.items():
                if key not in cfg:
                    cfg[key] = value

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except InterpolationResolutionError as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise
        except (ValueError, KeyError, AttributeError) as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e

        config.pop("vars", None)
        return config

    def get_suite_config(
        self, config: dict[str, Any], base_dir: str | Path | None = None
    ) -> dict[str, Any]:
        """Merge built-in defaults with loaded configuration.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration loaded from YAML
        base_dir : str | Path | None
            Directory a relative ``path`` is resolved against (the config
            file's directory)

        Returns
        -------
        dict[str, Any]
            Merged configuration
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        for key, value in config.items():
            merged[key] = value

        if base_dir is not None and isinstance(merged["path"], str):
            path = Path(merged["path"])
            if not path.is_absolute():
                merged["path"] = str(Path(base_dir) / path)

        return merged

    def load_suite_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load, merge and validate the configuration in one step."""
        config_file = self.config_path(config_path)
        config = self.load_config(str(config_file))
        base_dir = config_file.parent if config_file.exists() else None
        merged = self.get_suite_config(config, base_dir)
        self.validate_config(merged)
        return merged

    def validate_config(self, config: dict[str, Any]) -> None:
        """Validate configuration has correct types.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration to validate

        Raises
        ------
        ValueError
            If configuration is invalid
        """
        if not isinstance(config.get("path"), str) or config["path"] == "":
            raise ValueError("path must be a non-empty string")

        self._validate_optional_fields(config)
        self._validate_group_lists(config)
        self._validate_filter(config)

    def _validate_optional_fields(self, config: dict[str, Any]) -> None:
        optional_validations = {
            "actor": (str, "actor must be a string"),
            "language": (str, "language must be a string"),
            "hidden_files": (bool, "hidden_files must be a boolean"),
        }

        for field, (expected_type, type_msg) in optional_validations.items():
            value = config.get(field)
            if value is not None and not isinstance(value, expected_type):
                raise ValueError(type_msg)

    def _validate_group_lists(self, config: dict[str, Any]) -> None:
        for field in ("groups", "exclude_groups"):
            if field not in config or config[field] is None:
                continue

            if not isinstance(config[field], list):
                raise ValueError(f"{field} must be a list")

            for item in config[field]:
                if not isinstance(item, str):
                    raise ValueError(f"{field} entries must be strings")

    def _validate_filter(self, config: dict[str, Any]) -> None:
        pattern = config.get("filter")

        if pattern is None:
            return

        if not isinstance(pattern, str):
            raise ValueError("filter must be a string")

        try:
            re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern in filter: '{pattern}' - {e}") from e
