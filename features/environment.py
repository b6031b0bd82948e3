"""Behave environment configuration for dependsload acceptance tests."""

import logging
import os
import shutil
import sys
import tempfile
from pathlib import Path

from behave.model import Scenario
from behave.runner import Context

logger = logging.getLogger(__name__)

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from dependsload.constants import CONFIG_ENV_VAR  # noqa: E402


class LogCapture(logging.Handler):
    """Custom logging handler for capturing log records in tests."""

    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def cleanup_env_var(var_name: str) -> None:
    os.environ.pop(var_name, None)


def before_all(context: Context) -> None:
    context.original_cwd = os.getcwd()


def before_scenario(context: Context, scenario: Scenario) -> None:
    """Give every scenario its own features root and log capture."""
    context.work_dir = Path(tempfile.mkdtemp(prefix="dependsload-"))
    context.features_root = context.work_dir / "features"
    context.features_root.mkdir()
    context.settings = {
        "groups": [],
        "exclude_groups": [],
        "filter": None,
        "actor": None,
    }
    context.plan = None
    context.error = None

    context.log_capture = LogCapture()
    context.log_capture.setLevel(logging.DEBUG)
    logging.getLogger("dependsload").addHandler(context.log_capture)
    logging.getLogger("dependsload").setLevel(logging.DEBUG)


def after_scenario(context: Context, scenario: Scenario) -> None:
    logging.getLogger("dependsload").removeHandler(context.log_capture)
    cleanup_env_var(CONFIG_ENV_VAR)
    os.chdir(context.original_cwd)
    shutil.rmtree(context.work_dir, ignore_errors=True)
