import json
import os

from behave import given, then, when

from dependsload.__main__ import DependsLoad
from dependsload.constants import CONFIG_ENV_VAR


@given("a config file with")
def step_config_file(context) -> None:
    context.config_file = context.work_dir / "dependsload.yaml"
    context.config_file.write_text(context.text + "\n")


def run_plan(context, **kwargs) -> None:
    try:
        context.result = DependsLoad().plan(
            config=str(context.config_file), json_output=True, **kwargs
        )
    except ValueError as e:
        context.error = e


@when('I run the plan command with groups "{groups}"')
def step_plan_with_groups(context, groups: str) -> None:
    run_plan(context, groups=groups)


@when('I run the plan command with filter "{pattern}"')
def step_plan_with_filter(context, pattern: str) -> None:
    run_plan(context, filter=pattern)


@when("I run the init command")
def step_init(context) -> None:
    os.environ[CONFIG_ENV_VAR] = str(context.config_file)

    try:
        DependsLoad().init()
        context.exit_code = 0
    except SystemExit as e:
        context.exit_code = e.code


@then("the plan lists")
def step_plan_lists(context) -> None:
    assert context.error is None, f"Plan failed: {context.error}"
    entries = json.loads(context.result)
    expected = [(row["signature"], row["actor"]) for row in context.table]
    assert [(e["signature"], e["actor"]) for e in entries] == expected, entries


@then('the command fails with "{message}"')
def step_command_fails(context, message: str) -> None:
    assert context.error is not None, "Command succeeded"
    assert message in str(context.error), str(context.error)


@then("the command fails with exit code {code:d}")
def step_command_exit_code(context, code: int) -> None:
    assert context.exit_code == code
