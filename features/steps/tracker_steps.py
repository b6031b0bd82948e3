from types import SimpleNamespace

from behave import then, when
from behave.model_core import Status

from dependsload import hooks
from dependsload.runner import SuiteSession
from suite_utils import planned


def hook_context(context) -> SimpleNamespace:
    if not hasattr(context, "hook_context"):
        context.hook_context = SimpleNamespace(dependsload=SuiteSession(context.plan))
    return context.hook_context


@when('"{signature}" passes')
def step_scenario_passes(context, signature: str) -> None:
    model = planned(context, signature).model
    model.set_status(Status.passed)
    hooks.after_scenario(hook_context(context), model)


@when('"{signature}" fails')
def step_scenario_fails(context, signature: str) -> None:
    model = planned(context, signature).model
    model.set_status(Status.failed)
    hooks.after_scenario(hook_context(context), model)


@when('"{signature}" starts')
def step_scenario_starts(context, signature: str) -> None:
    hooks.before_scenario(hook_context(context), planned(context, signature).model)


@then('"{signature}" is skipped with "{reason}"')
def step_scenario_skipped(context, signature: str, reason: str) -> None:
    model = planned(context, signature).model
    assert model.should_skip
    assert model.skip_reason == reason, model.skip_reason


@then('"{signature}" is not skipped')
def step_scenario_not_skipped(context, signature: str) -> None:
    assert not planned(context, signature).model.should_skip
