from behave import given, then, when

from suite_utils import build_suite, planned


@given('a feature file "{relative_path}" containing')
def step_feature_file(context, relative_path: str) -> None:
    feature_file = context.features_root / relative_path
    feature_file.parent.mkdir(parents=True, exist_ok=True)
    feature_file.write_text(context.text + "\n")


@given('the group filter "{groups}"')
def step_group_filter(context, groups: str) -> None:
    context.settings["groups"] = [group.strip() for group in groups.split(",")]


@given('the default actor "{actor}"')
def step_default_actor(context, actor: str) -> None:
    context.settings["actor"] = actor


@given("the suite is built")
@when("I build the suite")
def step_build_suite(context) -> None:
    build_suite(context)


@then("the suite order is")
def step_suite_order(context) -> None:
    assert context.error is None, f"Build failed: {context.error}"
    expected = [row["signature"] for row in context.table]
    assert context.plan.signatures == expected, context.plan.signatures


@then('"{signature}" depends on "{dependency}"')
def step_depends_on(context, signature: str, dependency: str) -> None:
    dependencies = planned(context, signature).metadata.dependencies
    assert dependency in dependencies, dependencies


@then('"{signature}" runs as actor "{actor}"')
def step_runs_as_actor(context, signature: str, actor: str) -> None:
    assert planned(context, signature).metadata.current("actor") == actor


@then('the build fails with "{error_name}"')
def step_build_fails(context, error_name: str) -> None:
    assert context.error is not None, "Build succeeded"
    assert type(context.error).__name__ == error_name, repr(context.error)


@then('the error mentions "{text}"')
def step_error_mentions(context, text: str) -> None:
    assert text in str(context.error), str(context.error)
