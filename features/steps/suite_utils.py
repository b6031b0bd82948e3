"""Helpers shared by the dependsload step modules."""

from dependsload.core.suite import SuiteBuilder
from dependsload.exceptions import DependsLoadError
from dependsload.loader import FeatureLoader


def planned(context, signature: str):
    for scenario in context.plan.scenarios:
        if scenario.signature == signature:
            return scenario
    raise AssertionError(f"{signature} not in suite: {context.plan.signatures}")


def build_suite(context) -> None:
    loader = FeatureLoader(context.features_root)
    builder = SuiteBuilder(
        loader,
        groups=context.settings["groups"],
        exclude_groups=context.settings["exclude_groups"],
        title_filter=context.settings["filter"],
        actor=context.settings["actor"],
    )

    try:
        context.plan = builder.build(loader.load_all())
    except DependsLoadError as e:
        context.error = e
