import fire
import pytest

from dependsload.__main__ import DependsLoad
from dependsload.cli.main import handle_resolution_error, handle_value_error
from dependsload.cli.parsing import (
    apply_cli_overrides,
    parse_behave_args,
    parse_group_list,
)
from dependsload.exceptions import (
    CyclicDependencyError,
    DependencyNotFoundError,
    DirectoryNotFoundError,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("smoke", ["smoke"]),
        ("smoke, @admin,,", ["smoke", "admin"]),
        (("smoke", "@admin"), ["smoke", "admin"]),
        ([], []),
    ],
)
def test_parse_group_list(value, expected) -> None:
    assert parse_group_list(value) == expected


def test_parse_behave_args() -> None:
    assert parse_behave_args(None) == []
    assert parse_behave_args('--no-capture -n "Log in"') == ["--no-capture", "-n", "Log in"]
    assert parse_behave_args(["-f", "plain"]) == ["-f", "plain"]


def test_apply_cli_overrides() -> None:
    config = {"path": "features", "groups": ["smoke"], "filter": None, "actor": None}

    apply_cli_overrides(config, "specs", None, "slow", "^Log", "admin")

    assert config == {
        "path": "specs",
        "groups": ["smoke"],
        "exclude_groups": ["slow"],
        "filter": "^Log",
        "actor": "admin",
    }


@pytest.mark.parametrize(
    ("error", "hint"),
    [
        (DirectoryNotFoundError("login.feature", "setup"), "relative to `path`"),
        (
            DependencyNotFoundError("login.feature", "Missing", "setup"),
            "case-insensitively",
        ),
        (
            CyclicDependencyError("a.feature", ["a.feature:A", "b.feature:B", "a.feature:A"]),
            "Remove one of the DependsLoad directives",
        ),
    ],
)
def test_handle_resolution_error(error, hint, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        handle_resolution_error(error, debug_mode=False)

    assert exc_info.value.code == 1
    stderr = capsys.readouterr().err
    assert str(error) in stderr
    assert hint in stderr


def test_handle_resolution_error_reraises_in_debug_mode() -> None:
    error = DirectoryNotFoundError("login.feature", "setup")

    with pytest.raises(DirectoryNotFoundError):
        try:
            raise error
        except DirectoryNotFoundError as e:
            handle_resolution_error(e, debug_mode=True)


def test_handle_value_error(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        handle_value_error(ValueError("groups must be a list"), debug_mode=False)

    assert exc_info.value.code == 2
    assert "Configuration error: groups must be a list" in capsys.readouterr().err


def test_run_behave_args_through_fire(tmp_path, monkeypatch) -> None:
    captured = {}

    class FakeRunner:
        def __init__(self, config, settings=None) -> None:
            captured["config"] = config
            captured["settings"] = settings

        def run(self) -> bool:
            return False

    monkeypatch.setattr("dependsload.__main__.DependsLoadRunner", FakeRunner)
    monkeypatch.chdir(tmp_path)

    result = fire.Fire(
        DependsLoad(),
        command=[
            "run",
            "--behave-args=-f plain",
            "--config",
            str(tmp_path / "dependsload.yaml"),
        ],
    )

    assert result == 0
    assert captured["config"].format == ["plain"]
    assert captured["config"].paths == ["features"]
