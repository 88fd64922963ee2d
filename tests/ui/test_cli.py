from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from smatch.adapters.xml_context import XmlContextLoader
from smatch.config.locator import ConfigLocator
from smatch.pipeline import CommandOutcome
from smatch.ui import cli as cli_module

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from smatch.pipeline import CommandInvocation

SOURCE = "Vehicles\n\tCars\n"
TARGET = "Vehicles\n\tCars\n\t\tUsed\n"


def test_parse_args_extracts_options_anywhere() -> None:
    invocation = cli_module._parse_args(
        ["-Dhome=/data", "online", "src.txt", "-config=custom.toml", "tgt.txt", "out.txt"]
    )

    assert invocation.command == "online"
    assert invocation.arguments == ("src.txt", "tgt.txt", "out.txt")
    assert invocation.locator == ConfigLocator(name="custom.toml")
    assert invocation.overrides == {"home": "/data"}


def test_parse_args_defaults() -> None:
    invocation = cli_module._parse_args([])

    assert invocation.command is None
    assert invocation.arguments == ()
    assert invocation.locator.is_default
    assert invocation.overrides == {}


def test_parse_args_ignores_unknown_options(caplog: pytest.LogCaptureFixture) -> None:
    invocation = cli_module._parse_args(["convert", "-verbose=yes", "a", "b"])

    assert invocation.arguments == ("a", "b")
    assert "Ignoring unknown option -verbose=yes" in caplog.messages


def test_override_value_may_contain_equals_sign() -> None:
    invocation = cli_module._parse_args(["-Dquery=a=b", "offline", "in", "out"])

    assert invocation.overrides == {"query": "a=b"}


def test_parse_args_accepts_separate_option_values() -> None:
    invocation = cli_module._parse_args(
        ["offline", "-config", "custom.toml", "in", "-D", "home=C:\\data", "out"]
    )

    assert invocation.arguments == ("in", "out")
    assert invocation.locator == ConfigLocator(name="custom.toml")
    assert invocation.overrides == {"home": "C:\\data"}


@pytest.mark.parametrize("flag", ["-h", "--help", "help"])
def test_help_flags_select_the_help_command(flag: str) -> None:
    assert cli_module._parse_args([flag]).command == cli_module.HELP_COMMAND


@pytest.mark.parametrize(
    "argv", [["-config=", "online"], ["-D=value", "online"], ["online", "-Dhome"]]
)
def test_main_rejects_malformed_options(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(argv)

    assert excinfo.value.code == 2


def test_main_usage_error_exits_with_two() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["online", "only-one"])

    assert excinfo.value.code == 2


def test_main_help(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    def fake_dispatch(_invocation: CommandInvocation) -> CommandOutcome:
        raise AssertionError("help must not dispatch")

    monkeypatch.setattr(cli_module, "dispatch", fake_dispatch)

    cli_module.main(["--help"])

    assert any(message.startswith("Usage: smatch") for message in caplog.messages)


def test_main_forwards_invocation(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[CommandInvocation] = []

    def fake_dispatch(invocation: CommandInvocation) -> CommandOutcome:
        captured.append(invocation)
        return CommandOutcome.CAPABILITY_UNAVAILABLE

    monkeypatch.setattr(cli_module, "dispatch", fake_dispatch)

    cli_module.main(["convert", "a", "b", "-Dx=1"])

    assert len(captured) == 1
    assert captured[0].command == "convert"
    assert captured[0].overrides == {"x": "1"}


def test_main_exits_with_outcome_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "dispatch", lambda _invocation: CommandOutcome.STAGE_FAILED)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["online", "a", "b", "c"])

    assert excinfo.value.code == 1


def test_allsteps_with_default_configuration(
    write_text: Callable[[str, str], Path], tmp_path: Path
) -> None:
    source = write_text("source.txt", SOURCE)
    target = write_text("target.txt", TARGET)
    output = tmp_path / "out" / "result.txt"

    cli_module.main(["allsteps", str(source), str(target), str(output)])

    assert output.read_text(encoding="utf-8") == (
        "Vehicles\t=\tVehicles\nVehicles/Cars\t=\tVehicles/Cars\n"
    )


def test_online_keeps_every_relation(
    write_text: Callable[[str, str], Path], tmp_path: Path
) -> None:
    source = write_text("source.txt", SOURCE)
    target = write_text("target.txt", TARGET)
    output = tmp_path / "result.txt"

    cli_module.main(["online", str(source), str(target), str(output)])

    assert output.read_text(encoding="utf-8").splitlines() == [
        "Vehicles\t=\tVehicles",
        "Vehicles\t>\tVehicles/Cars",
        "Vehicles\t>\tVehicles/Cars/Used",
        "Vehicles/Cars\t<\tVehicles",
        "Vehicles/Cars\t=\tVehicles/Cars",
        "Vehicles/Cars\t>\tVehicles/Cars/Used",
    ]


def test_missing_input_fails(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(
            ["online", str(tmp_path / "nope.txt"), str(tmp_path / "nope.txt"), str(tmp_path / "o")]
        )

    assert excinfo.value.code == 1
    assert not (tmp_path / "o").exists()


def test_convert_with_custom_config_and_overrides(
    write_text: Callable[[str, str], Path], tmp_path: Path
) -> None:
    config = write_text(
        "convert.toml",
        '[context_loader]\ncomponent = "${format}"\n\n[context_renderer]\ncomponent = "xml"\n',
    )
    source = write_text("source.txt", TARGET)
    output = tmp_path / "source.xml"

    cli_module.main(["convert", str(source), str(output), f"-config={config}", "-Dformat=tab"])

    context = XmlContextLoader().load_context(str(output))
    assert [node.path_string() for node in context.nodes()] == [
        "Vehicles",
        "Vehicles/Cars",
        "Vehicles/Cars/Used",
    ]


def test_unresolved_placeholder_is_a_configuration_error(
    write_text: Callable[[str, str], Path], tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("format", raising=False)
    config = write_text("convert.toml", '[context_loader]\ncomponent = "${format}"\n')

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["convert", "a", str(tmp_path / "b"), f"-config={config}"])

    assert excinfo.value.code == 1


def test_missing_capability_exits_cleanly(
    write_text: Callable[[str, str], Path], tmp_path: Path
) -> None:
    source = write_text("source.txt", SOURCE)

    cli_module.main(
        [
            "offline",
            str(source),
            str(tmp_path / "out.txt"),
            "-config=resource:s-match-list.toml",
        ]
    )

    assert not (tmp_path / "out.txt").exists()
