"""CLI parser behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from bdpack import cli
from bdpack.cli import _build_parser, cli_options
from bdpack.models import BuildReport, BuildResult


def test_cli_omits_flags_that_were_not_passed() -> None:
    parser = _build_parser()
    args = parser.parse_args([])

    assert cli_options(args) == {}
    assert args.verbose is False


def test_cli_maps_flags_to_config_keys() -> None:
    parser = _build_parser()
    args = parser.parse_args(["-p", "plugins/Foo", "-r", "out", "-c", "-i", "-l", "-m", "-o"])

    assert cli_options(args) == {
        "pluginFolder": "plugins/Foo",
        "releaseFolder": "out",
        "copyToBD": True,
        "addInstallScript": True,
        "packLib": True,
        "multiPlugin": True,
        "oldHeader": True,
    }


def test_cli_accepts_long_flags_and_config_file() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--packLib", "--config", "bdpack.yml", "--verbose"])

    assert cli_options(args) == {"packLib": True}
    assert args.config_file == Path("bdpack.yml")
    assert args.verbose is True


def test_main_runs_orchestrator_with_resolved_config(
    tmp_path: Path, monkeypatch, capsys
) -> None:
    monkeypatch.chdir(tmp_path)
    seen = {}

    class _FakeOrchestrator:
        def __init__(self, config, *, cwd) -> None:
            seen["config"] = config
            seen["cwd"] = cwd

        async def run(self) -> BuildReport:
            return BuildReport(
                built=[BuildResult(plugin_name="Foo", artifact=tmp_path / "release" / "Foo.plugin.js")],
                skipped=[tmp_path / "plugins" / "Broken"],
            )

    monkeypatch.setattr(cli, "Orchestrator", _FakeOrchestrator)

    cli.main(["--multiPlugin", "--releaseFolder", "release"])

    assert seen["config"].multi_plugin is True
    assert seen["config"].release_folder == "release"
    output = capsys.readouterr().out
    assert "Foo -> release" in output
    assert "skipped plugins" in output


def test_main_exits_with_message_on_build_error(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "package.json").write_text("{broken", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1
    assert "bdpack build failed" in capsys.readouterr().err
