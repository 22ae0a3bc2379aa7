"""Tests for the ``playground`` CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from playground import __version__
from playground.cli import main
from playground.runtime.errors import UnknownChannelError
from playground.runtime.service import EvalResponse, FormatResponse, VersionResponse


def _source(tmp_path: Path, text: str = "fn main() {}\n") -> Path:
    path = tmp_path / "main.nr"
    path.write_text(text)
    return path


class TestVersionOption:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestRun:
    def test_compile_passes_flags(self, tmp_path: Path) -> None:
        source = _source(tmp_path)
        prover = tmp_path / "Prover.toml"
        prover.write_text("x = 1\n")

        with patch("playground.api.app.build_service") as build:
            service = build.return_value
            service.evaluate = AsyncMock(
                return_value=EvalResponse(compiler="nargo 1.0", stdout="ok\n", stderr="")
            )
            result = CliRunner().invoke(
                main,
                ["run", "compile", str(source), "--input", str(prover), "--show-ssa", "--print-acir"],
            )

        assert result.exit_code == 0, result.output
        assert "ok" in result.output
        channel, command, files, options = service.evaluate.await_args.args
        assert (channel, command) == ("master", "compile")
        assert files.code == "fn main() {}\n"
        assert files.input == "x = 1\n"
        assert options.args() == ["--show-ssa", "--print-acir"]

    def test_stderr_sets_exit_code(self, tmp_path: Path) -> None:
        with patch("playground.api.app.build_service") as build:
            build.return_value.evaluate = AsyncMock(
                return_value=EvalResponse(stderr="error: oops\n")
            )
            result = CliRunner().invoke(main, ["run", "check", str(_source(tmp_path))])

        assert result.exit_code == 1
        assert "oops" in result.output

    def test_fmt_prints_source(self, tmp_path: Path) -> None:
        with patch("playground.api.app.build_service") as build:
            build.return_value.format_source = AsyncMock(
                return_value=FormatResponse(code="fn main() {}\n")
            )
            result = CliRunner().invoke(main, ["run", "fmt", str(_source(tmp_path, "fn main(){}"))])

        assert result.exit_code == 0
        assert "fn main() {}" in result.output

    def test_unknown_channel(self, tmp_path: Path) -> None:
        with patch("playground.api.app.build_service") as build:
            build.return_value.evaluate = AsyncMock(side_effect=UnknownChannelError("nope"))
            result = CliRunner().invoke(
                main, ["run", "check", str(_source(tmp_path)), "--channel", "nope"]
            )

        assert result.exit_code == 1
        assert "unknown channel: nope" in result.output

    def test_rejects_version_command(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["run", "version", str(_source(tmp_path))])
        assert result.exit_code == 2


class TestToolchainVersion:
    def test_prints_version(self) -> None:
        with patch("playground.api.app.build_service") as build:
            build.return_value.version = AsyncMock(return_value=VersionResponse(version="nargo 1.0\n"))
            result = CliRunner().invoke(main, ["toolchain-version", "--channel", "master"])

        assert result.exit_code == 0
        assert "nargo 1.0" in result.output
        build.return_value.version.assert_awaited_once_with("master")


class TestChannels:
    def test_lists_channels(self, tmp_path: Path, monkeypatch) -> None:
        path = tmp_path / "channels.yaml"
        path.write_text("channels:\n  master: noir-master\n  nightly: noir-nightly\n")
        monkeypatch.setenv("PLAYGROUND_CHANNELS_FILE", str(path))

        result = CliRunner().invoke(main, ["channels"])

        assert result.exit_code == 0
        assert "nightly" in result.output
        assert "noir-nightly" in result.output

    def test_bad_channels_file(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("PLAYGROUND_CHANNELS_FILE", str(tmp_path / "missing.yaml"))
        result = CliRunner().invoke(main, ["channels"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestServe:
    def test_runs_uvicorn(self) -> None:
        with patch("uvicorn.run") as uv_run:
            result = CliRunner().invoke(main, ["serve", "--port", "9001"])

        assert result.exit_code == 0, result.output
        assert uv_run.call_args.kwargs["port"] == 9001

    def test_telemetry_flag_exports_to_console(self, monkeypatch) -> None:
        monkeypatch.setenv("PLAYGROUND_OTLP_ENDPOINT", "collector:4317")
        with patch("uvicorn.run"), patch(
            "playground.utils.telemetry.configure_telemetry"
        ) as configure:
            result = CliRunner().invoke(main, ["serve", "--telemetry"])

        assert result.exit_code == 0, result.output
        configure.assert_called_once_with(otlp_endpoint=None)

    def test_telemetry_setting_uses_endpoint(self, monkeypatch) -> None:
        monkeypatch.setenv("PLAYGROUND_TELEMETRY", "true")
        monkeypatch.setenv("PLAYGROUND_OTLP_ENDPOINT", "collector:4317")
        with patch("uvicorn.run"), patch(
            "playground.utils.telemetry.configure_telemetry"
        ) as configure:
            result = CliRunner().invoke(main, ["serve"])

        assert result.exit_code == 0, result.output
        configure.assert_called_once_with(otlp_endpoint="collector:4317")
