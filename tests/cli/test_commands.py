"""Tests for CLI error handling and init output."""

import pytest
from rich.console import Console
from typer.testing import CliRunner

from redline.cli import init as init_cli
from redline.cli import sources as sources_cli
from redline.cli.app import app

runner = CliRunner()


@pytest.fixture
def wide_console(monkeypatch):
    console = Console(width=200)
    monkeypatch.setattr(init_cli, "console", console)
    monkeypatch.setattr(sources_cli, "console", console)
    return console


class TestInvalidEnvironment:
    @pytest.mark.parametrize(
        "args",
        [
            ["scrape", "dailystar"],
            ["classify"],
            ["locations"],
            ["providers"],
            ["sources", "list"],
        ],
    )
    def test_bad_integer_exits_cleanly(self, monkeypatch, tmp_path, wide_console, args) -> None:
        monkeypatch.setenv("REDLINE_CONFIG", str(tmp_path / "config.yaml"))
        monkeypatch.setenv("MAX_RETRIES", "abc")

        result = runner.invoke(app, args)

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "MAX_RETRIES" in result.output

    def test_init_bad_integer_exits_cleanly(self, monkeypatch, tmp_path, wide_console) -> None:
        monkeypatch.setenv("MAX_RETRIES", "abc")

        result = runner.invoke(app, ["init", "--config-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "MAX_RETRIES" in result.output


class TestInitCommand:
    @pytest.fixture(autouse=True)
    def fake_database(self, monkeypatch):
        async def prepare(db_config, sources):
            return len(sources)

        monkeypatch.setattr(init_cli, "_prepare_database", prepare)
        monkeypatch.delenv("MAX_RETRIES", raising=False)

    def test_custom_config_dir_prints_hint(self, monkeypatch, tmp_path, wide_console) -> None:
        monkeypatch.delenv("REDLINE_CONFIG", raising=False)
        config_dir = tmp_path / "custom"

        result = runner.invoke(app, ["init", "--config-dir", str(config_dir)])

        assert result.exit_code == 0
        assert (config_dir / "config.yaml").exists()
        assert (config_dir / "sources.yaml").exists()
        assert f"export REDLINE_CONFIG={config_dir / 'config.yaml'}" in result.output

    def test_default_location_has_no_hint(self, monkeypatch, tmp_path, wide_console) -> None:
        monkeypatch.setenv("REDLINE_CONFIG", str(tmp_path / "config.yaml"))

        result = runner.invoke(app, ["init", "--config-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "export REDLINE_CONFIG" not in result.output
        assert "3 synced to database" in result.output
