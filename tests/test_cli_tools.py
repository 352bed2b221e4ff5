import json
from pathlib import Path

from agentdesk.__main__ import cli, main


def test_tools_lists_catalog(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["tools"])
    assert result.exit_code == 0, result.output
    for name in ("read-only", "edit", "execution", "WebSearch", "ExitPlanMode"):
        assert name in result.output


def test_config_show_defaults(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["config", "show"])
    assert result.exit_code == 0, result.output
    assert "launch_timeout_seconds" in result.output
    assert "(defaults)" in result.output


def test_config_init_writes_file(cli_runner, settings_root: Path) -> None:
    result = cli_runner.invoke(cli, ["config", "init"])
    assert result.exit_code == 0, result.output

    payload = json.loads((settings_root / "settings.json").read_text(encoding="utf-8"))
    assert payload == {
        "claude_binary_path": None,
        "launch_timeout_seconds": 300,
        "default_model": "inherit",
        "default_color": "Blue",
        "log_level": "WARNING",
    }

    result = cli_runner.invoke(cli, ["config", "init"])
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = cli_runner.invoke(cli, ["config", "init", "--force"])
    assert result.exit_code == 0, result.output


def test_help_lists_commands(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    for command in ("agents", "tools", "config"):
        assert command in result.output


def test_main_returns_two_on_usage_error(monkeypatch) -> None:
    monkeypatch.setattr("sys.argv", ["agentdesk", "agents", "show"])
    assert main() == 2


def test_main_returns_zero(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.argv", ["agentdesk", "tools"])
    assert main() == 0
    assert "Bash" in capsys.readouterr().out


def test_config_init_force_repairs_broken_settings(cli_runner, settings_root: Path) -> None:
    settings_root.mkdir(parents=True)
    path = settings_root / "settings.json"
    path.write_text("{broken", encoding="utf-8")

    result = cli_runner.invoke(cli, ["config", "show"])
    assert result.exit_code == 1
    assert "Invalid JSON format" in result.output

    result = cli_runner.invoke(cli, ["config", "init", "--force"])
    assert result.exit_code == 0, result.output
    assert json.loads(path.read_text(encoding="utf-8"))["default_model"] == "inherit"

    result = cli_runner.invoke(cli, ["tools"])
    assert result.exit_code == 0, result.output
