import subprocess
from pathlib import Path

from agentdesk import launcher as launcher_module
from agentdesk.__main__ import cli
from agentdesk.agents.codec import decode_agent
from agentdesk.agents.models import AgentColor, AgentModel


GOOD = "---\nname: reviewer\ndescription: Reviews code\ntools: Read, Grep\n---\n\nReview.\n"


def _read_agent(path: Path):
    return decode_agent(path.read_text(encoding="utf-8"))


def test_agents_list_empty(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["agents", "list"])
    assert result.exit_code == 0, result.output
    assert "No agents found." in result.output


def test_agents_list_reports_broken_files(cli_runner, write_agent) -> None:
    write_agent("reviewer.md", GOOD)
    write_agent("broken.md", "just text\n")

    result = cli_runner.invoke(cli, ["agents", "list"])

    assert result.exit_code == 0, result.output
    assert "reviewer" in result.output
    assert "broken files" in result.output
    assert "broken.md" in result.output


def test_agents_list_project_scope(cli_runner, tmp_path: Path, write_agent) -> None:
    project = tmp_path / "proj"
    write_agent(
        "builder.md",
        "---\nname: builder\n---\nBuild.\n",
        directory=project / ".claude" / "agents",
    )
    result = cli_runner.invoke(
        cli, ["--project", str(project), "agents", "list", "--scope", "project"]
    )
    assert result.exit_code == 0, result.output
    assert "builder" in result.output


def test_agents_list_project_scope_requires_project(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["agents", "list", "--scope", "project"])
    assert result.exit_code == 1
    assert "not available" in result.output


def test_agents_show(cli_runner, write_agent) -> None:
    write_agent("reviewer.md", GOOD)
    result = cli_runner.invoke(cli, ["agents", "show", "reviewer"])
    assert result.exit_code == 0, result.output
    assert "Reviews code" in result.output
    assert "Grep, Read" in result.output


def test_agents_show_missing(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["agents", "show", "ghost"])
    assert result.exit_code == 1
    assert "Agent 'ghost' not found" in result.output


def test_agents_create(cli_runner, user_agents_dir: Path) -> None:
    result = cli_runner.invoke(
        cli,
        [
            "agents",
            "create",
            "--name",
            "Doc Writer",
            "--description",
            "Writes docs",
            "--category",
            "read-only",
            "--tools",
            "Write",
            "--model",
            "haiku",
            "--color",
            "green",
            "--prompt",
            "Write documentation.",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Agent created" in result.output

    agent = _read_agent(user_agents_dir / "doc-writer.md")
    assert agent.name == "Doc Writer"
    assert agent.model == AgentModel.HAIKU
    assert agent.color == AgentColor.GREEN
    assert agent.tools == (
        "Glob, Grep, LS, NotebookRead, Read, WebFetch, WebSearch, Write"
    )
    assert agent.system_prompt == "Write documentation."


def test_agents_create_prompt_file(cli_runner, tmp_path: Path, user_agents_dir) -> None:
    prompt = tmp_path / "prompt.md"
    prompt.write_text("\nFrom a file.\n", encoding="utf-8")
    result = cli_runner.invoke(
        cli, ["agents", "create", "--name", "filer", "--prompt-file", str(prompt)]
    )
    assert result.exit_code == 0, result.output
    assert _read_agent(user_agents_dir / "filer.md").system_prompt == "From a file."


def test_agents_create_uses_settings_defaults(
    cli_runner, settings_root: Path, user_agents_dir: Path
) -> None:
    settings_root.mkdir(parents=True)
    (settings_root / "settings.json").write_text(
        '{"default_model": "opus", "default_color": "Red"}', encoding="utf-8"
    )
    result = cli_runner.invoke(
        cli, ["agents", "create", "--name", "bold", "--prompt", "Go."]
    )
    assert result.exit_code == 0, result.output
    agent = _read_agent(user_agents_dir / "bold.md")
    assert agent.model == AgentModel.OPUS
    assert agent.color == AgentColor.RED


def test_agents_create_requires_prompt(cli_runner, user_agents_dir: Path) -> None:
    result = cli_runner.invoke(cli, ["agents", "create", "--name", "empty"])
    assert result.exit_code == 1
    assert "System prompt is required." in result.output
    assert not (user_agents_dir / "empty.md").exists()


def test_agents_create_unknown_tool(cli_runner) -> None:
    result = cli_runner.invoke(
        cli, ["agents", "create", "--name", "x", "--tools", "Teleport", "--prompt", "p"]
    )
    assert result.exit_code == 1
    assert "Unknown tool: Teleport" in result.output


def test_agents_create_conflict_and_overwrite(cli_runner, write_agent) -> None:
    path = write_agent("reviewer.md", GOOD)
    args = ["agents", "create", "--name", "Reviewer", "--prompt", "New."]

    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert path.read_text(encoding="utf-8") == GOOD

    result = cli_runner.invoke(cli, [*args, "--overwrite"])
    assert result.exit_code == 0, result.output
    assert _read_agent(path).system_prompt == "New."


def test_agents_create_rejects_both_prompt_options(cli_runner, tmp_path: Path) -> None:
    prompt = tmp_path / "prompt.md"
    prompt.write_text("x", encoding="utf-8")
    result = cli_runner.invoke(
        cli,
        ["agents", "create", "--name", "x", "--prompt", "y", "--prompt-file", str(prompt)],
    )
    assert result.exit_code == 2
    assert "either --prompt or --prompt-file" in result.output


def test_agents_edit_toggles(cli_runner, write_agent) -> None:
    path = write_agent("reviewer.md", GOOD)
    result = cli_runner.invoke(
        cli,
        [
            "agents",
            "edit",
            "reviewer",
            "--toggle-tool",
            "Grep",
            "--toggle-category",
            "execution",
            "--description",
            "Reviews and runs",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Agent updated" in result.output

    agent = _read_agent(path)
    assert agent.tools == "Bash, ExitPlanMode, Read, Task"
    assert agent.description == "Reviews and runs"
    assert agent.system_prompt == "Review."


def test_agents_edit_rename(cli_runner, write_agent, user_agents_dir: Path) -> None:
    old = write_agent("reviewer.md", GOOD)
    result = cli_runner.invoke(
        cli, ["agents", "edit", "reviewer", "--rename", "Senior Reviewer"]
    )
    assert result.exit_code == 0, result.output
    assert "Agent renamed" in result.output
    assert not old.exists()
    assert _read_agent(user_agents_dir / "senior-reviewer.md").tools == "Grep, Read"


def test_agents_edit_rename_conflict(cli_runner, write_agent) -> None:
    write_agent("reviewer.md", GOOD)
    write_agent("writer.md", "---\nname: writer\n---\nWrite.\n")
    result = cli_runner.invoke(cli, ["agents", "edit", "reviewer", "--rename", "Writer"])
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_agents_edit_drops_unknown_stored_tools(cli_runner, write_agent) -> None:
    path = write_agent(
        "odd.md", "---\nname: odd\ntools: Read, NotARealTool\n---\nBody.\n"
    )
    result = cli_runner.invoke(cli, ["agents", "edit", "odd", "--model", "sonnet"])
    assert result.exit_code == 0, result.output
    agent = _read_agent(path)
    assert agent.tools == "Read"
    assert agent.model == AgentModel.SONNET


def test_agents_remove(cli_runner, write_agent) -> None:
    path = write_agent("reviewer.md", GOOD)
    result = cli_runner.invoke(cli, ["agents", "remove", "reviewer"])
    assert result.exit_code == 0, result.output
    assert "Removed agent" in result.output
    assert not path.exists()

    result = cli_runner.invoke(cli, ["agents", "remove", "reviewer"])
    assert result.exit_code == 1


def test_agents_run(cli_runner, write_agent, monkeypatch, tmp_path: Path) -> None:
    write_agent("reviewer.md", GOOD)
    seen = {}

    def fake_run(command, **kwargs):
        seen["command"] = command
        return subprocess.CompletedProcess(command, 0, stdout="Looks fine.\n", stderr="")

    monkeypatch.setattr(launcher_module, "find_claude_binary", lambda configured: "claude")
    monkeypatch.setattr(launcher_module.subprocess, "run", fake_run)

    result = cli_runner.invoke(cli, ["agents", "run", "reviewer", "check main.py"])

    assert result.exit_code == 0, result.output
    assert "Looks fine." in result.output
    assert seen["command"] == [
        "claude",
        "-p",
        "check main.py",
        "--allowedTools",
        "Grep, Read",
        "--append-system-prompt",
        "Review.",
    ]


def test_agents_run_failure_exit_code(cli_runner, write_agent, monkeypatch) -> None:
    write_agent("reviewer.md", GOOD)
    monkeypatch.setattr(launcher_module, "find_claude_binary", lambda configured: None)
    result = cli_runner.invoke(cli, ["agents", "run", "reviewer", "task"])
    assert result.exit_code == 1
    assert "launch failed" in result.output


def test_invalid_settings_abort(cli_runner, settings_root: Path) -> None:
    settings_root.mkdir(parents=True)
    (settings_root / "settings.json").write_text("{broken", encoding="utf-8")
    result = cli_runner.invoke(cli, ["agents", "list"])
    assert result.exit_code == 1
    assert "Invalid JSON format" in result.output


def test_agents_edit_keeps_hand_named_file(cli_runner, write_agent, user_agents_dir) -> None:
    path = write_agent("x.md", "---\nname: Alpha\n---\nBody.\n")
    result = cli_runner.invoke(cli, ["agents", "edit", "alpha", "--description", "New"])
    assert result.exit_code == 0, result.output
    assert "Agent updated" in result.output
    assert _read_agent(path).description == "New"
    assert not (user_agents_dir / "alpha.md").exists()
