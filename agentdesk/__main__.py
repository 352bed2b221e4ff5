from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
from rich.console import Console

from agentdesk.agents.catalog import ALL_CATEGORY, DEFAULT_CATALOG
from agentdesk.agents.codec import split_tools
from agentdesk.agents.models import Agent, AgentColor, AgentModel, AgentScope
from agentdesk.agents.repository import AgentRepository, AgentStore
from agentdesk.agents.selector import ToolSelector
from agentdesk.errors import AgentDeskError
from agentdesk.launcher import ClaudeLauncher, run_agent
from agentdesk.logging import parse_level, setup_logging
from agentdesk.settings import Settings, SettingsRepository
from agentdesk.tui import AgentConsoleUI


SCOPE_VALUES = [scope.value for scope in AgentScope]
MODEL_VALUES = [model.value for model in AgentModel]
COLOR_VALUES = [color.value for color in AgentColor]
CATEGORY_VALUES = [ALL_CATEGORY, *DEFAULT_CATALOG.category_names]


def _scope_option(default: Optional[str] = AgentScope.USER.value) -> Callable:
    return click.option(
        "--scope",
        "-s",
        type=click.Choice(SCOPE_VALUES, case_sensitive=False),
        default=default,
        show_default=default is not None,
        help="Where the agent file lives.",
    )


def _prompt_options(func: Callable) -> Callable:
    func = click.option(
        "--prompt-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Read the system prompt from a file.",
    )(func)
    func = click.option("--prompt", default=None, help="System prompt text.")(func)
    return func


def _read_prompt(prompt: Optional[str], prompt_file: Optional[Path]) -> Optional[str]:
    if prompt is not None and prompt_file is not None:
        raise click.UsageError("Use either --prompt or --prompt-file, not both.")
    if prompt_file is not None:
        return prompt_file.read_text(encoding="utf-8").strip()
    if prompt is not None:
        return prompt.strip()
    return None


def _store_from_obj(obj: Dict[str, Any]) -> AgentStore:
    return AgentStore(project_path=obj.get("project"))


def _repository(obj: Dict[str, Any], scope: str) -> AgentRepository:
    try:
        return _store_from_obj(obj).repository(scope.lower())
    except AgentDeskError as exc:
        raise click.ClickException(str(exc))


def _settings(obj: Dict[str, Any]) -> Settings:
    error = obj.get("settings_error")
    if error is not None:
        raise click.ClickException(str(error))
    return obj.get("settings") or Settings()


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--project",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory whose .claude/agents holds project agents.",
)
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.pass_context
def cli(ctx: click.Context, project: Optional[Path], log_level: Optional[str]) -> None:
    """Author, browse and run agent definitions for the claude command line."""
    settings_error: Optional[AgentDeskError] = None
    try:
        settings = SettingsRepository().load()
    except AgentDeskError as exc:
        # The config commands must still run so a broken file can be replaced.
        if ctx.invoked_subcommand != "config":
            raise click.ClickException(str(exc))
        settings, settings_error = Settings(), exc
    setup_logging(parse_level(log_level or settings.log_level))
    ctx.obj = {
        "project": project,
        "settings": settings,
        "settings_error": settings_error,
    }


@cli.group(help="Manage agent definition files.")
def agents() -> None:
    pass


@agents.command("list", help="List agents and report unreadable files.")
@_scope_option(default=None)
@click.pass_obj
def agents_list(obj: Dict[str, Any], scope: Optional[str]) -> None:
    ui = AgentConsoleUI(Console())
    store = _store_from_obj(obj)
    scopes = [AgentScope(scope.lower())] if scope else store.scopes
    for item in scopes:
        try:
            listing = store.list(item)
        except AgentDeskError as exc:
            raise click.ClickException(str(exc))
        ui.render_listing(listing, title=f"{item.value} agents")


@agents.command("show", help="Show one agent with its tool selection.")
@click.argument("name")
@_scope_option()
@click.pass_obj
def agents_show(obj: Dict[str, Any], name: str, scope: str) -> None:
    ui = AgentConsoleUI(Console())
    repo = _repository(obj, scope)
    try:
        record = repo.get_agent(name)
    except AgentDeskError as exc:
        raise click.ClickException(str(exc))
    ui.render_agent(record, ToolSelector.from_tools_string(record.agent.tools))


@agents.command("create", help="Create a new agent file.")
@click.option("--name", required=True)
@click.option("--description", default="")
@click.option("--icon", default="")
@click.option(
    "--color", type=click.Choice(COLOR_VALUES, case_sensitive=False), default=None
)
@click.option(
    "--model", type=click.Choice(MODEL_VALUES, case_sensitive=False), default=None
)
@click.option("--tools", default="", help="Comma-separated tool names.")
@click.option(
    "--category",
    "categories",
    multiple=True,
    type=click.Choice(CATEGORY_VALUES, case_sensitive=False),
    help="Grant every tool of a category (repeatable).",
)
@_prompt_options
@click.option("--overwrite", is_flag=True, help="Replace an existing agent file.")
@_scope_option()
@click.pass_obj
def agents_create(
    obj: Dict[str, Any],
    name: str,
    description: str,
    icon: str,
    color: Optional[str],
    model: Optional[str],
    tools: str,
    categories: tuple[str, ...],
    prompt: Optional[str],
    prompt_file: Optional[Path],
    overwrite: bool,
    scope: str,
) -> None:
    ui = AgentConsoleUI(Console())
    settings = _settings(obj)
    repo = _repository(obj, scope)
    system_prompt = _read_prompt(prompt, prompt_file) or ""

    try:
        selector = ToolSelector(tools=split_tools(tools))
        for category in categories:
            if category.lower() not in selector.selected_categories and (
                ALL_CATEGORY not in selector.selected_categories
            ):
                selector.toggle_category(category.lower())

        agent = Agent(
            name=name.strip(),
            system_prompt=system_prompt,
            description=description.strip(),
            color=AgentColor(color.capitalize()) if color else settings.default_color,
            model=AgentModel(model.lower()) if model else settings.default_model,
            tools=selector.serialize(),
            icon=icon.strip(),
        )
        record = repo.save_agent(agent, overwrite=overwrite)
    except AgentDeskError as exc:
        raise click.ClickException(str(exc))

    ui.render_saved(record, "created")


@agents.command("edit", help="Update, retool or rename an existing agent.")
@click.argument("name")
@click.option("--rename", default=None, help="New agent name.")
@click.option("--description", default=None)
@click.option("--icon", default=None)
@click.option(
    "--color", type=click.Choice(COLOR_VALUES, case_sensitive=False), default=None
)
@click.option(
    "--model", type=click.Choice(MODEL_VALUES, case_sensitive=False), default=None
)
@click.option("--tools", default=None, help="Replace the tool list (comma-separated).")
@click.option(
    "--toggle-category",
    "toggle_categories",
    multiple=True,
    type=click.Choice(CATEGORY_VALUES, case_sensitive=False),
    help="Toggle a whole category (repeatable).",
)
@click.option(
    "--toggle-tool",
    "toggle_tools",
    multiple=True,
    help="Toggle a single tool (repeatable).",
)
@_prompt_options
@click.option("--overwrite", is_flag=True, help="Replace an agent the new name collides with.")
@_scope_option()
@click.pass_obj
def agents_edit(
    obj: Dict[str, Any],
    name: str,
    rename: Optional[str],
    description: Optional[str],
    icon: Optional[str],
    color: Optional[str],
    model: Optional[str],
    tools: Optional[str],
    toggle_categories: tuple[str, ...],
    toggle_tools: tuple[str, ...],
    prompt: Optional[str],
    prompt_file: Optional[Path],
    overwrite: bool,
    scope: str,
) -> None:
    ui = AgentConsoleUI(Console())
    repo = _repository(obj, scope)
    system_prompt = _read_prompt(prompt, prompt_file)

    try:
        record = repo.get_agent(name)
        current = record.agent

        if tools is not None:
            selector = ToolSelector(tools=split_tools(tools))
        else:
            selector = ToolSelector.from_tools_string(current.tools)
        for category in toggle_categories:
            selector.toggle_category(category.lower())
        for tool in toggle_tools:
            selector.toggle_tool(tool)

        updated = replace(
            current,
            name=rename.strip() if rename is not None else current.name,
            description=(
                description.strip() if description is not None else current.description
            ),
            icon=icon.strip() if icon is not None else current.icon,
            color=AgentColor(color.capitalize()) if color else current.color,
            model=AgentModel(model.lower()) if model else current.model,
            tools=selector.serialize(),
            system_prompt=(
                system_prompt if system_prompt is not None else current.system_prompt
            ),
        )
        saved = repo.save_agent(
            updated, original_name=current.name, overwrite=overwrite
        )
    except AgentDeskError as exc:
        raise click.ClickException(str(exc))

    renamed = updated.identity != current.identity
    ui.render_saved(saved, "renamed" if renamed else "updated")


@agents.command("remove", help="Delete an agent file.")
@click.argument("name")
@_scope_option()
@click.pass_obj
def agents_remove(obj: Dict[str, Any], name: str, scope: str) -> None:
    ui = AgentConsoleUI(Console())
    repo = _repository(obj, scope)
    try:
        path = repo.delete_agent(name)
    except AgentDeskError as exc:
        raise click.ClickException(str(exc))
    ui.render_removed(name, str(path))


@agents.command("run", help="Run a task with an agent through the claude CLI.")
@click.argument("name")
@click.argument("task")
@click.option(
    "--model",
    type=click.Choice(MODEL_VALUES, case_sensitive=False),
    default=None,
    help="Override the agent's model.",
)
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Working directory for the run.",
)
@_scope_option()
@click.pass_obj
def agents_run(
    obj: Dict[str, Any],
    name: str,
    task: str,
    model: Optional[str],
    cwd: Optional[Path],
    scope: str,
) -> None:
    ui = AgentConsoleUI(Console())
    settings = _settings(obj)
    repo = _repository(obj, scope)
    try:
        record = repo.get_agent(name)
    except AgentDeskError as exc:
        raise click.ClickException(str(exc))

    launcher = ClaudeLauncher(
        binary_path=settings.claude_binary_path,
        timeout_seconds=settings.launch_timeout_seconds,
    )
    result = run_agent(
        record,
        task,
        launcher,
        model=AgentModel(model.lower()) if model else None,
        cwd=cwd,
    )
    ui.render_launch_result(result)
    if not result.success:
        raise click.exceptions.Exit(1)


@cli.command(help="List the tools an agent can be granted.")
def tools() -> None:
    ui = AgentConsoleUI(Console())
    ui.render_catalog(DEFAULT_CATALOG)


@cli.group(help="Inspect or initialise settings.")
def config() -> None:
    pass


@config.command("show", help="Show effective settings.")
@click.pass_obj
def config_show(obj: Dict[str, Any]) -> None:
    ui = AgentConsoleUI(Console())
    repository = SettingsRepository()
    ui.render_settings(
        _settings(obj),
        str(repository.settings_path),
        exists=repository.settings_path.exists(),
    )


@config.command("init", help="Write a settings file with the current values.")
@click.option("--force", is_flag=True, help="Overwrite an existing settings file.")
@click.pass_obj
def config_init(obj: Dict[str, Any], force: bool) -> None:
    ui = AgentConsoleUI(Console())
    repository = SettingsRepository()
    if repository.settings_path.exists() and not force:
        raise click.ClickException(
            f"Settings file already exists: {repository.settings_path}"
        )
    # A broken file is replaced with defaults.
    settings = obj.get("settings") or Settings()
    repository.save(settings)
    ui.render_settings(settings, str(repository.settings_path), exists=True)


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
