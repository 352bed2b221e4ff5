from rich.console import Console
from rich.markup import escape

from agentdesk.agents.catalog import ToolCatalog
from agentdesk.agents.models import AgentListing, AgentRecord
from agentdesk.agents.selector import ToolSelector
from agentdesk.launcher import LaunchResult
from agentdesk.settings import Settings
from agentdesk.tui.enums import UIStyle
from agentdesk.tui.sections import UISection
from agentdesk.tui.tables import AgentsTable, CatalogTable
from agentdesk.utils import compact_home_path, compact_home_paths_in_text


class AgentConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_listing(self, listing: AgentListing, title: str = "agents") -> None:
        if listing.records:
            self.console.print(
                UISection.wrap(
                    title,
                    AgentsTable.records_table(listing.records),
                    style=UIStyle.BLUE.value,
                )
            )
        else:
            self.console.print(
                UISection.note(title, "No agents found.", style=UIStyle.YELLOW.value)
            )

        if listing.failures:
            self.console.print(
                UISection.wrap(
                    "broken files",
                    AgentsTable.failures_table(listing.failures),
                    style=UIStyle.RED.value,
                    subtitle=f"{len(listing.failures)} skipped",
                )
            )

    def render_agent(self, record: AgentRecord, selector: ToolSelector) -> None:
        self.console.print(
            UISection.wrap(
                "agent", AgentsTable.detail_block(record), style=UIStyle.BLUE.value
            )
        )
        self.console.print(
            UISection.wrap(
                "tools",
                CatalogTable.selection_table(selector),
                style=UIStyle.CYAN.value,
                subtitle=escape(selector.serialize()) or "none",
            )
        )
        self.console.print(
            UISection.note(
                "system prompt",
                escape(record.agent.system_prompt),
                style=UIStyle.MAGENTA.value,
            )
        )

    def render_saved(self, record: AgentRecord, verb: str) -> None:
        self.console.print(
            UISection.note(
                "agent",
                f"Agent {verb}: [bold]{escape(record.name)}[/bold]\n"
                f"{escape(compact_home_path(record.source_path))}",
                style=UIStyle.GREEN.value,
            )
        )

    def render_removed(self, name: str, path: str) -> None:
        self.console.print(
            UISection.note(
                "agent",
                f"Removed agent: [bold]{escape(name)}[/bold]\n"
                f"{escape(compact_home_path(path))}",
                style=UIStyle.YELLOW.value,
            )
        )

    def render_catalog(self, catalog: ToolCatalog) -> None:
        self.console.print(
            UISection.wrap(
                "tools", CatalogTable.tools_table(catalog), style=UIStyle.BLUE.value
            )
        )

    def render_launch_result(self, result: LaunchResult) -> None:
        if result.success:
            self.console.print(
                UISection.wrap(
                    "output",
                    escape(result.output.rstrip()) or "[dim](no output)[/dim]",
                    style=UIStyle.GREEN.value,
                    subtitle=f"{result.duration_seconds:.1f}s",
                )
            )
            return
        self.console.print(
            UISection.note(
                "launch failed",
                escape(compact_home_paths_in_text(result.reason or "unknown error")),
                style=UIStyle.RED.value,
            )
        )

    def render_settings(self, settings: Settings, path: str, exists: bool) -> None:
        body = "\n".join(
            f"[bold]{key}[/bold]: {escape(str(value))}"
            for key, value in settings.as_dict().items()
        )
        source = compact_home_path(path) if exists else f"{compact_home_path(path)} (defaults)"
        self.console.print(
            UISection.wrap("settings", body, style=UIStyle.BLUE.value, subtitle=escape(source))
        )
