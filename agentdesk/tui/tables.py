from rich.markup import escape
from rich.table import Column, Table

from agentdesk.agents.catalog import ALL_CATEGORY, ToolCatalog
from agentdesk.agents.models import AgentColor, AgentModel, AgentRecord, DecodeFailure
from agentdesk.agents.selector import ToolSelector
from agentdesk.tui.enums import AGENT_COLOR_STYLE, UIStyle
from agentdesk.utils import compact_home_path


def _color_chip(color: AgentColor) -> str:
    style = AGENT_COLOR_STYLE.get(AgentColor(color), UIStyle.WHITE.value)
    return f"[{style}]●[/{style}] {AgentColor(color).value}"


class AgentsTable:
    @staticmethod
    def records_table(records: list[AgentRecord]) -> Table:
        table = Table(
            Column(header="Name", width=24),
            Column(header="Scope", width=8),
            Column(header="Model", width=8),
            Column(header="Color", width=10),
            Column(header="Tools", overflow="fold", max_width=40),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for record in records:
            agent = record.agent
            name = f"{agent.icon} {agent.name}" if agent.icon else agent.name
            table.add_row(
                escape(name),
                record.scope.value,
                AgentModel(agent.model).value,
                _color_chip(agent.color),
                escape(agent.tools) if agent.tools else "[dim](none)[/dim]",
                escape(agent.description),
            )
        return table

    @staticmethod
    def failures_table(failures: list[DecodeFailure]) -> Table:
        table = Table(
            Column(header="File", overflow="ellipsis", max_width=58),
            Column(header="Error", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for failure in failures:
            table.add_row(escape(compact_home_path(failure.path)), escape(failure.error))
        return table

    @staticmethod
    def detail_block(record: AgentRecord) -> Table:
        agent = record.agent
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Name", escape(agent.name))
        if agent.icon:
            table.add_row("Icon", escape(agent.icon))
        table.add_row("Description", escape(agent.description) or "[dim](none)[/dim]")
        table.add_row("Model", AgentModel(agent.model).value)
        table.add_row("Color", _color_chip(agent.color))
        table.add_row("Scope", record.scope.value)
        table.add_row("File", escape(compact_home_path(record.source_path)))
        table.add_row("Created", record.created_at)
        table.add_row("Updated", record.updated_at)
        return table


class CatalogTable:
    @staticmethod
    def tools_table(catalog: ToolCatalog) -> Table:
        table = Table(
            Column(header="Category", width=12),
            Column(header="Tool", width=14),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for category in catalog.categories:
            for tool in sorted(catalog.tools_in(category.name)):
                table.add_row(category.name, tool, catalog.tool(tool).description)
        return table

    @staticmethod
    def selection_table(selector: ToolSelector) -> Table:
        catalog = selector.catalog
        selected_tools = selector.selected_tools
        selected_categories = selector.selected_categories

        table = Table(
            Column(header="Category", width=18),
            Column(header="Tools", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for name in (ALL_CATEGORY, *catalog.category_names):
            mark = "[green]■[/green]" if name in selected_categories else "[dim]□[/dim]"
            tools = [
                tool if tool in selected_tools else f"[dim]{tool}[/dim]"
                for tool in sorted(catalog.tools_in(name))
            ]
            label = catalog.category(name).label
            table.add_row(f"{mark} {label}", "  ".join(tools) if name != ALL_CATEGORY else "")
        return table
