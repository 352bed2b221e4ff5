"""Tool/category selection state for an agent being edited."""

from __future__ import annotations

from typing import Iterable

from agentdesk.agents.catalog import ALL_CATEGORY, DEFAULT_CATALOG, ToolCatalog
from agentdesk.agents.codec import canonical_tools, split_tools
from agentdesk.errors import UnknownCategoryError, UnknownToolError


class ToolSelector:
    """Keeps individually selected tools consistent with whole categories.

    ``selected_categories`` is always a derived view of ``selected_tools``:
    a category is selected when every one of its tools is, and ``all`` is
    selected (alone) when the whole catalog is.
    """

    def __init__(
        self,
        catalog: ToolCatalog = DEFAULT_CATALOG,
        tools: Iterable[str] = (),
    ) -> None:
        self._catalog = catalog
        self._tools: set[str] = set()
        self._categories: set[str] = set()
        for name in tools:
            if not catalog.has_tool(name):
                raise UnknownToolError(name)
            self._tools.add(name)
        self._recompute_categories()

    @classmethod
    def from_tools_string(
        cls, raw: str, catalog: ToolCatalog = DEFAULT_CATALOG
    ) -> "ToolSelector":
        """Build a selector from a persisted capability list.

        Names the catalog does not know are dropped without error.
        """
        known = [name for name in split_tools(raw) if catalog.has_tool(name)]
        return cls(catalog=catalog, tools=known)

    @property
    def catalog(self) -> ToolCatalog:
        return self._catalog

    @property
    def selected_tools(self) -> frozenset[str]:
        return frozenset(self._tools)

    @property
    def selected_categories(self) -> frozenset[str]:
        return frozenset(self._categories)

    def toggle_category(self, category: str) -> None:
        if not self._catalog.has_category(category):
            raise UnknownCategoryError(category)

        if category == ALL_CATEGORY:
            if ALL_CATEGORY in self._categories:
                self._tools.clear()
                self._categories.clear()
            else:
                self._tools = set(self._catalog.tool_names)
                self._categories = {ALL_CATEGORY}
            return

        # While "all" is selected every category counts as selected.
        members = self._catalog.tools_in(category)
        if category in self._categories or ALL_CATEGORY in self._categories:
            self._tools -= members
        else:
            self._tools |= members
        self._recompute_categories()

    def toggle_tool(self, tool: str) -> None:
        if not self._catalog.has_tool(tool):
            raise UnknownToolError(tool)
        if tool in self._tools:
            self._tools.discard(tool)
        else:
            self._tools.add(tool)
        self._recompute_categories()

    def select_tools(self, tools: Iterable[str]) -> None:
        for tool in tools:
            if tool not in self._tools:
                self.toggle_tool(tool)

    def deselect_tools(self, tools: Iterable[str]) -> None:
        for tool in tools:
            if not self._catalog.has_tool(tool):
                raise UnknownToolError(tool)
            if tool in self._tools:
                self.toggle_tool(tool)

    def serialize(self) -> str:
        return canonical_tools(self._tools)

    def copy(self) -> "ToolSelector":
        clone = ToolSelector(catalog=self._catalog)
        clone._tools = set(self._tools)
        clone._categories = set(self._categories)
        return clone

    def _recompute_categories(self) -> None:
        self._categories = self._catalog.complete_categories(self._tools)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToolSelector):
            return NotImplemented
        return (
            self._catalog == other._catalog
            and self._tools == other._tools
            and self._categories == other._categories
        )

    def __repr__(self) -> str:
        return (
            f"ToolSelector(tools={sorted(self._tools)!r}, "
            f"categories={sorted(self._categories)!r})"
        )
