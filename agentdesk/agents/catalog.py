from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


ALL_CATEGORY = "all"


class ToolCategory(str, Enum):
    ALL = ALL_CATEGORY
    READ_ONLY = "read-only"
    EDIT = "edit"
    EXECUTION = "execution"


@dataclass(frozen=True)
class CategorySpec:
    name: str
    label: str
    description: str = ""


@dataclass(frozen=True)
class ToolSpec:
    name: str
    category: str
    description: str = ""


@dataclass(frozen=True)
class ToolCatalog:
    """Fixed set of tools, each assigned to exactly one declared category.

    The synthetic ``all`` category is never declared; it is satisfied when
    every tool of the catalog is selected.
    """

    categories: tuple[CategorySpec, ...]
    tools: tuple[ToolSpec, ...]
    _by_category: dict[str, frozenset[str]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        declared = [category.name for category in self.categories]
        if ALL_CATEGORY in declared:
            raise ValueError(f"'{ALL_CATEGORY}' is reserved and cannot be declared")
        if len(set(declared)) != len(declared):
            raise ValueError("Duplicate category names in tool catalog")

        seen: set[str] = set()
        grouped: dict[str, set[str]] = {name: set() for name in declared}
        for tool in self.tools:
            if tool.name in seen:
                raise ValueError(f"Duplicate tool in catalog: {tool.name}")
            if tool.category not in grouped:
                raise ValueError(
                    f"Tool '{tool.name}' uses undeclared category: {tool.category}"
                )
            seen.add(tool.name)
            grouped[tool.category].add(tool.name)

        object.__setattr__(
            self,
            "_by_category",
            {name: frozenset(members) for name, members in grouped.items()},
        )

    @property
    def tool_names(self) -> frozenset[str]:
        return frozenset(tool.name for tool in self.tools)

    @property
    def category_names(self) -> tuple[str, ...]:
        return tuple(category.name for category in self.categories)

    def has_tool(self, name: str) -> bool:
        return any(tool.name == name for tool in self.tools)

    def has_category(self, name: str) -> bool:
        return name == ALL_CATEGORY or name in self._by_category

    def tools_in(self, category: str) -> frozenset[str]:
        if category == ALL_CATEGORY:
            return self.tool_names
        return self._by_category.get(category, frozenset())

    def tool(self, name: str) -> ToolSpec:
        for tool in self.tools:
            if tool.name == name:
                return tool
        raise KeyError(name)

    def category(self, name: str) -> CategorySpec:
        if name == ALL_CATEGORY:
            return ALL_CATEGORY_SPEC
        for category in self.categories:
            if category.name == name:
                return category
        raise KeyError(name)

    def complete_categories(self, selected: frozenset[str] | set[str]) -> set[str]:
        """Return the categories fully covered by ``selected``.

        When every tool is selected the result is exactly ``{"all"}``.
        """
        if self.tools and self.tool_names <= selected:
            return {ALL_CATEGORY}
        return {
            name
            for name, members in self._by_category.items()
            if members and members <= selected
        }


ALL_CATEGORY_SPEC = CategorySpec(
    name=ALL_CATEGORY,
    label="All tools",
    description="Access to all available tools",
)


DEFAULT_CATALOG = ToolCatalog(
    categories=(
        CategorySpec(
            name=ToolCategory.READ_ONLY.value,
            label="Read-only tools",
            description="Tools that only read/view information",
        ),
        CategorySpec(
            name=ToolCategory.EDIT.value,
            label="Edit tools",
            description="Tools that can modify files or content",
        ),
        CategorySpec(
            name=ToolCategory.EXECUTION.value,
            label="Execution tools",
            description="Tools that can execute code or commands",
        ),
    ),
    tools=(
        ToolSpec("Task", ToolCategory.EXECUTION.value, "Launch specialized sub-agents"),
        ToolSpec("Bash", ToolCategory.EXECUTION.value, "Execute shell commands"),
        ToolSpec("Glob", ToolCategory.READ_ONLY.value, "Find files by pattern matching"),
        ToolSpec("Grep", ToolCategory.READ_ONLY.value, "Search file contents"),
        ToolSpec("LS", ToolCategory.READ_ONLY.value, "List directory contents"),
        ToolSpec("ExitPlanMode", ToolCategory.EXECUTION.value, "Exit planning mode"),
        ToolSpec("Read", ToolCategory.READ_ONLY.value, "Read file contents"),
        ToolSpec("Edit", ToolCategory.EDIT.value, "Make targeted file edits"),
        ToolSpec("MultiEdit", ToolCategory.EDIT.value, "Make multiple file edits"),
        ToolSpec("Write", ToolCategory.EDIT.value, "Create or overwrite files"),
        ToolSpec("NotebookRead", ToolCategory.READ_ONLY.value, "Read Jupyter notebooks"),
        ToolSpec("NotebookEdit", ToolCategory.EDIT.value, "Edit Jupyter notebooks"),
        ToolSpec("WebFetch", ToolCategory.READ_ONLY.value, "Retrieve content from URLs"),
        ToolSpec("TodoWrite", ToolCategory.EDIT.value, "Manage task lists"),
        ToolSpec("WebSearch", ToolCategory.READ_ONLY.value, "Perform web searches"),
    ),
)
