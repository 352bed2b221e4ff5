from pathlib import Path
from typing import Sequence


class AgentDeskError(Exception):
    """Base user-facing application error."""


class DecodeError(AgentDeskError):
    """Raised when persisted agent text cannot be turned into an agent."""


class MissingHeaderError(DecodeError):
    def __init__(self, detail: str = "no '---' delimited header found") -> None:
        self.detail = detail
        super().__init__(f"Missing agent header ({detail})")


class MissingRequiredFieldError(DecodeError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing required header field: {field}")


class AgentValidationError(AgentDeskError):
    def __init__(self, name: str, issues: Sequence[object]) -> None:
        self.name = name
        self.issues = list(issues)
        combined = "; ".join(str(issue) for issue in self.issues)
        super().__init__(f"Agent '{name or '<unnamed>'}' is not valid: {combined}")


class SelectionError(AgentDeskError):
    """Caller passed a name the tool catalog does not know."""


class UnknownToolError(SelectionError):
    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"Unknown tool: {tool}")


class UnknownCategoryError(SelectionError):
    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f"Unknown tool category: {category}")


class StoreError(AgentDeskError):
    """Base error for agent file storage."""


class NameConflictError(StoreError):
    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        super().__init__(
            f"An agent named '{name}' already exists: {path}. "
            "Choose a different name or confirm the overwrite."
        )


class AgentNotFoundError(StoreError):
    def __init__(self, name: str, directory: Path) -> None:
        self.name = name
        self.directory = directory
        super().__init__(f"Agent '{name}' not found in {directory}")


class ScopeUnavailableError(StoreError):
    def __init__(self, scope: str) -> None:
        self.scope = scope
        super().__init__(
            f"Scope '{scope}' is not available (pass --project for project agents)"
        )


class SettingsError(AgentDeskError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class InvalidJsonFormatError(SettingsError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidConfigSchemaError(SettingsError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")
