from typing import Final


APP_NAME: Final[str] = "agentdesk"

CLAUDE_DIRNAME: Final[str] = ".claude"
AGENTS_DIRNAME: Final[str] = "agents"
AGENT_FILE_SUFFIX: Final[str] = ".md"

HEADER_DELIMITER: Final[str] = "---"
TOOLS_SEPARATOR: Final[str] = ", "

SETTINGS_FILENAME: Final[str] = "settings.json"
DEFAULT_LAUNCH_TIMEOUT_SECONDS: Final[int] = 300

CLAUDE_BINARY_NAME: Final[str] = "claude"
CLAUDE_BINARY_FALLBACKS: Final[tuple[str, ...]] = (
    "~/.claude/local/claude",
    "~/.local/bin/claude",
    "/usr/local/bin/claude",
    "/opt/homebrew/bin/claude",
)
