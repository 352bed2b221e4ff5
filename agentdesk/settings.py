from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator

from agentdesk.agents.models import DEFAULT_COLOR, DEFAULT_MODEL, AgentColor, AgentModel
from agentdesk.constants import (
    APP_NAME,
    DEFAULT_LAUNCH_TIMEOUT_SECONDS,
    SETTINGS_FILENAME,
)
from agentdesk.errors import InvalidConfigSchemaError, InvalidJsonFormatError
from agentdesk.utils import read_json_safe, write_json


SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "claude_binary_path": {"type": ["string", "null"]},
        "launch_timeout_seconds": {"type": "integer", "minimum": 1},
        "default_model": {"enum": [model.value for model in AgentModel]},
        "default_color": {"enum": [color.value for color in AgentColor]},
        "log_level": {
            "type": "string",
            "pattern": "(?i)^(debug|info|warn|warning|error|critical)$",
        },
    },
}


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


@dataclass(frozen=True)
class Settings:
    claude_binary_path: Optional[str] = None
    launch_timeout_seconds: int = DEFAULT_LAUNCH_TIMEOUT_SECONDS
    default_model: AgentModel = DEFAULT_MODEL
    default_color: AgentColor = DEFAULT_COLOR
    log_level: str = "WARNING"

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["default_model"] = AgentModel(self.default_model).value
        payload["default_color"] = AgentColor(self.default_color).value
        return payload


class SettingsRepository:
    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or (Path.home() / ".config" / APP_NAME)
        self._validator = Draft202012Validator(SETTINGS_SCHEMA)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def settings_path(self) -> Path:
        return self.root / SETTINGS_FILENAME

    def load(self) -> Settings:
        payload, error = read_json_safe(self.settings_path)
        if error is not None:
            raise InvalidJsonFormatError(self.settings_path, error)
        if payload is None:
            return Settings()

        schema_error = next(iter(self._validator.iter_errors(payload)), None)
        if schema_error is not None:
            raise InvalidConfigSchemaError(
                self.settings_path, format_schema_error(schema_error)
            )

        defaults = Settings()
        return Settings(
            claude_binary_path=payload.get(
                "claude_binary_path", defaults.claude_binary_path
            ),
            launch_timeout_seconds=payload.get(
                "launch_timeout_seconds", defaults.launch_timeout_seconds
            ),
            default_model=AgentModel(
                payload.get("default_model", defaults.default_model.value)
            ),
            default_color=AgentColor(
                payload.get("default_color", defaults.default_color.value)
            ),
            log_level=payload.get("log_level", defaults.log_level),
        )

    def save(self, settings: Settings) -> None:
        write_json(self.settings_path, settings.as_dict())
