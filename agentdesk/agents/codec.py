"""Decode and encode agent files (YAML frontmatter + instruction body)."""

from __future__ import annotations

import re
from typing import Any, Iterable

import yaml

from agentdesk.agents.models import (
    DEFAULT_COLOR,
    DEFAULT_MODEL,
    Agent,
    AgentColor,
    AgentModel,
)
from agentdesk.constants import HEADER_DELIMITER, TOOLS_SEPARATOR
from agentdesk.errors import MissingHeaderError, MissingRequiredFieldError
from agentdesk.logging import get_logger

logger = get_logger("agents.codec")

_HEADER_RE = re.compile(r"\A---[ \t]*\n(.*?)^---[ \t]*$", re.DOTALL | re.MULTILINE)
_FIELD_ORDER = ("name", "description", "tools", "model", "color", "icon")


def split_tools(raw: Any) -> list[str]:
    """Split a capability list into trimmed, non-empty names (order kept)."""
    if raw is None:
        return []
    if isinstance(raw, str):
        items: Iterable[Any] = raw.split(",")
    elif isinstance(raw, (list, tuple, set, frozenset)):
        items = raw
    else:
        items = [raw]
    return [str(item).strip() for item in items if str(item).strip()]


def canonical_tools(raw: Any) -> str:
    """Return the sorted, de-duplicated capability-list string."""
    return TOOLS_SEPARATOR.join(sorted(set(split_tools(raw))))


def decode_agent(text: str) -> Agent:
    header_text, body = _split_header(text)
    header = _parse_header(header_text)

    name = _scalar(header.get("name"))
    if not name:
        raise MissingRequiredFieldError("name")

    return Agent(
        name=name,
        system_prompt=body.strip(),
        description=_scalar(header.get("description")),
        color=_decode_color(header.get("color"), name),
        model=_decode_model(header.get("model"), name),
        tools=_decode_tools(header.get("tools"), name),
        icon=_scalar(header.get("icon")),
    )


def encode_agent(agent: Agent) -> str:
    values: dict[str, str] = {
        "name": agent.name,
        "description": agent.description,
        "tools": canonical_tools(agent.tools),
        "model": "" if agent.model == DEFAULT_MODEL else AgentModel(agent.model).value,
        "color": "" if agent.color == DEFAULT_COLOR else AgentColor(agent.color).value,
        "icon": agent.icon,
    }
    header: dict[str, str] = {}
    for key in _FIELD_ORDER:
        if key == "name" or values[key]:
            header[key] = values[key]

    parts: list[str] = []
    parts.append(HEADER_DELIMITER)
    parts.append(
        yaml.safe_dump(
            header,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            width=float("inf"),
        ).rstrip()
    )
    parts.append(HEADER_DELIMITER)
    parts.append("")
    parts.append(agent.system_prompt)
    text = "\n".join(parts)
    if not text.endswith("\n"):
        text += "\n"
    return text


def _split_header(text: str) -> tuple[str, str]:
    stripped = text.lstrip("\ufeff").replace("\r\n", "\n").lstrip("\n")
    match = _HEADER_RE.match(stripped)
    if not match:
        if stripped.startswith(HEADER_DELIMITER):
            raise MissingHeaderError("no closing '---' line")
        raise MissingHeaderError()
    return match.group(1), stripped[match.end() :]


def _parse_header(header_text: str) -> dict[str, Any]:
    try:
        # BaseLoader keeps every scalar as written ("0123", "yes", "12:30").
        parsed = yaml.load(header_text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        logger.debug("Header is not valid YAML, reading it line by line: %s", exc)
        return _parse_header_lines(header_text)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        return _parse_header_lines(header_text)
    return {str(key): value for key, value in parsed.items()}


def _parse_header_lines(header_text: str) -> dict[str, Any]:
    """Read ``field: value`` lines, tolerating unquoted special characters."""
    result: dict[str, Any] = {}
    for line in header_text.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        key, sep, value = line.partition(":")
        if not sep or line[:1].isspace():
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        result[key.strip()] = value
    return result


def _scalar(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _decode_model(value: Any, name: str) -> AgentModel:
    text = _scalar(value).lower()
    if not text:
        return DEFAULT_MODEL
    try:
        return AgentModel(text)
    except ValueError:
        logger.warning(
            "Agent '%s': unknown model %r, using '%s'", name, value, DEFAULT_MODEL.value
        )
        return DEFAULT_MODEL


def _decode_color(value: Any, name: str) -> AgentColor:
    text = _scalar(value)
    if not text:
        return DEFAULT_COLOR
    for color in AgentColor:
        if color.value.lower() == text.lower():
            return color
    logger.warning(
        "Agent '%s': unknown color %r, using '%s'", name, value, DEFAULT_COLOR.value
    )
    return DEFAULT_COLOR


def _decode_tools(value: Any, name: str) -> str:
    if isinstance(value, dict):
        logger.warning("Agent '%s': tools must be a list, ignoring mapping", name)
        return ""
    return canonical_tools(value)
