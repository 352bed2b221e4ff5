"""Run the external ``claude`` command line with an agent's profile."""

from __future__ import annotations

import os
import shutil
import subprocess
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from agentdesk.agents.catalog import DEFAULT_CATALOG, ToolCatalog
from agentdesk.agents.codec import canonical_tools, split_tools
from agentdesk.agents.models import AgentModel, AgentRecord
from agentdesk.constants import (
    CLAUDE_BINARY_FALLBACKS,
    CLAUDE_BINARY_NAME,
    DEFAULT_LAUNCH_TIMEOUT_SECONDS,
)
from agentdesk.logging import get_logger

logger = get_logger("launcher")


@dataclass(frozen=True)
class LaunchResult:
    success: bool
    output: str = ""
    reason: Optional[str] = None
    returncode: Optional[int] = None
    duration_seconds: float = 0.0


class ILauncher(ABC):
    @abstractmethod
    def execute(
        self,
        tools: str,
        model: AgentModel,
        task: str,
        *,
        system_prompt: Optional[str] = None,
        cwd: Optional[Path] = None,
    ) -> LaunchResult:
        """Run a task with the given capability profile and model."""


def find_claude_binary(configured: Optional[str] = None) -> Optional[str]:
    """Resolve the claude executable: settings override, PATH, then known installs."""
    candidates: list[str] = []
    if configured:
        candidates.append(configured)
    found = shutil.which(CLAUDE_BINARY_NAME)
    if found:
        candidates.append(found)
    candidates.extend(CLAUDE_BINARY_FALLBACKS)

    for candidate in candidates:
        path = Path(candidate).expanduser()
        if path.is_file() and os.access(path, os.X_OK):
            return str(path)
    return None


def build_command(
    binary: str,
    tools: str,
    model: AgentModel,
    task: str,
    system_prompt: Optional[str] = None,
) -> list[str]:
    command = [binary, "-p", task]
    allowed = canonical_tools(tools)
    if allowed:
        command.extend(["--allowedTools", allowed])
    if AgentModel(model) != AgentModel.INHERIT:
        command.extend(["--model", AgentModel(model).value])
    if system_prompt:
        command.extend(["--append-system-prompt", system_prompt])
    return command


class ClaudeLauncher(ILauncher):
    def __init__(
        self,
        binary_path: Optional[str] = None,
        timeout_seconds: int = DEFAULT_LAUNCH_TIMEOUT_SECONDS,
    ) -> None:
        self._binary_path = binary_path
        self._timeout_seconds = timeout_seconds

    def execute(
        self,
        tools: str,
        model: AgentModel,
        task: str,
        *,
        system_prompt: Optional[str] = None,
        cwd: Optional[Path] = None,
    ) -> LaunchResult:
        if not task.strip():
            return LaunchResult(success=False, reason="Task description is empty")

        binary = find_claude_binary(self._binary_path)
        if binary is None:
            logger.warning("claude binary not found")
            return LaunchResult(
                success=False,
                reason="Could not find the claude binary (set claude_binary_path)",
            )

        command = build_command(binary, tools, model, task, system_prompt)
        logger.info(
            "Launching %s (model=%s, tools=%s)",
            binary,
            AgentModel(model).value,
            tools or "-",
        )

        start = time.monotonic()
        try:
            proc = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self._timeout_seconds,
                cwd=str(cwd) if cwd is not None else None,
            )
        except subprocess.TimeoutExpired:
            elapsed = time.monotonic() - start
            logger.warning("claude timed out after %ss", self._timeout_seconds)
            return LaunchResult(
                success=False,
                reason=f"Timed out after {self._timeout_seconds}s",
                duration_seconds=elapsed,
            )
        except OSError as exc:
            logger.warning("claude could not be started: %s", exc)
            return LaunchResult(success=False, reason=f"Failed to start claude: {exc}")

        elapsed = time.monotonic() - start
        stdout = proc.stdout or ""
        stderr = proc.stderr or ""
        if proc.returncode != 0:
            reason = stderr.strip() or stdout.strip() or "no output"
            logger.warning("claude exited with %s: %s", proc.returncode, reason)
            return LaunchResult(
                success=False,
                output=stdout,
                reason=f"claude exited with code {proc.returncode}: {reason}",
                returncode=proc.returncode,
                duration_seconds=elapsed,
            )

        return LaunchResult(
            success=True,
            output=stdout,
            returncode=proc.returncode,
            duration_seconds=elapsed,
        )


def run_agent(
    record: AgentRecord,
    task: str,
    launcher: ILauncher,
    *,
    model: Optional[AgentModel] = None,
    cwd: Optional[Path] = None,
    catalog: ToolCatalog = DEFAULT_CATALOG,
) -> LaunchResult:
    """Run ``task`` with the tools, model and instructions of a stored agent.

    Tools outside the catalog are never passed on; if the stored profile
    names any, the launch is refused with a failure result.
    """
    agent = record.agent
    unknown = [tool for tool in split_tools(agent.tools) if not catalog.has_tool(tool)]
    if unknown:
        return LaunchResult(
            success=False,
            reason=f"Agent '{agent.name}' names unknown tools: {', '.join(unknown)}",
        )

    return launcher.execute(
        agent.tools,
        model or agent.model,
        task,
        system_prompt=agent.system_prompt or None,
        cwd=cwd,
    )
