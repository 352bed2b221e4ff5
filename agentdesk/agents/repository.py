"""File-backed storage for agent definitions, one directory per scope."""

from __future__ import annotations

from pathlib import Path

from agentdesk.agents.catalog import DEFAULT_CATALOG, ToolCatalog
from agentdesk.agents.codec import decode_agent, encode_agent
from agentdesk.agents.models import (
    Agent,
    AgentListing,
    AgentRecord,
    AgentScope,
    DecodeFailure,
)
from agentdesk.agents.validator import AgentValidator, ValidationCode, ValidationIssue
from agentdesk.constants import AGENT_FILE_SUFFIX, AGENTS_DIRNAME, CLAUDE_DIRNAME
from agentdesk.errors import (
    AgentNotFoundError,
    AgentValidationError,
    DecodeError,
    NameConflictError,
    ScopeUnavailableError,
)
from agentdesk.logging import get_logger
from agentdesk.utils import file_timestamps

logger = get_logger("agents.repository")


def name_to_filename(name: str) -> str:
    """Convert an agent name to its file name (``My Agent`` -> ``my-agent.md``)."""
    stem = name.strip().lower().replace(" ", "-").replace("_", "-")
    stem = "".join(ch for ch in stem if (ch.isascii() and ch.isalnum()) or ch == "-")
    return f"{stem}{AGENT_FILE_SUFFIX}" if stem else ""


def agents_dir_for(root: Path) -> Path:
    return root / CLAUDE_DIRNAME / AGENTS_DIRNAME


class AgentRepository:
    def __init__(
        self,
        agents_dir: Path,
        scope: AgentScope = AgentScope.USER,
        catalog: ToolCatalog = DEFAULT_CATALOG,
    ) -> None:
        self._agents_dir = agents_dir
        self._scope = scope
        self._validator = AgentValidator(catalog)

    @property
    def agents_dir(self) -> Path:
        return self._agents_dir

    @property
    def scope(self) -> AgentScope:
        return self._scope

    def path_for(self, name: str) -> Path:
        filename = name_to_filename(name)
        if not filename:
            raise AgentValidationError(
                name,
                [
                    ValidationIssue(
                        ValidationCode.EMPTY_NAME,
                        "Agent name must contain at least one letter or digit.",
                    )
                ],
            )
        return self._agents_dir / filename

    def list_agents(self) -> AgentListing:
        listing = AgentListing()
        if not self._agents_dir.exists():
            return listing

        for child in sorted(self._agents_dir.iterdir()):
            if child.name.startswith(".") or child.suffix != AGENT_FILE_SUFFIX:
                continue
            if not child.is_file():
                continue
            try:
                listing.records.append(self._load(child))
            except (OSError, UnicodeDecodeError, DecodeError) as exc:
                logger.warning("Skipping agent file %s: %s", child, exc)
                listing.failures.append(DecodeFailure(path=child, error=str(exc)))

        listing.records.sort(key=lambda record: (record.name.casefold(), record.name))
        return listing

    def read_text(self, name: str) -> str:
        path = self._locate(name)
        if path is None:
            raise AgentNotFoundError(name, self._agents_dir)
        return path.read_text(encoding="utf-8")

    def get_agent(self, name: str) -> AgentRecord:
        path = self._locate(name)
        if path is None:
            raise AgentNotFoundError(name, self._agents_dir)
        return self._load(path)

    def find_conflict(self, name: str, *, ignore: str | None = None) -> Path | None:
        """Return the file of a different record already using ``name``.

        ``ignore`` names the record being edited, which never conflicts with
        itself. Both the sanitized file name and a case-insensitive match on
        the recorded ``name`` count as a collision.
        """
        ignored = self._locate(ignore) if ignore is not None else None
        target = self.path_for(name)
        if target.exists() and not _same_file(target, ignored):
            return target

        identity = _identity(name)
        for record in self.list_agents().records:
            if record.agent.identity != identity:
                continue
            if _same_file(record.source_path, ignored):
                continue
            return record.source_path
        return None

    def write_text(
        self,
        name: str,
        text: str,
        *,
        original_name: str | None = None,
        overwrite: bool = False,
    ) -> Path:
        target = self.path_for(name)

        source: Path | None = None
        if original_name is not None:
            source = self._locate(original_name)
            if source is None:
                raise AgentNotFoundError(original_name, self._agents_dir)

        # Keeping the name keeps the file, even when it is not named after it.
        if source is not None and (
            _same_file(source, target) or _identity(name) == _identity(original_name)
        ):
            source.write_text(text, encoding="utf-8")
            logger.info("Updated agent '%s' at %s", name, source)
            return source

        if not overwrite:
            conflict = self.find_conflict(name, ignore=original_name)
            if conflict is not None:
                raise NameConflictError(name, conflict)

        self._agents_dir.mkdir(parents=True, exist_ok=True)
        if overwrite:
            target.write_text(text, encoding="utf-8")
        else:
            try:
                with target.open("x", encoding="utf-8") as handle:
                    handle.write(text)
            except FileExistsError:
                raise NameConflictError(name, target) from None

        if source is not None:
            source.unlink()
            logger.info("Renamed agent '%s' to '%s' (%s)", original_name, name, target)
        else:
            logger.info("Created agent '%s' at %s", name, target)
        return target

    def save_agent(
        self,
        agent: Agent,
        *,
        original_name: str | None = None,
        overwrite: bool = False,
    ) -> AgentRecord:
        self._validator.validate_strict(agent)
        path = self.write_text(
            agent.name,
            encode_agent(agent),
            original_name=original_name,
            overwrite=overwrite,
        )
        return self._load(path)

    def delete_agent(self, name: str) -> Path:
        path = self._locate(name)
        if path is None:
            raise AgentNotFoundError(name, self._agents_dir)
        path.unlink()
        logger.info("Deleted agent '%s' from %s", name, path)
        return path

    def _locate(self, name: str) -> Path | None:
        filename = name_to_filename(name)
        if filename:
            path = self._agents_dir / filename
            if path.is_file():
                return path

        identity = _identity(name)
        for record in self.list_agents().records:
            if record.agent.identity == identity:
                return record.source_path
        return None

    def _load(self, path: Path) -> AgentRecord:
        agent = decode_agent(path.read_text(encoding="utf-8"))
        created_at, updated_at = file_timestamps(path)
        return AgentRecord(
            agent=agent,
            scope=self._scope,
            source_path=path,
            created_at=created_at,
            updated_at=updated_at,
        )


class AgentStore:
    """Scoped access to agent repositories (personal and project)."""

    def __init__(
        self,
        user_dir: Path | None = None,
        project_path: Path | None = None,
        catalog: ToolCatalog = DEFAULT_CATALOG,
    ) -> None:
        self._repositories: dict[AgentScope, AgentRepository] = {
            AgentScope.USER: AgentRepository(
                user_dir or agents_dir_for(Path.home()), AgentScope.USER, catalog
            )
        }
        if project_path is not None:
            self._repositories[AgentScope.PROJECT] = AgentRepository(
                agents_dir_for(project_path.expanduser().resolve()),
                AgentScope.PROJECT,
                catalog,
            )

    @property
    def scopes(self) -> list[AgentScope]:
        return list(self._repositories)

    def repository(self, scope: AgentScope | str) -> AgentRepository:
        key = scope if isinstance(scope, AgentScope) else AgentScope(scope)
        try:
            return self._repositories[key]
        except KeyError:
            raise ScopeUnavailableError(key.value) from None

    def list(self, scope: AgentScope | str) -> AgentListing:
        return self.repository(scope).list_agents()

    def read(self, scope: AgentScope | str, name: str) -> str:
        return self.repository(scope).read_text(name)

    def write(
        self,
        scope: AgentScope | str,
        name: str,
        text: str,
        *,
        original_name: str | None = None,
        overwrite: bool = False,
    ) -> Path:
        return self.repository(scope).write_text(
            name, text, original_name=original_name, overwrite=overwrite
        )

    def delete(self, scope: AgentScope | str, name: str) -> Path:
        return self.repository(scope).delete_agent(name)


def _same_file(left: Path | None, right: Path | None) -> bool:
    if left is None or right is None:
        return False
    return left.resolve() == right.resolve()


def _identity(name: str | None) -> str:
    return (name or "").strip().casefold()
