"""
Command interpreter for one interactive session.

Turns a raw command line into a CommandResult: trim, record history,
tokenize on whitespace, dispatch by exact name, and convert every failure
into a result. Nothing raised by a handler escapes `execute`.
"""

import logging
from datetime import datetime
from typing import Callable

from virtual_shell_mcp.commands.base import Command, CommandContext
from virtual_shell_mcp.commands.registry import build_command_table
from virtual_shell_mcp.errors import CommandError
from virtual_shell_mcp.models.node import utcnow
from virtual_shell_mcp.models.result import CommandResult
from virtual_shell_mcp.models.session import SessionState
from virtual_shell_mcp.resources import ResourceSnapshotGenerator
from virtual_shell_mcp.utils.config import ServiceConfig
from virtual_shell_mcp.utils.path_utils import parent_path
from virtual_shell_mcp.vfs.base import FilesystemStore

logger = logging.getLogger(__name__)


class CommandInterpreter:
    """Dispatches command lines for a single session against a filesystem store."""

    def __init__(
        self,
        state: SessionState,
        store: FilesystemStore,
        config: ServiceConfig | None = None,
        resources: ResourceSnapshotGenerator | None = None,
        commands: dict[str, Command] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.state = state
        self.store = store
        self.config = config or ServiceConfig()
        self._commands = commands if commands is not None else build_command_table()
        self._context = CommandContext(
            state=state,
            store=store,
            config=self.config,
            resources=resources or ResourceSnapshotGenerator(),
            clock=clock,
        )
        # A shared store may no longer hold the configured home.
        self._ensure_cwd()

    @property
    def command_names(self) -> list[str]:
        return sorted(self._commands)

    def _ensure_cwd(self) -> None:
        """
        Moves the CWD up to the nearest existing directory.

        Another session sharing the store, or this session's own `rm`/`mv`,
        may have removed the directory the session was in.
        """
        path = self.state.cwd
        while path is not None:
            node = self.store.get(path)
            if node is not None and node.is_dir:
                break
            path = parent_path(path)
        path = path or "/"
        if path != self.state.cwd:
            logger.info(
                "Session %s: working directory %s vanished, moved to %s",
                self.state.session_id,
                self.state.cwd,
                path,
            )
            self.state.change_directory(path)

    async def execute(self, command_line: str) -> CommandResult:
        trimmed = command_line.strip()
        self._ensure_cwd()
        if not trimmed:
            return self._context.ok()

        self.state.record(trimmed)
        name, *args = trimmed.split()
        handler = self._commands.get(name)
        if handler is None:
            logger.info("Session %s: unknown command %r", self.state.session_id, name)
            return self._context.fail(f"Command not found: {name}", f"{name}: command not found")

        logger.debug("Session %s: dispatching %r with %d args", self.state.session_id, name, len(args))
        try:
            result = await handler.execute(self._context, name, args)
        except CommandError as e:
            result = self._context.fail(e.output, e.error)
        except Exception as e:
            logger.error(f"Error executing command {name!r}: {e}", exc_info=True)
            result = self._context.fail(f"Error executing command: {e}", str(e))

        self._ensure_cwd()
        if result.current_directory != self.state.cwd:
            result = result.model_copy(update={"current_directory": self.state.cwd})
        return result
