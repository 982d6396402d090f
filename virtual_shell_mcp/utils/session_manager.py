import logging
import uuid
from threading import Lock

from virtual_shell_mcp.errors import SessionNotFoundError
from virtual_shell_mcp.interpreter import CommandInterpreter
from virtual_shell_mcp.models.result import CommandResult
from virtual_shell_mcp.models.session import SessionState
from virtual_shell_mcp.resources import ResourceSnapshotGenerator
from virtual_shell_mcp.utils.config import ServiceConfig
from virtual_shell_mcp.vfs.base import FilesystemStore
from virtual_shell_mcp.vfs.memory import MemoryFilesystemStore

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages the interpreters of all interactive sessions.

    Each session owns its SessionState and CommandInterpreter. Whether the
    sessions share one filesystem store or get a private one each is decided
    by `SHELL_ISOLATE_SESSIONS`.
    """

    def __init__(
        self,
        config: ServiceConfig,
        shared_store: FilesystemStore | None = None,
        resources: ResourceSnapshotGenerator | None = None,
    ) -> None:
        self._config = config
        self._shared_store = shared_store or MemoryFilesystemStore(home=config.SHELL_HOME)
        self._resources = resources or ResourceSnapshotGenerator()
        # Simple dict as an in-process session storage.
        self._sessions: dict[str, CommandInterpreter] = {}
        self._lock = Lock()

    def _store_for_new_session(self) -> FilesystemStore:
        if self._config.SHELL_ISOLATE_SESSIONS:
            return MemoryFilesystemStore(home=self._config.SHELL_HOME)
        return self._shared_store

    def create_session(self) -> str:
        """Creates a session starting in the home directory and returns its id."""
        session_id = str(uuid.uuid4())
        state = SessionState(session_id=session_id, home=self._config.SHELL_HOME)
        interpreter = CommandInterpreter(
            state=state,
            store=self._store_for_new_session(),
            config=self._config,
            resources=self._resources,
        )
        with self._lock:
            self._sessions[session_id] = interpreter
        logger.info("Created session %s", session_id)
        return session_id

    def _get_interpreter(self, session_id: str) -> CommandInterpreter:
        with self._lock:
            interpreter = self._sessions.get(session_id)
        if interpreter is None:
            raise SessionNotFoundError(session_id)
        return interpreter

    def get_state(self, session_id: str) -> SessionState:
        return self._get_interpreter(session_id).state

    def get_store(self, session_id: str) -> FilesystemStore:
        return self._get_interpreter(session_id).store

    async def execute(self, session_id: str, command_line: str) -> CommandResult:
        """
        Runs one command line in the given session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        return await self._get_interpreter(session_id).execute(command_line)

    def close_session(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.info("Closed session %s", session_id)
        return removed is not None

    def list_sessions(self) -> list[str]:
        with self._lock:
            return list(self._sessions)
