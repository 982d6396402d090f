from datetime import datetime, timezone

from pydantic import BaseModel, Field

from virtual_shell_mcp.utils.path_utils import DEFAULT_HOME


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionState(BaseModel):
    """Stores the working directory and command history for a single session."""

    session_id: str = "default"
    home: str = Field(default=DEFAULT_HOME)
    cwd: str | None = None
    command_history: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def model_post_init(self, __context) -> None:
        if self.cwd is None:
            self.cwd = self.home

    def record(self, command: str) -> None:
        """Appends a command to the history. History is never rewritten."""
        self.command_history.append(command)
        self.updated_at = _utcnow()

    def change_directory(self, path: str) -> None:
        self.cwd = path
        self.updated_at = _utcnow()
