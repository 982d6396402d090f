"""Base class and shared helpers for command handlers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from virtual_shell_mcp.errors import CommandError
from virtual_shell_mcp.models.node import FilesystemNode, NodeSpec, utcnow
from virtual_shell_mcp.models.result import CommandResult
from virtual_shell_mcp.models.session import SessionState
from virtual_shell_mcp.resources import ResourceSnapshotGenerator
from virtual_shell_mcp.utils.config import ServiceConfig
from virtual_shell_mcp.utils.path_utils import parent_path, resolve_path
from virtual_shell_mcp.vfs.base import FilesystemStore

from .canned import CannedResponse


@dataclass
class CommandContext:
    """Everything a handler may read or mutate during one invocation."""

    state: SessionState
    store: FilesystemStore
    config: ServiceConfig
    resources: ResourceSnapshotGenerator = field(default_factory=ResourceSnapshotGenerator)
    clock: Callable[[], datetime] = utcnow

    @property
    def cwd(self) -> str:
        return self.state.cwd

    @property
    def home(self) -> str:
        return self.config.SHELL_HOME

    @property
    def user(self) -> str:
        return self.config.SHELL_USER

    def resolve(self, raw: str) -> str:
        return resolve_path(self.state.cwd, raw, home=self.config.SHELL_HOME)

    def now(self) -> datetime:
        return self.clock()

    def ok(self, output: str = "") -> CommandResult:
        return CommandResult(output=output, current_directory=self.state.cwd, success=True)

    def fail(self, output: str, error: str) -> CommandResult:
        return CommandResult(
            output=output, error=error, current_directory=self.state.cwd, success=False
        )

    def write_node(self, spec: NodeSpec, program: str) -> FilesystemNode:
        """
        Creates or overwrites a node produced by a command.

        Raises:
            CommandError: If the parent is missing or a directory is in the way.
        """
        parent = self.store.get(parent_path(spec.path) or "/")
        if parent is None or not parent.is_dir:
            raise CommandError(
                f"{program}: cannot create '{spec.path}': No such file or directory",
                "No such file or directory",
            )
        existing = self.store.get(spec.path)
        if existing is not None and existing.kind != spec.kind:
            reason = "Is a directory" if existing.is_dir else "Not a directory"
            raise CommandError(f"{program}: cannot create '{spec.path}': {reason}", reason)
        return self.store.create(spec)

    def respond(self, canned: CannedResponse, program: str) -> CommandResult:
        """Applies a canned response's side effects and wraps its text in a result."""
        for spec in canned.effects:
            self.write_node(spec, program)
        if canned.success:
            return self.ok(canned.output)
        return self.fail(canned.output, canned.error)


def split_flags(args: list[str]) -> tuple[set[str], list[str]]:
    """
    Separates short option letters from operands.

    `-la` and `-l -a` both yield {"l", "a"}. A lone `-` is an operand.
    """
    flags: set[str] = set()
    operands: list[str] = []
    for arg in args:
        if arg.startswith("-") and len(arg) > 1:
            flags.update(arg.lstrip("-"))
        else:
            operands.append(arg)
    return flags, operands


class Command(ABC):
    """
    A shell command handler.

    Handlers return a CommandResult for every outcome they anticipate and may
    raise CommandError as a shortcut for a single-line failure.
    """

    @abstractmethod
    def get_name(self) -> str:
        pass

    def get_aliases(self) -> list[str]:
        return []

    @abstractmethod
    def get_description(self) -> str:
        pass

    @abstractmethod
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        """
        Run the command.

        Args:
            context: Session, store and configuration for this invocation.
            name: The name the command was invoked as (may be an alias).
            args: Whitespace-separated arguments after the command name.
        """
        pass

    def get_names(self) -> list[str]:
        return [self.get_name(), *self.get_aliases()]
