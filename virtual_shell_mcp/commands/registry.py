"""Builds the name -> handler table used by the interpreter."""

import logging

from .base import Command
from .dev_commands import (
    GccCommand,
    GitCommand,
    JavacCommand,
    JavaCommand,
    MakeCommand,
    NodeCommand,
    NpmCommand,
    PipCommand,
    PythonCommand,
)
from .filesystem_commands import (
    CatCommand,
    CdCommand,
    ChmodCommand,
    CpCommand,
    EchoCommand,
    FindCommand,
    GrepCommand,
    LsCommand,
    MkdirCommand,
    MvCommand,
    PwdCommand,
    RmCommand,
    TouchCommand,
)
from .network_commands import CurlCommand, RsyncCommand, ScpCommand, SshCommand, WgetCommand
from .system_commands import (
    ClearCommand,
    DfCommand,
    FreeCommand,
    HelpCommand,
    HistoryCommand,
    PsCommand,
    TopCommand,
    UnameCommand,
    WhoamiCommand,
)
from .tool_commands import EditorCommand, TarCommand, ZipCommand

logger = logging.getLogger(__name__)

DEFAULT_COMMANDS: list[type[Command]] = [
    # Filesystem
    PwdCommand,
    LsCommand,
    CdCommand,
    MkdirCommand,
    TouchCommand,
    CatCommand,
    EchoCommand,
    RmCommand,
    CpCommand,
    MvCommand,
    ChmodCommand,
    FindCommand,
    GrepCommand,
    # Network
    CurlCommand,
    WgetCommand,
    SshCommand,
    ScpCommand,
    RsyncCommand,
    # Development
    GitCommand,
    PythonCommand,
    NodeCommand,
    JavaCommand,
    JavacCommand,
    GccCommand,
    MakeCommand,
    NpmCommand,
    PipCommand,
    # System
    TopCommand,
    PsCommand,
    DfCommand,
    FreeCommand,
    UnameCommand,
    WhoamiCommand,
    ClearCommand,
    HelpCommand,
    HistoryCommand,
    # Editors and archives
    EditorCommand,
    TarCommand,
    ZipCommand,
]


def build_command_table(commands: list[Command] | None = None) -> dict[str, Command]:
    """
    Maps every command name and alias to its handler.

    Raises:
        ValueError: If two handlers claim the same name.
    """
    handlers = commands if commands is not None else [cls() for cls in DEFAULT_COMMANDS]
    table: dict[str, Command] = {}
    for handler in handlers:
        for name in handler.get_names():
            if name in table:
                raise ValueError(f"Command name '{name}' is registered twice.")
            table[name] = handler
    logger.debug("Registered %d command names", len(table))
    return table
