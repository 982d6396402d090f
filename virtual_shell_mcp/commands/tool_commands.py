"""Text editors and archive tools. Output only; archives are never materialized."""

from typing import override

from virtual_shell_mcp.models.result import CommandResult

from . import canned
from .base import Command, CommandContext


class EditorCommand(Command):
    @override
    def get_name(self) -> str:
        return "nano"

    @override
    def get_aliases(self) -> list[str]:
        return ["vim", "vi"]

    @override
    def get_description(self) -> str:
        return "Text editors"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        filename = args[0] if args else "newfile.txt"
        return context.respond(canned.editor_session(name, filename), name)


class TarCommand(Command):
    @override
    def get_name(self) -> str:
        return "tar"

    @override
    def get_description(self) -> str:
        return "Archive files"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        return context.respond(canned.tar(args), name)


class ZipCommand(Command):
    @override
    def get_name(self) -> str:
        return "zip"

    @override
    def get_aliases(self) -> list[str]:
        return ["unzip"]

    @override
    def get_description(self) -> str:
        return "Compress/extract files"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        archive = args[0] if args else "archive.zip"
        if name == "unzip":
            return context.respond(canned.unzip_archive(archive), name)
        return context.respond(canned.zip_archive(archive), name)
