"""Simulated network clients. No request ever leaves the process."""

from typing import override

from virtual_shell_mcp.models.result import CommandResult

from . import canned
from .base import Command, CommandContext, split_flags


class CurlCommand(Command):
    @override
    def get_name(self) -> str:
        return "curl"

    @override
    def get_description(self) -> str:
        return "Transfer data from/to servers"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        _, operands = split_flags(args)
        if not operands:
            return context.fail("curl: missing URL", "Missing URL")

        url = operands[0]
        if not url.startswith("http"):
            scheme = url.split(":")[0]
            return context.fail(
                f'curl: (1) Protocol "{scheme}" not supported or disabled in libcurl',
                "Invalid URL protocol",
            )
        return context.respond(canned.curl_response(url, context.now()), name)


class WgetCommand(Command):
    """Prints a download transcript and saves a placeholder page in the CWD."""

    @override
    def get_name(self) -> str:
        return "wget"

    @override
    def get_description(self) -> str:
        return "Download files from web"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        _, operands = split_flags(args)
        if not operands:
            return context.fail("wget: missing URL", "Missing URL")

        url = operands[0]
        if not url.startswith("http"):
            return context.fail(f"{url}: Unsupported scheme.", "Invalid URL protocol")

        target = context.resolve(canned.download_name(url))
        return context.respond(canned.wget_download(url, target, context.now()), name)


class SshCommand(Command):
    """There is no remote host to reach; connecting is always refused."""

    @override
    def get_name(self) -> str:
        return "ssh"

    @override
    def get_description(self) -> str:
        return "Secure shell remote access"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        _, operands = split_flags(args)
        if not operands:
            return context.ok(canned.SSH_USAGE)
        return context.respond(canned.ssh_connect(operands[0]), name)


class ScpCommand(Command):
    @override
    def get_name(self) -> str:
        return "scp"

    @override
    def get_description(self) -> str:
        return "Secure copy over SSH"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        _, operands = split_flags(args)
        if len(operands) < 2:
            return context.ok(canned.SCP_USAGE)
        return context.respond(canned.scp_copy(operands[0], operands[1]), name)


class RsyncCommand(Command):
    @override
    def get_name(self) -> str:
        return "rsync"

    @override
    def get_description(self) -> str:
        return "Sync files/directories"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        _, operands = split_flags(args)
        if len(operands) < 2:
            return context.fail("rsync: no destination specified", "Missing destination")
        return context.respond(canned.rsync_transfer(operands[0], operands[1]), name)
