"""System information, session utilities and the resource monitor views."""

from typing import override

from virtual_shell_mcp.models.result import CommandResult
from virtual_shell_mcp.prompts import get_help_text

from .base import Command, CommandContext

# Control sequence telling the terminal client to wipe its scrollback.
CLEAR_SEQUENCE = "\x1b[2J\x1b[H"

KERNEL_RELEASE = "5.15.0-generic #72-Ubuntu SMP Fri Jan 20 10:24:01 UTC 2023"


class TopCommand(Command):
    @override
    def get_name(self) -> str:
        return "top"

    @override
    def get_aliases(self) -> list[str]:
        return ["htop"]

    @override
    def get_description(self) -> str:
        return "System resource monitor"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        snapshot = context.resources.snapshot()
        uptime = int(snapshot.uptime)
        load = ", ".join(f"{value:.2f}" for value in context.resources.load_average())
        memory = snapshot.memory
        free = memory.total - memory.used
        idle = max(97.9 - snapshot.cpu, 0.0)
        minutes = context.resources.randint(0, 59)
        hundredths = context.resources.randint(0, 99)
        user = context.user

        lines = [
            f"top - {context.now():%H:%M:%S} up {uptime // 3600}:{uptime % 3600 // 60:02d}, "
            f"1 user, load average: {load}",
            f"Tasks: {snapshot.processes} total, 1 running, {snapshot.processes - 1} sleeping, "
            "0 stopped, 0 zombie",
            f"%Cpu(s): {snapshot.cpu}%us, 2.1%sy, 0.0%ni, {idle:.1f}%id, 0.0%wa, 0.0%hi, "
            "0.0%si, 0.0%st",
            f"MiB Mem : {memory.total} total, {free} free, {memory.used} used, 0 buff/cache",
            f"MiB Swap: 2048 total, 2048 free, 0 used. {free} avail Mem",
            "",
            "  PID USER      PR  NI    VIRT    RES    SHR S  %CPU  %MEM     TIME+ COMMAND",
            f" 1234 {user:<9} 20   0  162928  23456  12345 S  {snapshot.cpu:4.1f}   2.1   "
            f"0:{minutes:02d}.{hundredths:02d} {context.config.SHELL_HOSTNAME}",
            f" 5678 {user:<9} 20   0   45678   8901   4567 S   0.7   0.8   0:01.23 systemd",
            f" 9012 {user:<9} 20   0   12345   2345   1234 S   0.3   0.2   0:00.45 bash",
        ]
        return context.ok("\n".join(lines))


class PsCommand(Command):
    @override
    def get_name(self) -> str:
        return "ps"

    @override
    def get_description(self) -> str:
        return "Show running processes"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        processes = context.resources.snapshot().processes
        lines = [
            "  PID TTY          TIME CMD",
            " 1234 pts/0    00:00:01 bash",
            f" 5678 pts/0    00:00:00 {context.config.SHELL_HOSTNAME}",
            " 9012 pts/0    00:00:00 ps",
        ]
        for index in range(min(processes - 3, 10)):
            lines.append(f"{1000 + index * 111:>5} pts/0    00:00:00 process{index + 1}")
        return context.ok("\n".join(lines))


class DfCommand(Command):
    @override
    def get_name(self) -> str:
        return "df"

    @override
    def get_description(self) -> str:
        return "Show disk usage"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        disk = context.resources.snapshot().disk
        rng = context.resources
        lines = [
            "Filesystem     1K-blocks     Used Available Use% Mounted on",
            f"/dev/sda1      {disk.total * 1024} {disk.used * 1024} "
            f"{(disk.total - disk.used) * 1024}  {disk.percentage}% /",
            f"tmpfs               {rng.randint(0, 999999)} {rng.randint(0, 99999)} "
            f"{rng.randint(0, 899999)}   5% /dev/shm",
            f"/dev/sda2         {rng.randint(0, 9999999)} {rng.randint(0, 999999)} "
            f"{rng.randint(0, 8999999)}  10% /home",
        ]
        return context.ok("\n".join(lines))


class FreeCommand(Command):
    @override
    def get_name(self) -> str:
        return "free"

    @override
    def get_description(self) -> str:
        return "Show memory usage"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        memory = context.resources.snapshot().memory
        free = memory.total - memory.used
        lines = [
            "              total        used        free      shared  buff/cache   available",
            f"Mem:    {memory.total:>11} {memory.used:>11} {free:>11} {0:>11} {0:>11} {free:>11}",
            f"Swap:   {2048:>11} {0:>11} {2048:>11}",
        ]
        return context.ok("\n".join(lines))


class UnameCommand(Command):
    @override
    def get_name(self) -> str:
        return "uname"

    @override
    def get_description(self) -> str:
        return "System information"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        if "-a" in args:
            return context.ok(
                f"Linux {context.config.SHELL_HOSTNAME} {KERNEL_RELEASE} "
                "x86_64 x86_64 x86_64 GNU/Linux"
            )
        return context.ok("Linux")


class WhoamiCommand(Command):
    @override
    def get_name(self) -> str:
        return "whoami"

    @override
    def get_description(self) -> str:
        return "Current user"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        return context.ok(context.user)


class ClearCommand(Command):
    @override
    def get_name(self) -> str:
        return "clear"

    @override
    def get_description(self) -> str:
        return "Clear terminal"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        return context.ok(CLEAR_SEQUENCE)


class HelpCommand(Command):
    @override
    def get_name(self) -> str:
        return "help"

    @override
    def get_description(self) -> str:
        return "Show this help"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        return context.ok(get_help_text())


class HistoryCommand(Command):
    """Numbered listing of this session's history, including the current line."""

    @override
    def get_name(self) -> str:
        return "history"

    @override
    def get_description(self) -> str:
        return "Show command history"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        history = context.state.command_history
        return context.ok(
            "\n".join(f"{number:>5}  {line}" for number, line in enumerate(history, start=1))
        )
