#!/usr/bin/env python3
"""
Unit тесты для interpreter.py
"""

from typing import override

import pytest

from virtual_shell_mcp.commands.base import Command, CommandContext
from virtual_shell_mcp.commands.registry import DEFAULT_COMMANDS, build_command_table
from virtual_shell_mcp.errors import CommandError
from virtual_shell_mcp.interpreter import CommandInterpreter
from virtual_shell_mcp.models.result import CommandResult
from virtual_shell_mcp.models.session import SessionState


class ExplodingCommand(Command):
    """Команда, которая всегда падает с непредвиденной ошибкой"""

    @override
    def get_name(self) -> str:
        return "explode"

    @override
    def get_description(self) -> str:
        return "Always raises"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        raise RuntimeError("boom")


class RefusingCommand(Command):
    @override
    def get_name(self) -> str:
        return "refuse"

    @override
    def get_description(self) -> str:
        return "Always refuses"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        raise CommandError("refuse: not today", "Refused")


class TestCommandInterpreter:
    """Тесты для CommandInterpreter"""

    @pytest.fixture
    def custom_shell(self, store, config):
        """Интерпретатор с тестовыми командами"""
        return CommandInterpreter(
            state=SessionState(session_id="custom"),
            store=store,
            config=config,
            commands=build_command_table([ExplodingCommand(), RefusingCommand()]),
        )

    @pytest.mark.asyncio
    async def test_end_to_end_scenario(self, shell):
        """Тест полного сценария: создание, просмотр и удаление файла"""
        assert (await shell.execute("pwd")).output == "/home/user"
        assert (await shell.execute("mkdir proj")).success

        result = await shell.execute("cd proj")
        assert result.current_directory == "/home/user/proj"

        assert (await shell.execute("touch a.txt")).success
        assert (await shell.execute("ls")).output == "a.txt"
        assert (await shell.execute("cat a.txt")).output == ""
        assert (await shell.execute("rm a.txt")).success

        result = await shell.execute("ls")
        assert result.success
        assert result.output == ""

    @pytest.mark.asyncio
    async def test_empty_line(self, shell):
        """Тест: пустая строка успешна и не попадает в историю"""
        result = await shell.execute("   ")
        assert result.success
        assert result.output == ""
        assert result.current_directory == "/home/user"
        assert shell.state.command_history == []

    @pytest.mark.asyncio
    async def test_history_records_trimmed_lines(self, shell):
        await shell.execute("  pwd  ")
        await shell.execute("frobnicate --now")
        assert shell.state.command_history == ["pwd", "frobnicate --now"]

    @pytest.mark.asyncio
    async def test_unknown_command(self, shell):
        """Тест: неизвестная команда возвращает ошибку"""
        result = await shell.execute("frobnicate --now")
        assert not result.success
        assert result.output == "Command not found: frobnicate"
        assert result.error == "frobnicate: command not found"
        assert result.current_directory == "/home/user"

    @pytest.mark.asyncio
    async def test_names_are_case_sensitive(self, shell):
        assert not (await shell.execute("LS")).success

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_result(self, custom_shell):
        """Тест: исключение обработчика не выходит за пределы execute"""
        result = await custom_shell.execute("explode")
        assert not result.success
        assert result.output == "Error executing command: boom"
        assert result.error == "boom"

    @pytest.mark.asyncio
    async def test_command_error_becomes_result(self, custom_shell):
        result = await custom_shell.execute("refuse")
        assert not result.success
        assert result.output == "refuse: not today"
        assert result.error == "Refused"

    @pytest.mark.asyncio
    async def test_cwd_recovers_after_external_removal(self, shell, store):
        """Тест: если CWD удален другой сессией, сессия поднимается к предку"""
        await shell.execute("mkdir -p proj/src")
        await shell.execute("cd proj/src")
        store.delete("/home/user/proj", recursive=True)

        result = await shell.execute("pwd")
        assert result.output == "/home/user"

    @pytest.mark.asyncio
    async def test_result_always_carries_directory(self, shell):
        for line in ["ls", "cat ghost", "cd Documents", "nope"]:
            result = await shell.execute(line)
            assert result.current_directory == shell.state.cwd
            assert (result.error is None) == result.success

    def test_every_default_command_is_registered(self, shell):
        names = shell.command_names
        assert len(DEFAULT_COMMANDS) == 39
        for name in ["ls", "python3", "g++", "htop", "vi", "unzip", "pip3", "nodejs", "history"]:
            assert name in names

    def test_duplicate_command_names_are_rejected(self):
        with pytest.raises(ValueError):
            build_command_table([RefusingCommand(), RefusingCommand()])
