import random
from datetime import datetime, timezone

import pytest

from virtual_shell_mcp.interpreter import CommandInterpreter
from virtual_shell_mcp.models.session import SessionState
from virtual_shell_mcp.resources import ResourceSnapshotGenerator
from virtual_shell_mcp.utils.config import ServiceConfig
from virtual_shell_mcp.vfs.memory import MemoryFilesystemStore

FIXED_NOW = datetime(2024, 3, 5, 9, 7, tzinfo=timezone.utc)


@pytest.fixture
def config():
    """Конфигурация со значениями по умолчанию"""
    return ServiceConfig(
        SHELL_HOME="/home/user",
        SHELL_USER="user",
        SHELL_HOSTNAME="webtermux",
        SHELL_ISOLATE_SESSIONS=False,
        FEATURE_RESOURCES_ENABLED=True,
    )


@pytest.fixture
def store():
    """Хранилище с начальной структурой домашней директории"""
    return MemoryFilesystemStore(home="/home/user")


@pytest.fixture
def shell(store, config):
    """Интерпретатор одной сессии с фиксированными часами и генератором"""
    return CommandInterpreter(
        state=SessionState(session_id="test", home=config.SHELL_HOME),
        store=store,
        config=config,
        resources=ResourceSnapshotGenerator(rng=random.Random(7), use_host_memory=False),
        clock=lambda: FIXED_NOW,
    )
