"""Process-wide providers shared by all MCP tool calls."""

import logging
from functools import lru_cache

from virtual_shell_mcp.resources import ResourceSnapshotGenerator
from virtual_shell_mcp.utils.config import ServiceConfig
from virtual_shell_mcp.utils.session_manager import SessionManager
from virtual_shell_mcp.vfs.base import FilesystemStore
from virtual_shell_mcp.vfs.memory import MemoryFilesystemStore

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """The settings read once from the environment at first use."""
    return ServiceConfig()



@lru_cache
def get_filesystem_store() -> FilesystemStore:
    """Returns the process-wide filesystem store, bootstrapped on first use."""
    config = get_base_config()
    logger.info("Initializing shared filesystem store.")
    return MemoryFilesystemStore(home=config.SHELL_HOME)


@lru_cache
def get_resource_generator() -> ResourceSnapshotGenerator:
    """Returns a cached instance of the ResourceSnapshotGenerator."""
    logger.info("Initializing ResourceSnapshotGenerator singleton.")
    return ResourceSnapshotGenerator()


@lru_cache
def get_session_manager() -> SessionManager:
    """Returns the SessionManager singleton wired to the shared store."""
    logger.info("Initializing SessionManager singleton.")
    return SessionManager(
        config=get_base_config(),
        shared_store=get_filesystem_store(),
        resources=get_resource_generator(),
    )
