"""
MCP server definition for the virtual shell.

This is the transport adapter: it maps MCP tool calls onto the session
manager and frames every outcome as a plain dictionary.
"""

import logging
from typing import Any

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from virtual_shell_mcp.errors import SessionNotFoundError
from virtual_shell_mcp.prompts import get_all_prompts
from virtual_shell_mcp.utils.config import ServiceConfig
from virtual_shell_mcp.utils.dependencies import (
    get_base_config,
    get_resource_generator,
    get_session_manager,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "virtual-shell-mcp"


class TerminalFastMCP(FastMCP):
    """
    FastMCP server for browser terminals.

    The HTTP transports (SSE and streamable HTTP) are wrapped in CORS
    middleware restricted to the configured origins; stdio is untouched.
    """

    def __init__(self, *args: Any, cors_origins: list[str] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._cors_origins = cors_origins or ["*"]

    def _cors_options(self) -> dict[str, Any]:
        if "*" in self._cors_origins:
            return {"allow_origin_regex": ".*"}
        return {"allow_origins": self._cors_origins}

    def _with_cors(self, app: Starlette) -> Starlette:
        cors = Middleware(
            CORSMiddleware,
            allow_credentials=True,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["Mcp-Session-Id"],
            **self._cors_options(),
        )
        app.user_middleware.insert(0, cors)
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        return self._with_cors(super().sse_app(mount_path))

    def streamable_http_app(self) -> Starlette:
        return self._with_cors(super().streamable_http_app())


def build_server(config: ServiceConfig) -> TerminalFastMCP:
    """
    Creates the MCP application for the given configuration.

    The session instructions prompt doubles as the server's `instructions`,
    so clients learn the create_session/execute protocol on connect.
    """
    logger.info(
        "Building %s on %s:%s (CORS origins: %s)",
        SERVER_NAME,
        config.MCP_HOST,
        config.MCP_PORT,
        ", ".join(config.MCP_CORS_ORIGINS),
    )
    return TerminalFastMCP(
        SERVER_NAME,
        instructions=get_all_prompts()["session-instructions"],
        host=config.MCP_HOST,
        port=config.MCP_PORT,
        cors_origins=config.MCP_CORS_ORIGINS,
    )


# main.py reads the transport settings from here.
server_config = get_base_config()
mcp_app = build_server(server_config)


# --- Prompt Handlers ---
@mcp_app.prompt(title="Virtual Shell Session Instructions")
def get_session_prompt() -> str:
    """Explains how to drive the virtual shell through its tools."""
    return get_all_prompts()["session-instructions"]


@mcp_app.prompt(title="Virtual Shell Command Reference")
def get_help_prompt() -> str:
    """The reference text printed by the `help` command."""
    return get_all_prompts()["help"]


def _failure(message: str) -> dict[str, Any]:
    return {"status": "error", "error": message, "exit_code": 1}


# --- Tool Definitions ---

@mcp_app.tool()
async def create_session(context: Context) -> dict[str, Any]:
    """
    Opens a new terminal session in the user's home directory.

    Sessions keep their working directory and command history until closed.

    Returns:
        The new `session_id` and its `current_directory`.
    """
    try:
        manager = get_session_manager()
        session_id = manager.create_session()
        cwd = manager.get_state(session_id).cwd
    except Exception as e:
        logger.error(f"Could not open a terminal session: {e}", exc_info=True)
        return _failure(str(e))
    return {"status": "success", "session_id": session_id, "current_directory": cwd}


@mcp_app.tool(name="execute")
async def execute_command(
    context: Context,
    session_id: str,
    command: str,
) -> dict[str, Any]:
    """
    Runs one command line in a terminal session.

    Only whitespace splitting is applied: no pipes, globbing or variables.
    `echo "text" > file` and `>>` are the only redirections understood.

    Args:
        session_id: The id returned by `create_session`.
        command: The command line, e.g. `ls -la` or `mkdir -p src/app`.

    Returns:
        `result` holds output, error, currentDirectory and success;
        `exit_code` is 0 exactly when the command succeeded.
    """
    logger.debug("Session %s <- %r", session_id, command)
    try:
        result = await get_session_manager().execute(session_id, command)
    except SessionNotFoundError as e:
        logger.warning(str(e))
        return _failure(str(e))
    except Exception as e:
        logger.error(f"Command {command!r} failed in session {session_id}: {e}", exc_info=True)
        return _failure(str(e))

    exit_code = 0 if result.success else 1
    return {
        "status": "success" if result.success else "error",
        "result": result.to_wire(),
        "exit_code": exit_code,
    }


@mcp_app.tool()
async def close_session(context: Context, session_id: str) -> dict[str, Any]:
    """
    Ends a terminal session. Files it created stay in the shared filesystem.

    Args:
        session_id: The id returned by `create_session`.
    """
    if not get_session_manager().close_session(session_id):
        return _failure(str(SessionNotFoundError(session_id)))
    return {"status": "success", "result": f"Session {session_id} closed.", "exit_code": 0}


# --- Resource Monitor (Feature Flagged) ---
if server_config.FEATURE_RESOURCES_ENABLED:

    @mcp_app.tool()
    async def system_resources(context: Context) -> dict[str, Any]:
        """
        Reports simulated CPU, memory, disk, process count and uptime figures.

        Values are synthetic dashboard data; only their ranges are meaningful.
        """
        try:
            snapshot = get_resource_generator().snapshot()
        except Exception as e:
            logger.error(f"Resource snapshot failed: {e}", exc_info=True)
            return _failure(str(e))
        return {"status": "success", "result": snapshot.model_dump(), "exit_code": 0}

    logger.info("Registered the 'system_resources' tool.")
else:
    logger.warning("FEATURE_RESOURCES_ENABLED is off; 'system_resources' is not registered.")
