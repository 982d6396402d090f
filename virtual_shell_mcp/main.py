"""
Entry point for the virtual shell MCP server.

Loads `.env`, configures logging on stderr and starts the configured transport.
"""

import logging
import os
import sys

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str) -> None:
    # stdout carries the MCP stdio transport.
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, stream=sys.stderr)


def setup_environment() -> bool:
    """
    Loads environment variables and configures application-wide logging.

    Returns:
        False if LOG_LEVEL names no known level.
    """
    load_dotenv()

    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        configure_logging("INFO")
        logging.critical("Unknown LOG_LEVEL %r.", level)
        return False

    configure_logging(level)
    logging.debug("Environment loaded, log level %s.", level)
    return True


def run_server() -> None:
    if not setup_environment():
        sys.exit(1)

    # Deferred so that ServiceConfig sees the variables loaded from .env.
    from .server import mcp_app, server_config

    logger = logging.getLogger(__name__)
    logger.info(
        "Virtual shell for %s@%s, home %s, %s filesystem",
        server_config.SHELL_USER,
        server_config.SHELL_HOSTNAME,
        server_config.SHELL_HOME,
        "per-session" if server_config.SHELL_ISOLATE_SESSIONS else "shared",
    )
    match server_config.MCP_TRANSPORT:
        case "stdio":
            logger.info("Serving MCP over stdio")
        case transport:
            logger.info(
                "Serving MCP over %s on %s:%s",
                transport,
                server_config.MCP_HOST,
                server_config.MCP_PORT,
            )

    mcp_app.run(transport=server_config.MCP_TRANSPORT)


if __name__ == "__main__":
    run_server()
