"""Settings for the virtual shell server."""

from pydantic_settings import BaseSettings


class ServiceConfig(BaseSettings):
    """
    Server and shell settings, read from environment variables.

    main.py loads `.env` into the environment before the first instance is built.
    """

    # "stdio", "sse" or "streamable-http"
    MCP_TRANSPORT: str = "stdio"
    # Bind address and port for the HTTP transports.
    MCP_HOST: str = "0.0.0.0"
    MCP_PORT: int = 8660
    # Browser origins allowed on the HTTP transports, as a JSON list. "*" allows any.
    MCP_CORS_ORIGINS: list[str] = ["*"]

    # Home directory of the simulated user; new sessions start here.
    SHELL_HOME: str = "/home/user"
    # Login name shown by whoami, ls -l and top.
    SHELL_USER: str = "user"
    # Host name shown by uname -a and the process lists.
    SHELL_HOSTNAME: str = "webtermux"
    # False: all sessions share one lock-protected namespace.
    # True: every session gets its own freshly bootstrapped namespace.
    SHELL_ISOLATE_SESSIONS: bool = False

    # Registers the `system_resources` tool.
    FEATURE_RESOURCES_ENABLED: bool = True

    class Config:
        # No env_file: .env is loaded by main.py through python-dotenv.
        extra = "ignore"
