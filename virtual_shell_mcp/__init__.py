"""A session-scoped Unix-like shell over a virtual filesystem, served over MCP."""

__version__ = "0.1.0"
