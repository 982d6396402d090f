"""Exception hierarchy for the virtual shell."""


class ShellError(Exception):
    """Base class for all virtual shell errors."""


class CommandError(ShellError):
    """
    Raised by a command handler for an expected failure.

    The interpreter turns it into a failed CommandResult: `output` is the
    console line a real shell would print, `error` is the short reason.
    """

    def __init__(self, output: str, error: str | None = None) -> None:
        super().__init__(output)
        self.output = output
        self.error = error or output


class SessionNotFoundError(ShellError):
    """Raised when a session id is not known to the session manager."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session '{session_id}' does not exist.")
        self.session_id = session_id


class StoreError(ShellError):
    """Raised when a store operation would break a namespace invariant."""


class ParentNotFoundError(StoreError):
    """The derived parent of a path is missing or is not a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Parent directory of '{path}' does not exist.")
        self.path = path


class NodeKindError(StoreError):
    """A node would change kind (file <-> directory) in place."""
