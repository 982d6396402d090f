"""
Abstract Filesystem Store Interface

Defines the contract for all virtual filesystem backends. The store is a
mapping from absolute path to FilesystemNode; the parent/child relation is
derived from the paths and never stored.
"""

from abc import ABC, abstractmethod

from virtual_shell_mcp.models.node import FilesystemNode, NodeSpec


class FilesystemStore(ABC):
    """
    Abstract interface for virtual filesystem backends.

    Invariants every implementation must keep:
        - exactly one node per path;
        - `/` always exists, is a directory and cannot be deleted;
        - `create`, `copy` and `move` only place a node under an existing directory.

    A non-recursive `delete` of a directory leaves its descendants in place;
    callers that must not orphan nodes check `list_children` first, as `rm` does.

    Presence and absence carry success and failure: lookups return None and
    `delete` returns False instead of raising.
    """

    @abstractmethod
    def get(self, path: str) -> FilesystemNode | None:
        """Return the node at `path`, or None."""
        ...

    @abstractmethod
    def exists(self, path: str) -> bool:
        ...

    @abstractmethod
    def list_children(self, path: str) -> list[FilesystemNode]:
        """
        Return the nodes whose derived parent is `path`.

        A trailing slash on `path` is ignored. Order is the store's iteration
        order, which implementations must keep stable.
        """
        ...

    @abstractmethod
    def list_descendants(self, path: str) -> list[FilesystemNode]:
        """Return every node strictly below `path`, in iteration order."""
        ...

    @abstractmethod
    def all_nodes(self) -> list[FilesystemNode]:
        ...

    @abstractmethod
    def create(self, spec: NodeSpec) -> FilesystemNode:
        """
        Create a node, replacing any node of the same kind at that path.

        Raises:
            ParentNotFoundError: If the derived parent is not a directory.
            NodeKindError: If a node of the other kind already occupies the path.
        """
        ...

    @abstractmethod
    def update(
        self,
        path: str,
        *,
        content: str | None = None,
        permissions: str | None = None,
        size: str | None = None,
    ) -> FilesystemNode | None:
        """Merge the given fields into the node and refresh `updated_at`."""
        ...

    @abstractmethod
    def delete(self, path: str, recursive: bool = False) -> bool:
        """
        Remove the node at `path`.

        Without `recursive` only the exact node is removed; descendants are
        left as they are. Returns True iff a node existed and was removed.
        """
        ...

    @abstractmethod
    def copy(self, source: str, destination: str, recursive: bool = False) -> FilesystemNode:
        """Copy a node (and, with `recursive`, its subtree) to a new path."""
        ...

    @abstractmethod
    def move(self, source: str, destination: str) -> FilesystemNode:
        """Move a node together with its whole subtree to a new path."""
        ...

    @abstractmethod
    def bootstrap(self, home: str) -> None:
        """Seed the initial directory layout and dotfiles."""
        ...
