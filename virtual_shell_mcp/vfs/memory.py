import logging
import uuid
from threading import RLock
from typing import override

from virtual_shell_mcp.errors import NodeKindError, ParentNotFoundError, StoreError
from virtual_shell_mcp.models.node import FilesystemNode, NodeSpec, utcnow
from virtual_shell_mcp.utils.path_utils import ancestors, base_name, is_descendant, parent_path

from .base import FilesystemStore

logger = logging.getLogger(__name__)

# Placeholder dotfiles seeded into the home directory. Sizes are fixed display
# values and do not match the placeholder content.
BOOTSTRAP_DOTFILES = [
    (".bashrc", "# .bashrc", "3526"),
    (".profile", "# .profile", "807"),
    (".bash_logout", "# logout", "220"),
]

BOOTSTRAP_HOME_DIRECTORIES = ["Documents", "Projects"]


class MemoryFilesystemStore(FilesystemStore):
    """
    In-memory filesystem store backed by a dict keyed by absolute path.

    Dict insertion order is the iteration order: listings that do not sort
    explicitly come back in creation order, and a node replaced in place keeps
    its position. Every public method runs under one re-entrant lock, so the
    store can be shared by concurrent sessions.
    """

    _nodes: dict[str, FilesystemNode]
    _lock: RLock

    def __init__(self, home: str | None = None) -> None:
        self._nodes = {}
        self._lock = RLock()
        self._insert(NodeSpec(path="/", kind="directory"))
        if home is not None:
            self.bootstrap(home)

    def _insert(self, spec: NodeSpec) -> FilesystemNode:
        now = utcnow()
        node = FilesystemNode(
            id=str(uuid.uuid4()),
            path=spec.path,
            name=base_name(spec.path),
            kind=spec.kind,
            content=spec.content,
            permissions=spec.permissions,
            size=spec.size,
            created_at=now,
            updated_at=now,
        )
        self._nodes[spec.path] = node
        return node

    def _check_parent(self, path: str) -> None:
        parent = parent_path(path)
        if parent is None:
            raise StoreError("The root directory cannot be replaced.")
        node = self._nodes.get(parent)
        if node is None or not node.is_dir:
            raise ParentNotFoundError(path)

    @override
    def get(self, path: str) -> FilesystemNode | None:
        with self._lock:
            return self._nodes.get(path)

    @override
    def exists(self, path: str) -> bool:
        with self._lock:
            return path in self._nodes

    @override
    def list_children(self, path: str) -> list[FilesystemNode]:
        normalized = path.rstrip("/") or "/"
        with self._lock:
            return [
                node
                for node in self._nodes.values()
                if node.path != normalized and parent_path(node.path) == normalized
            ]

    @override
    def list_descendants(self, path: str) -> list[FilesystemNode]:
        with self._lock:
            return [node for node in self._nodes.values() if is_descendant(node.path, path)]

    @override
    def all_nodes(self) -> list[FilesystemNode]:
        with self._lock:
            return list(self._nodes.values())

    @override
    def create(self, spec: NodeSpec) -> FilesystemNode:
        with self._lock:
            self._check_parent(spec.path)
            existing = self._nodes.get(spec.path)
            if existing is not None and existing.kind != spec.kind:
                raise NodeKindError(
                    f"Cannot replace {existing.kind} '{spec.path}' with a {spec.kind}."
                )
            return self._insert(spec)

    @override
    def update(
        self,
        path: str,
        *,
        content: str | None = None,
        permissions: str | None = None,
        size: str | None = None,
    ) -> FilesystemNode | None:
        changes = {
            key: value
            for key, value in (("content", content), ("permissions", permissions), ("size", size))
            if value is not None
        }
        with self._lock:
            node = self._nodes.get(path)
            if node is None:
                return None
            if "content" in changes and node.is_dir:
                raise NodeKindError(f"Cannot write content to directory '{path}'.")
            changes["updated_at"] = utcnow()
            updated = node.model_copy(update=changes)
            self._nodes[path] = updated
            return updated

    @override
    def delete(self, path: str, recursive: bool = False) -> bool:
        if path == "/":
            return False
        with self._lock:
            if path not in self._nodes:
                return False
            if recursive:
                for node in self.list_descendants(path):
                    del self._nodes[node.path]
            del self._nodes[path]
        logger.debug("Deleted %s (recursive=%s)", path, recursive)
        return True

    @override
    def copy(self, source: str, destination: str, recursive: bool = False) -> FilesystemNode:
        with self._lock:
            node = self._nodes.get(source)
            if node is None:
                raise StoreError(f"Cannot copy missing node '{source}'.")
            if destination == source or is_descendant(destination, source):
                raise StoreError(f"Cannot copy '{source}' into itself.")
            subtree = self.list_descendants(source) if recursive and node.is_dir else []
            copied = self.create(node.to_spec(destination))
            for child in subtree:
                self.create(child.to_spec(destination + child.path[len(source):]))
            return copied

    @override
    def move(self, source: str, destination: str) -> FilesystemNode:
        with self._lock:
            node = self._nodes.get(source)
            if node is None:
                raise StoreError(f"Cannot move missing node '{source}'.")
            if source == "/":
                raise StoreError("The root directory cannot be moved.")
            if destination == source or is_descendant(destination, source):
                raise StoreError(f"Cannot move '{source}' into itself.")
            self._check_parent(destination)
            existing = self._nodes.get(destination)
            if existing is not None and existing.kind != node.kind:
                raise NodeKindError(
                    f"Cannot replace {existing.kind} '{destination}' with a {node.kind}."
                )

            subtree = [node] + self.list_descendants(source)
            now = utcnow()
            for item in subtree:
                del self._nodes[item.path]
            moved = None
            for item in subtree:
                new_path = destination + item.path[len(source):]
                relocated = item.model_copy(
                    update={"path": new_path, "name": base_name(new_path), "updated_at": now}
                )
                self._nodes[new_path] = relocated
                if moved is None:
                    moved = relocated
            return moved

    @override
    def bootstrap(self, home: str) -> None:
        with self._lock:
            for path in ancestors(home)[1:] + [home]:
                if path not in self._nodes:
                    self._insert(NodeSpec(path=path, kind="directory"))
            for name in BOOTSTRAP_HOME_DIRECTORIES:
                path = f"{home}/{name}"
                if path not in self._nodes:
                    self._insert(NodeSpec(path=path, kind="directory"))
            for name, content, size in BOOTSTRAP_DOTFILES:
                path = f"{home}/{name}"
                if path not in self._nodes:
                    self._insert(NodeSpec(path=path, kind="file", content=content, size=size))
        logger.info("Filesystem bootstrapped with home directory %s", home)
