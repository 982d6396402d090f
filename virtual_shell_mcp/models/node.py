from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from virtual_shell_mcp.utils.path_utils import base_name

NodeKind = Literal["file", "directory"]

DIRECTORY_SIZE = "4096"
DIRECTORY_PERMISSIONS = "drwxr-xr-x"
FILE_PERMISSIONS = "-rw-r--r--"
EXECUTABLE_PERMISSIONS = "-rwxr-xr-x"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def byte_size(content: str) -> str:
    """Size column value for a file holding `content`."""
    return str(len(content.encode("utf-8")))


class NodeSpec(BaseModel):
    """
    A node as requested by a command, before the store assigns an id and timestamps.

    Missing fields are filled with the defaults for the node's kind.
    """

    path: str
    kind: NodeKind
    content: str | None = None
    permissions: str | None = None
    size: str | None = None

    @model_validator(mode="after")
    def _apply_kind_defaults(self) -> "NodeSpec":
        if self.kind == "directory":
            if self.content is not None:
                raise ValueError("Directories cannot carry content.")
            if self.permissions is None:
                self.permissions = DIRECTORY_PERMISSIONS
            if self.size is None:
                self.size = DIRECTORY_SIZE
        else:
            if self.content is None:
                self.content = ""
            if self.permissions is None:
                self.permissions = FILE_PERMISSIONS
            if self.size is None:
                self.size = byte_size(self.content)
        return self

    @property
    def name(self) -> str:
        return base_name(self.path)


class FilesystemNode(BaseModel):
    """One entry of the virtual filesystem, keyed by its absolute path."""

    model_config = ConfigDict(frozen=True)

    id: str
    path: str
    name: str
    kind: NodeKind
    content: str | None = None
    permissions: str
    size: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def _check_content(self) -> "FilesystemNode":
        if self.kind == "directory" and self.content is not None:
            raise ValueError("Directories cannot carry content.")
        if self.kind == "file" and self.content is None:
            raise ValueError("Files must carry content (possibly empty).")
        return self

    @property
    def is_dir(self) -> bool:
        return self.kind == "directory"

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")

    def to_spec(self, path: str | None = None) -> NodeSpec:
        """A creatable copy of this node, optionally placed at another path."""
        return NodeSpec(
            path=path or self.path,
            kind=self.kind,
            content=self.content,
            permissions=self.permissions,
            size=self.size,
        )
