from typing import Any

from pydantic import BaseModel, Field, model_validator

GENERIC_FAILURE = "Command failed"


class CommandResult(BaseModel):
    """The structured outcome of one command line."""

    output: str = ""
    error: str | None = None
    current_directory: str
    success: bool = True

    @model_validator(mode="after")
    def _error_iff_failure(self) -> "CommandResult":
        if self.success:
            self.error = None
        elif not self.error:
            self.error = GENERIC_FAILURE
        return self

    def to_wire(self) -> dict[str, Any]:
        """Serializes the result with the camelCase keys the terminal client expects."""
        payload: dict[str, Any] = {
            "output": self.output,
            "currentDirectory": self.current_directory,
            "success": self.success,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


class MemoryUsage(BaseModel):
    used: int  # MiB
    total: int  # MiB
    percentage: float


class DiskUsage(BaseModel):
    used: int  # MiB
    total: int  # MiB
    percentage: float


class ResourceSnapshot(BaseModel):
    """Synthetic system metrics. Cosmetic; only the value ranges are meaningful."""

    cpu: float = Field(ge=0, le=100)
    memory: MemoryUsage
    disk: DiskUsage
    processes: int
    uptime: float
