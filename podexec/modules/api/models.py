"""
podexec shared data models.

These models define the structure of all data passed between
the resolver, the probe and the command line.
"""

import json
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Reported code for any non-zero remote exit status
FAILURE_EXIT_CODE = 2

UNKNOWN_STATUS = "UNKNOWN"

# Enums


class ErrorKind(str, Enum):
    """Error taxonomy for a probe run."""

    CONFIG_ERROR = "config_error"
    NOT_FOUND = "not_found"
    CONTAINER_NOT_FOUND = "container_not_found"
    UNKNOWN_EXIT = "unknown_exit"


class StreamOutcomeKind(str, Enum):
    """How the exec stream terminated."""

    EXITED = "exited"
    UNKNOWN = "unknown"


# Request Models


class Target(BaseModel):
    """A container inside a live pod."""

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(default="default", min_length=1, description="Pod namespace")
    pod: str = Field(default="shell", min_length=1, description="Pod name")
    container: Optional[str] = Field(
        default=None, description="Container name, None lets the API server pick"
    )

    @field_validator("container", mode="before")
    @classmethod
    def empty_container_is_default(cls, v):
        """Treat an empty container name as the pod's default container."""
        if v is None or not str(v).strip():
            return None
        return v


class CommandSpec(BaseModel):
    """Command to run and the script body fed to it on stdin."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(default="/bin/sh", min_length=1, description="Remote command")
    argument: str = Field(default="", description="Opaque shell script body")

    def stdin_lines(self) -> Tuple[str, str]:
        """Lines written to the remote process, as a `-c <script>` invocation."""
        return ("-c", self.argument)


# Result Models


class StreamOutcome(BaseModel):
    """Termination of an exec stream, decided once at the stream boundary."""

    model_config = ConfigDict(frozen=True)

    kind: StreamOutcomeKind
    exit_code: Optional[int] = Field(default=None, ge=0)
    detail: Optional[str] = None

    @classmethod
    def exited(cls, exit_code: int) -> "StreamOutcome":
        return cls(kind=StreamOutcomeKind.EXITED, exit_code=exit_code)

    @classmethod
    def unknown(cls, detail: str) -> "StreamOutcome":
        return cls(kind=StreamOutcomeKind.UNKNOWN, detail=detail)


class ExecutionResult(BaseModel):
    """Result of one probe invocation."""

    model_config = ConfigDict(frozen=True)

    exit_code: int = Field(..., ge=0, description="Exit status of the remote process")
    stdout: Tuple[str, ...] = Field(default=(), description="Captured stdout chunks")
    stderr: Tuple[str, ...] = Field(default=(), description="Captured stderr chunks")
    summary: str = Field(..., description="Human readable summary")

    @classmethod
    def from_exit_code(
        cls,
        exit_code: int,
        stdout: Tuple[str, ...] = (),
        stderr: Tuple[str, ...] = (),
    ) -> "ExecutionResult":
        return cls(
            exit_code=exit_code,
            stdout=tuple(stdout),
            stderr=tuple(stderr),
            summary=f"Exit Code: {exit_code}",
        )

    @property
    def reported_exit_code(self) -> int:
        """Exit code seen by callers: 0 on success, 2 on any remote failure."""
        return 0 if self.exit_code == 0 else FAILURE_EXIT_CODE


class CheckResult(BaseModel):
    """Status and message printed by the command line."""

    model_config = ConfigDict(frozen=True)

    status: str
    message: str
    failed: bool = False

    @classmethod
    def from_execution(cls, result: ExecutionResult) -> "CheckResult":
        return cls(status=str(result.reported_exit_code), message=result.summary)

    @classmethod
    def from_error(cls, error: Exception) -> "CheckResult":
        return cls(status=UNKNOWN_STATUS, message=str(error), failed=True)

    def render(self) -> str:
        """Single line with both values JSON-quoted."""
        message = " ".join(self.message.split())
        return f"({json.dumps(self.status)}, {json.dumps(message)})"
