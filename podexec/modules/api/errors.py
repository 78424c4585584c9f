"""
podexec error types.

Every error is terminal for the current invocation: nothing is retried
and no partial result is reported.
"""

from typing import Any, Dict, Optional

from .models import ErrorKind


class ProbeError(Exception):
    """Base exception for all podexec failures."""

    kind: ErrorKind = ErrorKind.UNKNOWN_EXIT

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for logging."""
        error_dict = {"kind": self.kind.value, "message": self.message}
        if self.detail is not None:
            error_dict["detail"] = self.detail
        return error_dict


class ConfigError(ProbeError):
    """Cluster connection configuration could not be loaded."""

    kind = ErrorKind.CONFIG_ERROR


class NotFoundError(ProbeError):
    """Target pod does not exist or its metadata could not be fetched."""

    kind = ErrorKind.NOT_FOUND


class ContainerNotFoundError(ProbeError):
    """Named container is not declared in the pod spec."""

    kind = ErrorKind.CONTAINER_NOT_FOUND

    def __init__(self, container: str):
        super().__init__(f'Container "{container}" not found')
        self.container = container


class UnknownExitError(ProbeError):
    """The exec stream ended without a usable exit status."""

    kind = ErrorKind.UNKNOWN_EXIT

    def __init__(self, detail: str):
        super().__init__(f"Failed to find exit code: {detail}", detail=detail)
