"""
API Module - Black Box Interface

Purpose: Data models and error types shared by every podexec module
Interface: Target, CommandSpec, ExecutionResult, StreamOutcome, CheckResult, ProbeError
Hidden: Validation rules, rendering of the result line
"""

from .errors import (
    ConfigError,
    ContainerNotFoundError,
    NotFoundError,
    ProbeError,
    UnknownExitError,
)
from .models import (
    CheckResult,
    CommandSpec,
    ErrorKind,
    ExecutionResult,
    StreamOutcome,
    StreamOutcomeKind,
    Target,
)

__all__ = [
    "CheckResult",
    "CommandSpec",
    "ConfigError",
    "ContainerNotFoundError",
    "ErrorKind",
    "ExecutionResult",
    "NotFoundError",
    "ProbeError",
    "StreamOutcome",
    "StreamOutcomeKind",
    "Target",
    "UnknownExitError",
]
