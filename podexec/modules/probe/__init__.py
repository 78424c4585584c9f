"""
Probe Module - Black Box Interface

Purpose: Run a command in a container and report its exit code
Interface: RemoteCommandProbe.probe(), classify_exit_status()
Hidden: Websocket exec stream, stdin framing, output capture

Can be replaced with a different exec transport as long as the
error channel status is classified the same way.
"""

from .exit_status import classify_exit_status
from .output import OutputSink
from .probe import RemoteCommandProbe

__all__ = ["OutputSink", "RemoteCommandProbe", "classify_exit_status"]
