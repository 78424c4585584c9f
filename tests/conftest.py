"""
Shared pytest fixtures for podexec tests.

This module provides common fixtures including:
- FakeExecStream: Stand-in for the kubernetes websocket exec client
- ExecStreamMocker: Records exec stream calls and returns canned streams
- Pod API mocks built from real kubernetes client models
"""

import json
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import MagicMock, patch

import pytest
from kubernetes import client

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

ERROR_CHANNEL = 3


# =============================================================================
# Exec Status Documents
# =============================================================================

SUCCESS_STATUS = json.dumps({"metadata": {}, "status": "Success"})


def exit_status(code: Any) -> str:
    """Build the error channel document the API server sends for a non-zero exit."""
    return json.dumps({
        "metadata": {},
        "status": "Failure",
        "message": f"command terminated with non-zero exit code: exit code {code}",
        "reason": "NonZeroExitCode",
        "details": {"causes": [{"reason": "ExitCode", "message": str(code)}]},
    })


def internal_error_status(message: str = "error dialing backend: EOF") -> str:
    """Build a failure document without an exit code."""
    return json.dumps({
        "metadata": {},
        "status": "Failure",
        "message": message,
        "reason": "InternalError",
    })


# =============================================================================
# Exec Stream Mocking Infrastructure
# =============================================================================

@dataclass
class FakeExecStream:
    """
    Mimics kubernetes.stream.ws_client.WSClient for exec calls.

    Each update() delivers one (stdout, stderr) frame; the stream closes
    once all frames are delivered.
    """
    status: Optional[str] = SUCCESS_STATUS
    frames: List[Tuple[str, str]] = field(default_factory=list)
    update_error: Optional[Exception] = None
    write_error: Optional[Exception] = None
    subprotocol: Optional[str] = "v5.channel.k8s.io"

    stdin: List[str] = field(default_factory=list)
    closed_channels: List[int] = field(default_factory=list)
    update_timeouts: List[Optional[float]] = field(default_factory=list)
    closed: bool = False
    _open: bool = True
    _stdout: str = ""
    _stderr: str = ""

    def is_open(self) -> bool:
        return self._open

    def write_stdin(self, data: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.stdin.append(data)

    def close_channel(self, channel: int) -> None:
        self.closed_channels.append(channel)

    def update(self, timeout: Optional[float] = 0) -> None:
        self.update_timeouts.append(timeout)
        if self.update_error is not None:
            raise self.update_error
        if not self._open:
            return
        if self.frames:
            out, err = self.frames.pop(0)
            self._stdout += out
            self._stderr += err
        if not self.frames:
            self._open = False

    def peek_stdout(self, timeout: float = 0) -> bool:
        return bool(self._stdout)

    def read_stdout(self, timeout: Optional[float] = None) -> str:
        data, self._stdout = self._stdout, ""
        return data

    def peek_stderr(self, timeout: float = 0) -> bool:
        return bool(self._stderr)

    def read_stderr(self, timeout: Optional[float] = None) -> str:
        data, self._stderr = self._stderr, ""
        return data

    def read_channel(self, channel: int, timeout: float = 0) -> str:
        if channel == ERROR_CHANNEL:
            return self.status or ""
        return ""

    def close(self, **kwargs) -> None:
        self._open = False
        self.closed = True


@dataclass
class ExecCall:
    """Record of an exec stream opened during testing."""
    api_method: Any
    name: str
    namespace: str
    params: Dict[str, Any]


class ExecStreamMocker:
    """
    Replaces kubernetes.stream.stream with canned exec streams.

    Usage:
        def test_exit(exec_mocker, core_api):
            exec_mocker.respond(FakeExecStream(status=exit_status(7)))
            probe = RemoteCommandProbe(core_api, stream_fn=exec_mocker)
            ...
            assert exec_mocker.last_call.params["stdin"] is True
    """

    def __init__(self):
        self._streams: List[FakeExecStream] = []
        self._open_error: Optional[Exception] = None
        self.calls: List[ExecCall] = []

    def respond(self, fake_stream: FakeExecStream) -> "ExecStreamMocker":
        self._streams.append(fake_stream)
        return self

    def fail_to_open(self, error: Exception) -> "ExecStreamMocker":
        self._open_error = error
        return self

    def __call__(self, api_method, name, namespace, **params):
        self.calls.append(ExecCall(api_method, name, namespace, params))
        if self._open_error is not None:
            raise self._open_error
        if not self._streams:
            raise RuntimeError("ExecStreamMocker: no stream registered")
        return self._streams.pop(0)

    @property
    def last_call(self) -> ExecCall:
        return self.calls[-1]

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def exec_mocker():
    """ExecStreamMocker to pass as stream_fn."""
    return ExecStreamMocker()


@pytest.fixture
def patched_exec_stream():
    """ExecStreamMocker patched in place of kubernetes.stream.stream for the probe."""
    mocker = ExecStreamMocker()
    with patch("podexec.modules.probe.probe.stream", side_effect=mocker):
        yield mocker


# =============================================================================
# Pod API Mocking Infrastructure
# =============================================================================

def make_pod(name: str = "shell", namespace: str = "default", containers=("main",)) -> client.V1Pod:
    """Build a V1Pod with the given container names."""
    return client.V1Pod(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace),
        spec=client.V1PodSpec(
            containers=[client.V1Container(name=c, image="ubuntu") for c in containers]
        ),
    )


@pytest.fixture
def core_api():
    """Mock CoreV1Api serving pod 'shell' with a single 'main' container."""
    api = MagicMock(spec=client.CoreV1Api)
    api.read_namespaced_pod.return_value = make_pod()
    return api


@pytest.fixture
def two_container_api():
    """Mock CoreV1Api serving pod 'shell' with containers A and B."""
    api = MagicMock(spec=client.CoreV1Api)
    api.read_namespaced_pod.return_value = make_pod(containers=("A", "B"))
    return api


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "exec_mock: Tests using a mocked exec websocket stream"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests requiring a real cluster"
    )
