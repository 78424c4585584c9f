"""
Remote Command Probe - runs a command through the pod exec subresource.

The probe opens the websocket exec stream, writes a `-c <script>` input
to the remote shell, blocks until the remote side closes the stream and
turns the status on the error channel into an ExecutionResult.
"""

import logging
from typing import Callable, Optional

from kubernetes import client
from kubernetes.client.rest import ApiException
from kubernetes.stream import stream
from kubernetes.stream.ws_client import ERROR_CHANNEL, STDIN_CHANNEL, V5_CHANNEL_PROTOCOL
from websocket import WebSocketException

from podexec.modules.api import (
    CommandSpec,
    ExecutionResult,
    StreamOutcome,
    StreamOutcomeKind,
    Target,
    UnknownExitError,
)
from podexec.modules.probe.exit_status import classify_exit_status
from podexec.modules.probe.output import OutputSink

logger = logging.getLogger("podexec.probe")

# Only v5.channel.k8s.io can half-close stdin. On older protocols the
# script is followed by an explicit exit that keeps the last command's status.
STDIN_TERMINATOR = "\nexit\n"

STREAM_ERRORS = (ApiException, WebSocketException, OSError)


class RemoteCommandProbe:
    """Executes one command in a target container and classifies its exit."""

    # Seconds to wait for frames per update
    POLL_INTERVAL = 1.0

    def __init__(
        self,
        core_api: client.CoreV1Api,
        capture_output: bool = False,
        max_chunks: int = 1024,
        poll_interval: float = POLL_INTERVAL,
        stream_fn: Optional[Callable] = None,
    ):
        """
        Initialize remote command probe.

        Args:
            core_api: CoreV1Api bound to the cluster
            capture_output: Request stdout/stderr and record them
            max_chunks: Maximum chunks kept per output stream
            poll_interval: Seconds to block per stream update
            stream_fn: Stream opener, kubernetes.stream.stream by default
        """
        self.core_api = core_api
        self.capture_output = capture_output
        self.max_chunks = max_chunks
        self.poll_interval = poll_interval
        self.stream_fn = stream_fn or stream

    def probe(self, target: Target, command: CommandSpec) -> ExecutionResult:
        """
        Run the command and wait for it to finish.

        Args:
            target: Resolved target container
            command: Command and script body

        Returns:
            ExecutionResult with the remote exit code

        Raises:
            UnknownExitError: The stream ended without a usable exit status
        """
        stdout = OutputSink(self.max_chunks)
        stderr = OutputSink(self.max_chunks)

        logger.info(
            f"Executing {command.command} in {target.namespace}/{target.pod}"
            f" (container: {target.container or 'default'})"
        )
        outcome = self._run_stream(target, command, stdout, stderr)

        if outcome.kind is StreamOutcomeKind.UNKNOWN:
            raise UnknownExitError(outcome.detail or "unknown stream failure")

        if stdout.dropped or stderr.dropped:
            logger.warning(
                f"Output truncated: dropped {stdout.dropped} stdout and "
                f"{stderr.dropped} stderr chunks"
            )
        for chunk in stdout.chunks:
            logger.debug(f"stdout: {chunk.rstrip()}")
        for chunk in stderr.chunks:
            logger.debug(f"stderr: {chunk.rstrip()}")

        logger.info(f"Remote command exited with code {outcome.exit_code}")
        return ExecutionResult.from_exit_code(outcome.exit_code, stdout.chunks, stderr.chunks)

    def _open_stream(self, target: Target, command: CommandSpec):
        params = {
            "command": [command.command],
            "stdin": True,
            "stdout": self.capture_output,
            "stderr": self.capture_output,
            "tty": False,
            "_preload_content": False,
        }
        if target.container:
            params["container"] = target.container

        return self.stream_fn(
            self.core_api.connect_get_namespaced_pod_exec,
            target.pod,
            target.namespace,
            **params,
        )

    def _run_stream(
        self,
        target: Target,
        command: CommandSpec,
        stdout: OutputSink,
        stderr: OutputSink,
    ) -> StreamOutcome:
        try:
            ws = self._open_stream(target, command)
        except STREAM_ERRORS as e:
            logger.debug(f"Exec stream could not be opened: {e}")
            return StreamOutcome.unknown(str(e))

        try:
            self._write_stdin(ws, command)
            while ws.is_open():
                ws.update(timeout=self.poll_interval)
                self._drain(ws, stdout, stderr)
            self._drain(ws, stdout, stderr)
            raw_status = ws.read_channel(ERROR_CHANNEL)
        except STREAM_ERRORS as e:
            logger.debug(f"Exec stream failed: {e}")
            return StreamOutcome.unknown(str(e))
        finally:
            ws.close()

        return classify_exit_status(raw_status)

    @staticmethod
    def _write_stdin(ws, command: CommandSpec) -> None:
        ws.write_stdin("\n".join(command.stdin_lines()))
        if getattr(ws, "subprotocol", None) == V5_CHANNEL_PROTOCOL:
            ws.close_channel(STDIN_CHANNEL)
        else:
            logger.debug(f"Protocol {getattr(ws, 'subprotocol', None)} cannot close stdin, sending exit")
            ws.write_stdin(STDIN_TERMINATOR)

    @staticmethod
    def _drain(ws, stdout: OutputSink, stderr: OutputSink) -> None:
        if ws.peek_stdout():
            stdout.append(ws.read_stdout())
        if ws.peek_stderr():
            stderr.append(ws.read_stderr())
