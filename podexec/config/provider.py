"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class ConnectionConfig:
    """Cluster connection configuration."""
    master_url: Optional[str] = None
    kubeconfig_path: Optional[str] = None
    context: Optional[str] = None

    @property
    def is_explicit(self) -> bool:
        """Check if a kubeconfig file or API server address was given."""
        return bool(self.master_url or self.kubeconfig_path)


@dataclass
class ProbeDefaults:
    """Defaults for the probe target and logging."""
    namespace: str = "default"
    pod: str = "shell"
    command: str = "/bin/sh"
    log_level: str = "INFO"
    max_output_chunks: int = 1024


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_connection_config(self) -> ConnectionConfig:
        """Get cluster connection configuration."""
        ...

    def get_probe_defaults(self) -> ProbeDefaults:
        """Get probe defaults."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ

    def get_connection_config(self) -> ConnectionConfig:
        """Get connection configuration from environment variables."""
        return ConnectionConfig(
            master_url=self.environ.get("PODEXEC_MASTER") or None,
            kubeconfig_path=self.environ.get("KUBECONFIG") or None,
            context=self.environ.get("PODEXEC_CONTEXT") or None,
        )

    def get_probe_defaults(self) -> ProbeDefaults:
        """Get probe defaults from environment variables."""
        max_chunks = self.environ.get("PODEXEC_MAX_OUTPUT_CHUNKS") or "1024"
        try:
            max_output_chunks = int(max_chunks)
        except ValueError:
            max_output_chunks = -1
        if max_output_chunks < 0:
            raise ValueError(
                f"PODEXEC_MAX_OUTPUT_CHUNKS must be a non-negative integer, got {max_chunks!r}"
            )

        return ProbeDefaults(
            namespace=self.environ.get("PODEXEC_NAMESPACE") or "default",
            pod=self.environ.get("PODEXEC_POD") or "shell",
            command=self.environ.get("PODEXEC_CMD") or "/bin/sh",
            log_level=(self.environ.get("LOG_LEVEL") or "INFO").upper(),
            max_output_chunks=max_output_chunks,
        )
