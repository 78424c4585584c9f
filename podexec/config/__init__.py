"""
Config Module - Black Box Interface

Purpose: Cluster connection and probe defaults
Interface: EnvConfigProvider, build_client_configuration()
Hidden: Environment parsing, kubeconfig and in-cluster loading
"""

from .kubeconfig import build_client_configuration
from .provider import ConfigProvider, ConnectionConfig, EnvConfigProvider, ProbeDefaults

__all__ = [
    "ConfigProvider",
    "ConnectionConfig",
    "EnvConfigProvider",
    "ProbeDefaults",
    "build_client_configuration",
]
