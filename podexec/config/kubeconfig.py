"""Build a Kubernetes client configuration from a ConnectionConfig."""
import logging

import yaml
from kubernetes import client
from kubernetes.config import ConfigException, load_incluster_config, load_kube_config

from podexec.config.provider import ConnectionConfig
from podexec.modules.api import ConfigError

logger = logging.getLogger("podexec.config")


def build_client_configuration(connection: ConnectionConfig) -> client.Configuration:
    """
    Load cluster credentials into a fresh client.Configuration.

    Lookup order:
    1. Explicit kubeconfig file
    2. Bare API server address (no credentials)
    3. In-cluster service account, then the default kubeconfig

    The master URL, when given, always overrides the host.

    Raises:
        ConfigError: If no usable configuration could be loaded
    """
    configuration = client.Configuration()

    try:
        if connection.kubeconfig_path:
            logger.debug(f"Loading kubeconfig from {connection.kubeconfig_path}")
            load_kube_config(
                config_file=connection.kubeconfig_path,
                context=connection.context,
                client_configuration=configuration,
                persist_config=False,
            )
        elif connection.master_url:
            logger.debug("No kubeconfig given, using API server address only")
        else:
            try:
                load_incluster_config(client_configuration=configuration)
                logger.debug("Loaded in-cluster configuration")
            except ConfigException:
                load_kube_config(
                    context=connection.context,
                    client_configuration=configuration,
                    persist_config=False,
                )
                logger.debug("Loaded default kubeconfig")
    except (ConfigException, OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load cluster configuration: {e}", detail=str(e))

    if connection.master_url:
        configuration.host = connection.master_url

    return configuration
