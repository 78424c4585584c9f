"""
Target resolution for podexec.

Fetches the pod once from the API server and checks that the requested
container is declared in its spec. Resolution is read-only.
"""

import logging
from typing import List, Optional

from kubernetes import client
from kubernetes.client.rest import ApiException

from podexec.modules.api import ContainerNotFoundError, NotFoundError, Target

logger = logging.getLogger("podexec.resolver")


class TargetResolver:
    """Resolves (namespace, pod, container) to a validated Target."""

    def __init__(
        self,
        client_configuration: Optional[client.Configuration] = None,
        core_api: Optional[client.CoreV1Api] = None,
    ):
        """
        Initialize target resolver.

        Args:
            client_configuration: Loaded cluster configuration
            core_api: Pre-built CoreV1Api, takes precedence over client_configuration
        """
        if core_api is None:
            core_api = client.CoreV1Api(client.ApiClient(client_configuration))
        self.core_api = core_api

    def resolve(self, namespace: str, pod_name: str, container_name: Optional[str] = None) -> Target:
        """
        Resolve and validate a target container.

        Args:
            namespace: Pod namespace
            pod_name: Pod name
            container_name: Container name, empty or None for the default container

        Returns:
            Validated Target

        Raises:
            NotFoundError: Pod missing or the API call failed
            ContainerNotFoundError: Container not declared in the pod spec
        """
        target = Target(namespace=namespace, pod=pod_name, container=container_name)

        try:
            pod = self.core_api.read_namespaced_pod(name=target.pod, namespace=target.namespace)
        except ApiException as e:
            logger.debug(f"Failed to read pod {target.namespace}/{target.pod}: {e}")
            raise NotFoundError(f"({e.status}) {e.reason}", detail=f"{target.namespace}/{target.pod}")
        except Exception as e:
            # Any failure counts as not found, there is a single attempt
            logger.debug(f"Failed to read pod {target.namespace}/{target.pod}: {e}")
            raise NotFoundError(str(e), detail=f"{target.namespace}/{target.pod}")

        if target.container is None:
            logger.info("No container given, the API server picks the default")
            return target

        if target.container not in self._container_names(pod):
            raise ContainerNotFoundError(target.container)

        logger.info(f'Container "{target.container}" found')
        return target

    @staticmethod
    def _container_names(pod) -> List[str]:
        spec = getattr(pod, "spec", None)
        containers = getattr(spec, "containers", None) or []
        return [c.name for c in containers]
