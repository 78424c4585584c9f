"""
podexec command line - check the exit code of an exec command in a pod.

Prints ("<status>", "<message>") on stdout. The process exits 0 whenever
a remote exit code was obtained, whatever its value, and 1 on any error.
"""

import logging
import sys
from typing import Optional

import click
from dotenv import load_dotenv
from kubernetes import client

from podexec import __version__
from podexec.config import ConnectionConfig, EnvConfigProvider, build_client_configuration
from podexec.logging_config import LOG_LEVELS, configure_logging
from podexec.modules.api import CheckResult, CommandSpec, ProbeError, Target
from podexec.modules.probe import RemoteCommandProbe
from podexec.modules.resolver import TargetResolver

logger = logging.getLogger("podexec.main")


def check_pod_exec(
    connection: ConnectionConfig,
    target: Target,
    command: CommandSpec,
    capture_output: bool = False,
    max_chunks: int = 1024,
    core_api: Optional[client.CoreV1Api] = None,
) -> CheckResult:
    """
    Resolve the target, run the command and classify the outcome.

    Args:
        connection: Cluster connection settings
        target: Requested namespace, pod and container
        command: Command and script body
        capture_output: Request and record stdout/stderr
        max_chunks: Maximum chunks kept per output stream
        core_api: Pre-built CoreV1Api, skips configuration loading

    Returns:
        CheckResult, with failed=True if any error occurred
    """
    try:
        if core_api is None:
            configuration = build_client_configuration(connection)
            core_api = client.CoreV1Api(client.ApiClient(configuration))

        resolved = TargetResolver(core_api=core_api).resolve(
            target.namespace, target.pod, target.container
        )
        probe = RemoteCommandProbe(core_api, capture_output=capture_output, max_chunks=max_chunks)
        result = probe.probe(resolved, command)
    except ProbeError as e:
        logger.error(f"Probe failed ({e.kind.value}): {e}")
        return CheckResult.from_error(e)

    return CheckResult.from_execution(result)


@click.command(name="check-pod-exec")
@click.option("--master", default=None,
              help="The address of the Kubernetes API server (overrides any value in kubeconfig)")
@click.option("--kubeconfig", default=None,
              help="Path to kubeconfig file with authorization information "
                   "(the master location is set by the master flag).")
@click.option("--context", default=None, help="Kubeconfig context to use")
@click.option("-n", "--namespace", default=None, help="Namespace of the target pod [default: default]")
@click.option("-p", "--pod", default=None, help="Name of the target pod [default: shell]")
@click.option("-C", "--container", default="", help="Container name in specified pod")
@click.option("-c", "--cmd", "command", default=None, help="Exec command [default: /bin/sh]")
@click.option("-a", "--argv", "argument", default="",
              help="Arguments for exec command [Format: 'arg; arg; arg']")
@click.option("--capture-output/--no-capture-output", default=False,
              help="Request stdout/stderr from the container and log them at DEBUG")
@click.option("--log-level", default=None, help="Logging level [default: INFO]")
@click.version_option(__version__)
def main(master, kubeconfig, context, namespace, pod, container, command, argument,
         capture_output, log_level):
    """Check exit code of exec command on Kubernetes container."""
    load_dotenv()
    provider = EnvConfigProvider()

    try:
        defaults = provider.get_probe_defaults()
    except ValueError as e:
        click.echo(CheckResult.from_error(e).render())
        sys.exit(1)

    level = (log_level or defaults.log_level).upper()
    if level not in LOG_LEVELS:
        error = ValueError(f"Invalid log level {level!r}, expected one of {', '.join(LOG_LEVELS)}")
        click.echo(CheckResult.from_error(error).render())
        sys.exit(1)
    configure_logging(level)

    env_connection = provider.get_connection_config()
    connection = ConnectionConfig(
        master_url=master or env_connection.master_url,
        kubeconfig_path=kubeconfig or env_connection.kubeconfig_path,
        context=context or env_connection.context,
    )

    target = Target(
        namespace=namespace or defaults.namespace,
        pod=pod or defaults.pod,
        container=container,
    )
    spec = CommandSpec(command=command or defaults.command, argument=argument)

    result = check_pod_exec(
        connection,
        target,
        spec,
        capture_output=capture_output,
        max_chunks=defaults.max_output_chunks,
    )
    click.echo(result.render())
    if result.failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
