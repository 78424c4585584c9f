"""
podexec - Kubernetes Pod Exec Probe

Runs a shell command inside a container of a running pod and reports
whether it terminated with exit status 0.

Architecture:
- Each module is self-contained with clear interfaces
- Resolver and probe run in strict sequence, one shot per process
- No module retains state across invocations

Modules:
- api: Shared data models and error types
- resolver: Pod lookup and container validation
- probe: Exec stream handling and exit-code classification
"""

__version__ = "1.0.0"
