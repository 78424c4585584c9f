"""
Resolver Module - Black Box Interface

Purpose: Turn a namespace, pod and container name into a validated Target
Interface: TargetResolver.resolve()
Hidden: Pod metadata fetch, container lookup

Read-only: resolving twice against an unchanged pod gives the same Target.
"""

from .resolver import TargetResolver

__all__ = ["TargetResolver"]
