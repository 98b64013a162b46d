"""GhostDrop disposable-mailbox client."""

from . import constants, context, domain, errors, infra, paths, services

__all__ = [
    "constants",
    "context",
    "domain",
    "errors",
    "infra",
    "paths",
    "services",
]
