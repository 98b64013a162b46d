"""Service-layer modules for GhostDrop."""

from . import assistant, mail_sync, message_detail, provisioning

__all__ = ["assistant", "mail_sync", "message_detail", "provisioning"]
