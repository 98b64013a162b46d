"""Infrastructure modules for GhostDrop."""

from . import config_store, mail_client, session_store

__all__ = ["config_store", "mail_client", "session_store"]
