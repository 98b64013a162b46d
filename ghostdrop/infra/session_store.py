import logging
import threading

from ghostdrop.domain.models import Session
from ghostdrop.errors import NotAuthenticatedError, ProjectError, ServiceUnavailableError

logger = logging.getLogger(__name__)

DOMAINS_UNAVAILABLE_MESSAGE = "Service temporarily unavailable. Could not fetch domains."


class SessionStore:
    """Holds the active mailbox session and the provider's domain list.

    The session is swapped as a single reference under a lock, so a reader
    sees either the old session or the new one, never a mix of fields.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._active = None
        self._domains = None

    @property
    def active(self):
        with self._lock:
            return self._active

    @property
    def token(self):
        session = self.active
        return session.token if session else None

    @property
    def address(self):
        session = self.active
        return session.address if session else None

    def set_active(self, mailbox):
        session = Session(address=mailbox.address, token=mailbox.token)
        with self._lock:
            self._active = session
        return session

    def clear(self):
        with self._lock:
            self._active = None

    def is_active(self, session):
        return session is not None and self.active is session

    def require_active(self):
        session = self.active
        if session is None:
            raise NotAuthenticatedError()
        return session

    @property
    def cached_domains(self):
        with self._lock:
            return list(self._domains) if self._domains else None

    def get_domains(self, client):
        cached = self.cached_domains
        if cached:
            return cached
        try:
            domains = client.list_domains()
        except ProjectError as exc:
            logger.error("Failed to fetch domains: %s", exc)
            raise ServiceUnavailableError(DOMAINS_UNAVAILABLE_MESSAGE) from exc
        if not domains:
            logger.error("Failed to fetch domains: provider returned an empty list")
            raise ServiceUnavailableError(DOMAINS_UNAVAILABLE_MESSAGE)
        with self._lock:
            self._domains = list(domains)
            return list(self._domains)


__all__ = ["DOMAINS_UNAVAILABLE_MESSAGE", "SessionStore"]
