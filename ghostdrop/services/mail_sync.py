import logging
import threading
from dataclasses import dataclass

from ghostdrop.domain.models import MessageSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollResult:
    messages: list
    new_messages: list
    changed: bool


def collect_new_messages(messages, known_ids):
    """Return messages whose ids are not yet in ``known_ids`` and record them."""
    new_messages = []
    for message in messages:
        if not message.id or message.id in known_ids:
            continue
        known_ids.add(message.id)
        new_messages.append(message)
    return new_messages


class MailPoller:
    """Fetches the active mailbox's message list and reports what is new.

    The provider has no "since" cursor, so novelty is decided against the set
    of ids seen during the current mailbox lifetime. Overlapping calls are
    dropped, not queued.
    """

    def __init__(self, client, session_store):
        self.client = client
        self.session_store = session_store
        self.known_ids = set()
        self._poll_lock = threading.Lock()
        self._poll_in_flight = False
        self._tracked_session = None
        self._last_count = 0

    @property
    def is_polling(self):
        with self._poll_lock:
            return self._poll_in_flight

    def reset(self):
        with self._poll_lock:
            self._reset_locked(None)

    def _reset_locked(self, session):
        self.known_ids = set()
        self._tracked_session = session
        self._last_count = 0

    def poll(self):
        session = self.session_store.active
        if session is None:
            return None
        with self._poll_lock:
            if self._poll_in_flight:
                return None
            self._poll_in_flight = True
            if self._tracked_session is not session:
                self._reset_locked(session)
        try:
            return self._poll_session(session)
        except Exception as exc:
            logger.warning("Failed to fetch messages: %s", exc)
            return None
        finally:
            with self._poll_lock:
                self._poll_in_flight = False

    def _poll_session(self, session):
        messages = [MessageSummary.from_api(item) for item in self.client.list_messages()]
        with self._poll_lock:
            if not self.session_store.is_active(session) or self._tracked_session is not session:
                logger.debug("Discarding poll result for superseded mailbox %s", session.address)
                return None
            new_messages = collect_new_messages(messages, self.known_ids)
            changed = bool(new_messages) or len(messages) != self._last_count
            self._last_count = len(messages)
        if new_messages:
            logger.info("%s new message(s) for %s", len(new_messages), session.address)
        return PollResult(messages=messages, new_messages=new_messages, changed=changed)


__all__ = ["MailPoller", "PollResult", "collect_new_messages"]
