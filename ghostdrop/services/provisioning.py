import logging
import secrets
import threading
import time

from ghostdrop.constants import ALIAS_ALPHABET, ALIAS_LENGTH, PASSWORD_LENGTH, PREFETCH_COOLDOWN_SEC
from ghostdrop.domain.helpers import normalize_alias
from ghostdrop.domain.models import Mailbox
from ghostdrop.errors import DataIntegrityError, ValidationError

logger = logging.getLogger(__name__)


def random_string(length):
    return "".join(secrets.choice(ALIAS_ALPHABET) for _ in range(length))


def _spawn_daemon_thread(fn):
    threading.Thread(target=fn, daemon=True).start()


class MailboxProvisioner:
    """Creates mailboxes on the provider and keeps one spare ready in the background.

    The spare ("pending") mailbox lets ``generate_random_mailbox`` return
    without waiting on the account-create and token-issue round trips. A failed
    background attempt blocks further attempts for ``cooldown_sec``.
    """

    def __init__(
        self,
        client,
        session_store,
        spawn=None,
        clock=time.monotonic,
        cooldown_sec=PREFETCH_COOLDOWN_SEC,
    ):
        self.client = client
        self.session_store = session_store
        self.cooldown_sec = cooldown_sec
        self._spawn = spawn or _spawn_daemon_thread
        self._clock = clock
        self._lock = threading.Lock()
        self._pending = None
        self._prefetching = False
        self._last_prefetch_failed_at = None

    @property
    def has_pending(self):
        with self._lock:
            return self._pending is not None

    @property
    def is_prefetching(self):
        with self._lock:
            return self._prefetching

    def _random_address(self):
        domains = self.session_store.get_domains(self.client)
        return f"{random_string(ALIAS_LENGTH)}@{secrets.choice(domains)}"

    def provision(self, address=None):
        """Create an account and issue its token without activating it."""
        final_address = address or self._random_address()
        password = random_string(PASSWORD_LENGTH)
        self.client.create_account(final_address, password)
        token = self.client.issue_token(final_address, password)
        if not token:
            raise DataIntegrityError("Failed to retrieve authentication token.")
        return Mailbox(address=final_address, token=token)

    def _activate(self, mailbox):
        self.session_store.set_active(mailbox)
        logger.info("Active mailbox is now %s", mailbox.address)
        try:
            self.prefetch()
        except RuntimeError as exc:
            logger.error("Could not start mailbox prefetch: %s", exc)
        return mailbox.address

    def create_mailbox(self, explicit_address=None):
        return self._activate(self.provision(explicit_address))

    def create_custom_mailbox(self, alias, domain):
        normalized = normalize_alias(alias)
        domain = (domain or "").strip().lower()
        if not normalized or not domain:
            raise ValidationError("Alias and domain cannot be empty.")
        return self.create_mailbox(f"{normalized}@{domain}")

    def generate_random_mailbox(self):
        with self._lock:
            mailbox = self._pending
            self._pending = None
        if mailbox is None:
            mailbox = self.provision()
        else:
            logger.debug("Serving pre-fetched mailbox %s", mailbox.address)
        return self._activate(mailbox)

    def prefetch(self):
        """Start a background provisioning run; return False when skipped."""
        with self._lock:
            if self._pending is not None or self._prefetching:
                return False
            failed_at = self._last_prefetch_failed_at
            if failed_at is not None and self._clock() - failed_at < self.cooldown_sec:
                return False
            self._prefetching = True
        try:
            self._spawn(self._run_prefetch)
        except Exception:
            with self._lock:
                self._prefetching = False
            raise
        return True

    def _run_prefetch(self):
        mailbox = None
        try:
            mailbox = self.provision()
        except Exception as exc:
            logger.error("Background mailbox prefetch failed: %s", exc)
        with self._lock:
            self._pending = mailbox
            self._last_prefetch_failed_at = None if mailbox else self._clock()
            self._prefetching = False


__all__ = ["MailboxProvisioner", "random_string"]
