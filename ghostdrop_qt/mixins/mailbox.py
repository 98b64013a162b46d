import logging

from PySide6.QtWidgets import QApplication

logger = logging.getLogger(__name__)


class MailboxMixin:
    def _generate_mailbox(self):
        self._start_random_mailbox("Generating new mailbox...")

    def _start_random_mailbox(self, status_text):
        if self._mailbox_busy:
            return
        self._begin_mailbox_change(status_text)
        self.workers.submit(
            self.context.generate_random_mailbox,
            self._on_mailbox_ready,
            lambda exc: self._on_mailbox_error("Failed to generate new email.", exc),
        )

    def _create_custom_mailbox(self):
        if self._mailbox_busy:
            return
        alias = self.alias_input.text().strip()
        domain = self.domain_combo.currentText().strip()
        if not alias or not domain:
            self._show_error("Alias and domain cannot be empty.")
            return
        self._begin_mailbox_change(f"Creating {alias}@{domain}...")
        self.workers.submit(
            lambda: self.context.create_custom_mailbox(alias, domain),
            self._on_mailbox_ready,
            lambda exc: self._on_mailbox_error("Failed to create email.", exc),
        )

    def _self_destruct(self):
        if not self.context.address or self._mailbox_busy:
            return
        self._start_random_mailbox("Self-destructing inbox...")

    def _begin_mailbox_change(self, status_text):
        self._mailbox_busy = True
        self._poll_timer.stop()
        self.current_messages = []
        self.read_status = {}
        self.newly_arrived_ids = set()
        self._selected_message_id = None
        self._clear_detail_view()
        self._render_message_list()
        self._set_status(status_text)

    def _on_mailbox_ready(self, address):
        self._mailbox_busy = False
        self.address_field.setText(address)
        self.alias_input.clear()
        self._set_status(f"Mailbox ready: {address}")
        if self.domain_combo.count() == 0:
            self._load_domains()
        self._start_polling()

    def _on_mailbox_error(self, prefix, exc):
        self._mailbox_busy = False
        logger.error("%s %s", prefix, exc)
        self._show_error(f"{prefix} {exc}")
        if self.context.address:
            self.address_field.setText(self.context.address)
            self._start_polling()

    def _load_domains(self):
        self.workers.submit(
            lambda: self.context.session_store.get_domains(self.context.client),
            self._on_domains_loaded,
            self._on_domains_error,
        )

    def _on_domains_loaded(self, domains):
        self.domain_combo.clear()
        self.domain_combo.addItems(list(domains or []))

    def _on_domains_error(self, exc):
        logger.warning("Failed to get domains for custom mailbox form: %s", exc)

    def _copy_address(self):
        address = self.context.address
        if not address:
            return
        QApplication.clipboard().setText(address)
        self._set_status("Address copied to clipboard.")


__all__ = ["MailboxMixin"]
