import logging

from PySide6.QtWidgets import QApplication, QSystemTrayIcon

from ghostdrop.constants import NEW_MESSAGE_HIGHLIGHT_MS
from ghostdrop_qt.constants import NOTIFICATION_DURATION_MS, NOTIFICATION_TITLE

logger = logging.getLogger(__name__)


class PollMixin:
    def _start_polling(self):
        if not self.context.address:
            return
        self._poll_timer.start()
        self._poll_once()

    def _poll_once(self):
        if self._poll_in_flight or not self.context.address:
            return
        self._poll_in_flight = True
        self.workers.submit(self.context.poller.poll, self._on_poll_result, self._on_poll_error)

    def _manual_refresh(self):
        self._set_status("Refreshing...")
        self._poll_once()

    def _on_poll_result(self, result):
        self._poll_in_flight = False
        if result is None:
            return
        if not result.changed and len(result.messages) == len(self.current_messages):
            return
        self.current_messages = list(result.messages)
        if result.new_messages:
            self.newly_arrived_ids = {msg.id for msg in result.new_messages}
            self._highlight_timer.start(NEW_MESSAGE_HIGHLIGHT_MS)
            self._notify_new_messages(result.new_messages)
        self._render_message_list()

    def _on_poll_error(self, exc):
        self._poll_in_flight = False
        logger.warning("Poll failed: %s", exc)

    def _clear_new_message_highlight(self):
        if not self.newly_arrived_ids:
            return
        self.newly_arrived_ids = set()
        self._render_message_list()

    def _notify_new_messages(self, messages):
        self._set_status(f"{len(messages)} new message(s)")
        if self.config.get("sound_enabled", True):
            self._play_notification_sound()
        tray = getattr(self, "tray_icon", None)
        if tray is None or not self.config.get("notifications_enabled", True):
            return
        for msg in messages:
            tray.showMessage(
                NOTIFICATION_TITLE,
                f"From: {msg.sender}\nSubject: {msg.subject}",
                QSystemTrayIcon.MessageIcon.Information,
                NOTIFICATION_DURATION_MS,
            )

    def _play_notification_sound(self):
        QApplication.beep()


__all__ = ["PollMixin"]
