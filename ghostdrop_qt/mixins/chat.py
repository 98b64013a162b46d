import html
import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDockWidget,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from ghostdrop.services.assistant import CHAT_UNAVAILABLE
from ghostdrop_qt.constants import (
    CHAT_ASSISTANT_NAME,
    CHAT_DOCK_MIN_WIDTH,
    CHAT_DOCK_TITLE,
    CHAT_GREETING,
    CHAT_TYPING_TEXT,
    CHAT_USER_NAME,
    CONTENT_MARGINS,
    CONTENT_SPACING,
)

logger = logging.getLogger(__name__)


class ChatMixin:
    def _build_chat_dock(self):
        self.chat_dock = QDockWidget(CHAT_DOCK_TITLE, self)
        self.chat_dock.setObjectName("chatDock")
        self.chat_dock.setMinimumWidth(CHAT_DOCK_MIN_WIDTH)
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(*CONTENT_MARGINS)
        layout.setSpacing(CONTENT_SPACING)

        self.chat_transcript = QTextBrowser()
        self.chat_typing_label = QLabel(CHAT_TYPING_TEXT)
        self.chat_typing_label.setVisible(False)
        self.chat_input = QLineEdit()
        self.chat_input.setPlaceholderText("Ask a question...")
        self.chat_input.returnPressed.connect(self._send_chat_message)
        send_btn = QPushButton("Send")
        send_btn.clicked.connect(self._send_chat_message)
        new_chat_btn = QPushButton("New Chat")
        new_chat_btn.clicked.connect(self._reset_chat)

        input_row = QHBoxLayout()
        input_row.addWidget(self.chat_input, 1)
        input_row.addWidget(send_btn)
        layout.addWidget(self.chat_transcript, 1)
        layout.addWidget(self.chat_typing_label)
        layout.addLayout(input_row)
        layout.addWidget(new_chat_btn)

        self.chat_dock.setWidget(panel)
        self.addDockWidget(Qt.RightDockWidgetArea, self.chat_dock)
        self.chat_dock.hide()
        self._reset_chat()

    def _toggle_chat(self):
        self.chat_dock.setVisible(not self.chat_dock.isVisible())
        if self.chat_dock.isVisible():
            self.chat_input.setFocus()

    def _append_chat_line(self, speaker, text):
        self.chat_transcript.append(f"<b>{html.escape(speaker)}:</b> {html.escape(text)}")

    def _set_chat_busy(self, busy):
        self._chat_busy = busy
        self.chat_input.setEnabled(not busy)
        self.chat_typing_label.setVisible(busy)

    def _reset_chat(self):
        # Replies still in flight belong to the previous conversation.
        self._chat_generation += 1
        self._chat_session_id = None
        self._set_chat_busy(False)
        self.chat_transcript.clear()
        self._append_chat_line(CHAT_ASSISTANT_NAME, CHAT_GREETING)

    def _send_chat_message(self):
        text = self.chat_input.text().strip()
        if not text or self._chat_busy:
            return
        self.chat_input.clear()
        self._append_chat_line(CHAT_USER_NAME, text)
        self._set_chat_busy(True)
        generation = self._chat_generation
        session_id = self._chat_session_id
        self.workers.submit(
            lambda: self.assistant.chat(text, session_id),
            lambda reply, gen=generation: self._on_chat_reply(gen, reply),
            lambda exc, gen=generation: self._on_chat_error(gen, exc),
        )

    def _on_chat_reply(self, generation, reply):
        if generation != self._chat_generation:
            return
        text, session_id = reply
        self._chat_session_id = session_id
        self._append_chat_line(CHAT_ASSISTANT_NAME, text)
        self._set_chat_busy(False)

    def _on_chat_error(self, generation, exc):
        if generation != self._chat_generation:
            return
        logger.warning("Chat request failed: %s", exc)
        self._append_chat_line(CHAT_ASSISTANT_NAME, CHAT_UNAVAILABLE)
        self._set_chat_busy(False)


__all__ = ["ChatMixin"]
