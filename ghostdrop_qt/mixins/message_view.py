import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import QListWidgetItem

from ghostdrop.domain.helpers import format_date, format_size, message_matches_search, strip_html
from ghostdrop.domain.models import MessageDetail
from ghostdrop.paths import DOWNLOAD_DIR
from ghostdrop_qt.constants import (
    EMPTY_INBOX_TEXT,
    LOADING_BODY_TEXT,
    NEW_MESSAGE_HIGHLIGHT_COLOR,
    NO_MESSAGE_TEXT,
)

logger = logging.getLogger(__name__)


class MessageViewMixin:
    @staticmethod
    def _message_row_text(msg, is_read):
        marker = "" if is_read else "● "
        return f"{marker}{msg.sender}\n{msg.subject}  ·  {format_date(msg.received_at)}"

    def _visible_messages(self):
        search_text = self.search_input.text()
        return [msg for msg in self.current_messages if message_matches_search(msg, search_text)]

    def _render_message_list(self):
        self.message_list.clear()
        visible = self._visible_messages()
        for msg in visible:
            is_read = bool(self.read_status.get(msg.id))
            item = QListWidgetItem(self._message_row_text(msg, is_read))
            item.setData(Qt.UserRole, msg.id)
            font = item.font()
            font.setBold(not is_read)
            item.setFont(font)
            if msg.id in self.newly_arrived_ids:
                item.setBackground(QBrush(QColor(NEW_MESSAGE_HIGHLIGHT_COLOR)))
            self.message_list.addItem(item)
        self.empty_label.setVisible(not visible)
        if not self.current_messages:
            self.empty_label.setText(EMPTY_INBOX_TEXT)
        elif not visible:
            self.empty_label.setText("No messages match your search.")

    def _find_message(self, message_id):
        for msg in self.current_messages:
            if msg.id == message_id:
                return msg
        return None

    def _on_message_item_clicked(self, item):
        if item is None:
            return
        self._open_message(item.data(Qt.UserRole))

    def _open_message(self, message_id):
        if (
            message_id == self._selected_message_id
            and isinstance(self.current_message, MessageDetail)
            and self.current_message.id == message_id
        ):
            return
        summary = self._find_message(message_id)
        if summary is None:
            return
        self.read_status[message_id] = True
        self._selected_message_id = message_id
        self.current_message = summary
        self._render_message_header(summary)
        self.body_view.setPlainText(LOADING_BODY_TEXT)
        self.attachment_list.clear()
        self._render_message_list()

        session = self.context.session_store.active
        self.workers.submit(
            lambda: self.context.fetcher.fetch_detail(message_id),
            lambda detail, s=session, mid=message_id: self._on_message_loaded(s, mid, detail),
            lambda exc, s=session, mid=message_id: self._on_message_error(s, mid, exc),
        )

    def _is_stale_message_result(self, session, message_id):
        return not self.context.session_store.is_active(session) or message_id != self._selected_message_id

    def _on_message_loaded(self, session, message_id, detail):
        if self._is_stale_message_result(session, message_id):
            logger.debug("Dropping stale detail for message %s", message_id)
            return
        self.current_message = detail
        self._render_message_detail(detail)

    def _on_message_error(self, session, message_id, exc):
        if self._is_stale_message_result(session, message_id):
            return
        self._show_error(f"Failed to load message. {exc}")
        self._clear_detail_view()

    def _render_message_header(self, msg):
        self.message_header.setText(f"{msg.subject}\nFrom: {msg.sender}  ·  {format_date(msg.received_at)}")

    def _render_message_detail(self, detail):
        self._render_message_header(detail)
        if detail.html_body:
            self.body_view.setHtml(detail.html_body)
        else:
            self.body_view.setPlainText(detail.text_body)
        self.attachment_list.clear()
        for attachment in detail.attachments:
            size = format_size(attachment.size_bytes)
            label = f"{attachment.filename} ({size})" if size else attachment.filename
            item = QListWidgetItem(label)
            item.setData(Qt.UserRole, attachment)
            self.attachment_list.addItem(item)
        self.attachment_list.setVisible(bool(detail.attachments))
        self.summary_label.clear()
        self.summarize_btn.setEnabled(bool(detail.body))

    def _clear_detail_view(self, message=NO_MESSAGE_TEXT):
        self.current_message = None
        self._selected_message_id = None
        self.message_header.setText(message)
        self.body_view.setPlainText("")
        self.attachment_list.clear()
        self.attachment_list.setVisible(False)
        self.summary_label.clear()
        self.summarize_btn.setEnabled(False)

    def _toggle_read_status(self):
        item = self.message_list.currentItem()
        if item is None:
            return
        message_id = item.data(Qt.UserRole)
        self.read_status[message_id] = not self.read_status.get(message_id)
        self._render_message_list()

    def _download_attachment(self, item):
        detail = self.current_message
        if item is None or not isinstance(detail, MessageDetail):
            return
        attachment = item.data(Qt.UserRole)
        self._set_status(f"Downloading {attachment.filename}...")
        self.workers.submit(
            lambda: self.context.fetcher.save_attachment(detail.id, attachment, DOWNLOAD_DIR),
            lambda path: self._set_status(f"Saved {path}"),
            lambda exc: self._show_error(f"Failed to download attachment. {exc}"),
        )

    def _summarize_current_message(self):
        detail = self.current_message
        if not isinstance(detail, MessageDetail):
            return
        text = detail.text_body or strip_html(detail.html_body)
        self.summarize_btn.setEnabled(False)
        self.summary_label.setText("Summarizing...")
        self.workers.submit(
            lambda: self.assistant.summarize(text),
            lambda summary, mid=detail.id: self._on_summary_ready(mid, summary),
        )

    def _on_summary_ready(self, message_id, summary):
        self.summarize_btn.setEnabled(True)
        if message_id != self._selected_message_id:
            return
        self.summary_label.setText(summary)


__all__ = ["MessageViewMixin"]
