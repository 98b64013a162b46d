from PySide6.QtCore import QThreadPool, QTimer
from PySide6.QtWidgets import QMainWindow, QStyle, QSystemTrayIcon

from ghostdrop.constants import QT_THREAD_POOL_MAX_WORKERS
from ghostdrop.context import MailContext
from ghostdrop.infra.config_store import Config
from ghostdrop.services.assistant import AssistantClient
from ghostdrop_qt.helpers.worker_manager import WorkerManager
from ghostdrop_qt.mixins import (
    ChatMixin,
    LayoutMixin,
    MailboxMixin,
    MessageViewMixin,
    PollMixin,
    WindowStateMixin,
)


class GhostDropWindow(
    LayoutMixin,
    MailboxMixin,
    PollMixin,
    MessageViewMixin,
    ChatMixin,
    WindowStateMixin,
    QMainWindow,
):
    def __init__(self, config=None, context=None):
        super().__init__()
        self.config = config or Config()
        self.context = context or MailContext.create(base_url=self.config.get("api_base_url"))
        self.assistant = AssistantClient(base_url=self.config.get("assistant_base_url"))
        self.current_messages = []
        self.read_status = {}
        self.newly_arrived_ids = set()
        self.current_message = None
        self._selected_message_id = None
        self._mailbox_busy = False
        self._poll_in_flight = False
        self._chat_session_id = None
        self._chat_generation = 0
        self._chat_busy = False

        self.thread_pool = QThreadPool(self)
        self.thread_pool.setMaxThreadCount(QT_THREAD_POOL_MAX_WORKERS)
        self.workers = WorkerManager(self.thread_pool, on_default_error=lambda exc: self._show_error(str(exc)))
        self._poll_timer = QTimer(self)
        self._poll_timer.setInterval(self.config.poll_interval_ms())
        self._poll_timer.timeout.connect(self._poll_once)
        self._highlight_timer = QTimer(self)
        self._highlight_timer.setSingleShot(True)
        self._highlight_timer.timeout.connect(self._clear_new_message_highlight)

        self.setWindowIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation))
        self.tray_icon = None
        if QSystemTrayIcon.isSystemTrayAvailable():
            self.tray_icon = QSystemTrayIcon(self.windowIcon(), self)
            self.tray_icon.show()

        self._build_ui()
        self._restore_window_geometry()
        self._clear_detail_view()
        self._render_message_list()
        QTimer.singleShot(0, self._generate_mailbox)


__all__ = ["GhostDropWindow"]
