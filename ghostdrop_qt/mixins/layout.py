from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QPushButton,
    QSplitter,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from ghostdrop.constants import APP_NAME
from ghostdrop_qt.constants import (
    CONTENT_MARGINS,
    CONTENT_SPACING,
    EMPTY_INBOX_TEXT,
    MESSAGE_LIST_MIN_WIDTH,
    ROOT_LAYOUT_MARGINS,
    ROOT_LAYOUT_SPACING,
    SPLITTER_SIZES,
    TOP_BAR_MARGINS,
    TOP_BAR_SPACING,
)


class LayoutMixin:
    def _build_ui(self):
        self.setWindowTitle(APP_NAME)
        container = QWidget()
        root_layout = QVBoxLayout(container)
        root_layout.setContentsMargins(*ROOT_LAYOUT_MARGINS)
        root_layout.setSpacing(ROOT_LAYOUT_SPACING)
        root_layout.addWidget(self._build_top_bar())
        root_layout.addWidget(self._build_custom_bar())

        splitter = QSplitter()
        splitter.addWidget(self._build_inbox_panel())
        splitter.addWidget(self._build_detail_panel())
        splitter.setSizes(list(SPLITTER_SIZES))
        root_layout.addWidget(splitter, 1)

        self.status_lbl = QLabel("Starting...")
        self.status_lbl.setObjectName("statusLabel")
        self.status_lbl.setContentsMargins(*TOP_BAR_MARGINS)
        root_layout.addWidget(self.status_lbl)
        self.setCentralWidget(container)
        self._build_chat_dock()

    def _build_top_bar(self):
        top_bar = QFrame()
        top_bar.setObjectName("topBar")
        layout = QHBoxLayout(top_bar)
        layout.setContentsMargins(*TOP_BAR_MARGINS)
        layout.setSpacing(TOP_BAR_SPACING)

        title_lbl = QLabel(APP_NAME)
        title_lbl.setObjectName("appTitle")
        self.address_field = QLineEdit()
        self.address_field.setReadOnly(True)
        self.address_field.setPlaceholderText("Generating address...")
        copy_btn = QPushButton("Copy")
        copy_btn.clicked.connect(self._copy_address)
        refresh_btn = QPushButton("Refresh")
        refresh_btn.clicked.connect(self._manual_refresh)
        new_btn = QPushButton("New Address")
        new_btn.setObjectName("primaryButton")
        new_btn.clicked.connect(self._generate_mailbox)
        destruct_btn = QPushButton("Self-Destruct")
        destruct_btn.clicked.connect(self._self_destruct)
        chat_btn = QPushButton("Assistant")
        chat_btn.clicked.connect(self._toggle_chat)

        layout.addWidget(title_lbl)
        layout.addWidget(self.address_field, 1)
        for button in (copy_btn, refresh_btn, new_btn, destruct_btn, chat_btn):
            layout.addWidget(button)
        return top_bar

    def _build_custom_bar(self):
        bar = QFrame()
        layout = QHBoxLayout(bar)
        layout.setContentsMargins(*TOP_BAR_MARGINS)
        layout.setSpacing(TOP_BAR_SPACING)
        self.alias_input = QLineEdit()
        self.alias_input.setPlaceholderText("custom alias")
        self.alias_input.returnPressed.connect(self._create_custom_mailbox)
        self.domain_combo = QComboBox()
        create_btn = QPushButton("Create")
        create_btn.clicked.connect(self._create_custom_mailbox)

        sound_box = QCheckBox("Sound")
        sound_box.setChecked(bool(self.config.get("sound_enabled", True)))
        sound_box.toggled.connect(lambda checked: self.config.set("sound_enabled", checked))
        notify_box = QCheckBox("Notifications")
        notify_box.setChecked(bool(self.config.get("notifications_enabled", True)))
        notify_box.toggled.connect(lambda checked: self.config.set("notifications_enabled", checked))

        layout.addWidget(QLabel("Custom:"))
        layout.addWidget(self.alias_input, 1)
        layout.addWidget(QLabel("@"))
        layout.addWidget(self.domain_combo)
        layout.addWidget(create_btn)
        layout.addStretch(1)
        layout.addWidget(sound_box)
        layout.addWidget(notify_box)
        return bar

    def _build_inbox_panel(self):
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(*CONTENT_MARGINS)
        layout.setSpacing(CONTENT_SPACING)
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search sender or subject")
        self.search_input.textChanged.connect(lambda _text: self._render_message_list())
        self.message_list = QListWidget()
        self.message_list.setMinimumWidth(MESSAGE_LIST_MIN_WIDTH)
        self.message_list.itemClicked.connect(self._on_message_item_clicked)
        self.empty_label = QLabel(EMPTY_INBOX_TEXT)
        toggle_read_btn = QPushButton("Mark Read/Unread")
        toggle_read_btn.clicked.connect(self._toggle_read_status)

        layout.addWidget(self.search_input)
        layout.addWidget(self.message_list, 1)
        layout.addWidget(self.empty_label)
        layout.addWidget(toggle_read_btn)
        return panel

    def _build_detail_panel(self):
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(*CONTENT_MARGINS)
        layout.setSpacing(CONTENT_SPACING)
        self.message_header = QLabel()
        self.message_header.setObjectName("messageHeader")
        self.message_header.setWordWrap(True)
        # QTextBrowser renders a static subset of HTML and never runs scripts.
        self.body_view = QTextBrowser()
        self.body_view.setOpenExternalLinks(True)
        self.attachment_list = QListWidget()
        self.attachment_list.setMaximumHeight(96)
        self.attachment_list.itemDoubleClicked.connect(self._download_attachment)
        self.summarize_btn = QPushButton("Summarize")
        self.summarize_btn.clicked.connect(self._summarize_current_message)
        self.summary_label = QLabel()
        self.summary_label.setWordWrap(True)

        layout.addWidget(self.message_header)
        layout.addWidget(self.body_view, 1)
        layout.addWidget(self.attachment_list)
        layout.addWidget(self.summarize_btn)
        layout.addWidget(self.summary_label)
        return panel


__all__ = ["LayoutMixin"]
