from ghostdrop_qt.mixins.chat import ChatMixin
from ghostdrop_qt.mixins.layout import LayoutMixin
from ghostdrop_qt.mixins.mailbox import MailboxMixin
from ghostdrop_qt.mixins.message_view import MessageViewMixin
from ghostdrop_qt.mixins.polling import PollMixin
from ghostdrop_qt.mixins.window_state import WindowStateMixin

__all__ = [
    "ChatMixin",
    "LayoutMixin",
    "MailboxMixin",
    "MessageViewMixin",
    "PollMixin",
    "WindowStateMixin",
]
