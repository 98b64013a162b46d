from ghostdrop.domain.models import Mailbox, MessageDetail, MessageSummary
from ghostdrop.errors import DataIntegrityError
from ghostdrop.infra.session_store import SessionStore
from ghostdrop_qt.constants import LOADING_BODY_TEXT
from ghostdrop_qt.mixins.message_view import MessageViewMixin


class _FakeLabel:
    def __init__(self):
        self.text = ""

    def setText(self, text):
        self.text = text


class _FakeBody:
    def __init__(self):
        self.plain = None

    def setPlainText(self, text):
        self.plain = text


class _FakeList:
    def __init__(self):
        self.clears = 0

    def clear(self):
        self.clears += 1


class _Workers:
    def __init__(self):
        self.submitted = []

    def submit(self, fn, on_result, on_error=None):
        self.submitted.append((fn, on_result, on_error))


class _Context:
    def __init__(self):
        self.session_store = SessionStore()
        self.session_store.set_active(Mailbox(address="a@x.io", token="t1"))


def _summary(message_id):
    return MessageSummary(id=message_id, sender="s@x.io", subject=f"S{message_id}", received_at="")


def _detail(message_id):
    return MessageDetail(id=message_id, sender="s@x.io", subject=f"S{message_id}", received_at="", text_body="body")


class _Probe(MessageViewMixin):
    def __init__(self):
        self.context = _Context()
        self.workers = _Workers()
        self.current_messages = [_summary("1"), _summary("2")]
        self.read_status = {}
        self.current_message = None
        self._selected_message_id = None
        self.message_header = _FakeLabel()
        self.body_view = _FakeBody()
        self.attachment_list = _FakeList()
        self.rendered_details = []
        self.errors = []
        self.cleared = 0

    def _render_message_list(self):
        pass

    def _render_message_detail(self, detail):
        self.rendered_details.append(detail)

    def _clear_detail_view(self, message="No message selected."):
        self.cleared += 1
        self.current_message = None
        self._selected_message_id = None

    def _show_error(self, text):
        self.errors.append(text)


def test_open_message_marks_read_and_requests_detail():
    probe = _Probe()

    probe._open_message("1")

    assert probe.read_status == {"1": True}
    assert probe.body_view.plain == LOADING_BODY_TEXT
    assert probe.current_message == _summary("1")
    assert len(probe.workers.submitted) == 1


def test_open_unknown_message_is_ignored():
    probe = _Probe()

    probe._open_message("missing")

    assert probe.workers.submitted == []
    assert probe.read_status == {}


def test_reselecting_loaded_message_does_not_refetch():
    probe = _Probe()
    probe._open_message("1")
    _, on_result, _ = probe.workers.submitted[0]
    on_result(_detail("1"))

    probe._open_message("1")

    assert len(probe.workers.submitted) == 1
    assert probe.rendered_details == [_detail("1")]


def test_out_of_order_detail_for_previous_selection_is_dropped():
    probe = _Probe()
    probe._open_message("1")
    probe._open_message("2")
    (_, first_result, _), (_, second_result, _) = probe.workers.submitted

    second_result(_detail("2"))
    first_result(_detail("1"))

    assert probe.rendered_details == [_detail("2")]
    assert probe.current_message == _detail("2")


def test_detail_resolving_after_mailbox_switch_is_dropped():
    probe = _Probe()
    probe._open_message("1")
    _, on_result, on_error = probe.workers.submitted[0]

    probe.context.session_store.set_active(Mailbox(address="b@x.io", token="t2"))
    on_result(_detail("1"))
    on_error(DataIntegrityError("late"))

    assert probe.rendered_details == []
    assert probe.errors == []


def test_detail_error_is_wrapped_for_display():
    probe = _Probe()
    probe._open_message("2")
    _, _, on_error = probe.workers.submitted[0]

    on_error(DataIntegrityError("Message with ID 2 not found or could not be loaded."))

    assert probe.errors == ["Failed to load message. Message with ID 2 not found or could not be loaded."]
    assert probe.cleared == 1


def test_summary_for_previous_message_is_ignored():
    class _Button:
        def __init__(self):
            self.enabled = None

        def setEnabled(self, value):
            self.enabled = value

    probe = _Probe()
    probe.summarize_btn = _Button()
    probe.summary_label = _FakeLabel()
    probe._selected_message_id = "2"

    probe._on_summary_ready("1", "old summary")
    assert probe.summary_label.text == ""

    probe._on_summary_ready("2", "fresh summary")
    assert probe.summary_label.text == "fresh summary"
    assert probe.summarize_btn.enabled is True
