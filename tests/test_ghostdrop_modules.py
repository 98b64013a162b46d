from ghostdrop.context import MailContext
from ghostdrop.domain.helpers import format_date, format_size, message_matches_search, normalize_alias, strip_html
from ghostdrop.domain.models import Mailbox, MessageSummary
from ghostdrop.errors import AddressTakenError, ExternalServiceError, ProviderError, TransientProviderError


def test_helper_module_exports_work():
    assert format_size(2048) == "2.0 KB"
    assert format_size(0) == ""
    assert "Hello" in strip_html("<p>Hello</p><script>x()</script>")
    assert format_date("") == ""
    assert format_date("2020-01-05T10:00:00+00:00") == "Jan 05, 2020"


def test_normalize_alias():
    assert normalize_alias("  Ghost.Box ") == "ghost.box"
    assert normalize_alias("") is None
    assert normalize_alias("has space") is None
    assert normalize_alias("-leading") is None


def test_message_search_matches_sender_and_subject():
    msg = MessageSummary(id="1", sender="Alerts@Bank.com", subject="Your code", received_at="")

    assert message_matches_search(msg, "bank")
    assert message_matches_search(msg, "CODE")
    assert message_matches_search(msg, "")
    assert not message_matches_search(msg, "invoice")


def test_error_retriability_is_structural():
    assert TransientProviderError("x").retriable is True
    assert ProviderError("x", status_code=404).retriable is False
    taken = AddressTakenError()
    assert taken.retriable is False
    assert taken.status_code == 400
    assert isinstance(taken, ExternalServiceError)


def test_contexts_do_not_share_state():
    first = MailContext.create(base_url="https://one.invalid", spawn=lambda fn: None)
    second = MailContext.create(base_url="https://two.invalid", spawn=lambda fn: None)
    try:
        assert first.session_store is not second.session_store
        assert first.poller.known_ids is not second.poller.known_ids
        assert first.client.session_store is first.session_store
        assert first.provisioner.session_store is first.session_store
        assert first.client.base_url == "https://one.invalid"
        assert first.address is None
    finally:
        first.close()
        second.close()


def test_close_ends_active_session():
    context = MailContext.create(base_url="https://one.invalid", spawn=lambda fn: None)
    context.session_store.set_active(Mailbox(address="me@x.io", token="t"))

    context.close()

    assert context.address is None
    assert context.client.session is None
