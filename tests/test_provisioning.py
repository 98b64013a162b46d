import pytest

from ghostdrop.errors import (
    AddressTakenError,
    DataIntegrityError,
    ServiceUnavailableError,
    TransientProviderError,
    ValidationError,
)
from ghostdrop.infra.session_store import SessionStore
from ghostdrop.services import provisioning
from ghostdrop.services.provisioning import MailboxProvisioner


class _ProviderClient:
    def __init__(self, domains=("domainX",)):
        self.domains = list(domains)
        self.domain_calls = 0
        self.accounts = []
        self.token_requests = []
        self.account_error = None
        self.token_value = "token"

    def list_domains(self):
        self.domain_calls += 1
        return list(self.domains)

    def create_account(self, address, password):
        if self.account_error is not None:
            raise self.account_error
        self.accounts.append((address, password))

    def issue_token(self, address, password):
        self.token_requests.append((address, password))
        if self.token_value is None:
            return None
        return f"{self.token_value}-{len(self.token_requests)}"


def _run_now(fn):
    fn()


def test_generate_random_mailbox_slow_path_then_prefetches_next(monkeypatch):
    monkeypatch.setattr(provisioning, "random_string", lambda length: "abc12345"[:length].ljust(length, "0"))
    client = _ProviderClient()
    store = SessionStore()
    provisioner = MailboxProvisioner(client, store, spawn=_run_now)

    address = provisioner.generate_random_mailbox()

    assert address == "abc12345@domainX"
    assert store.address == "abc12345@domainX"
    assert store.token == "token-1"
    assert provisioner.has_pending
    assert len(client.accounts) == 2


def test_generate_random_mailbox_consumes_pending_and_refills():
    client = _ProviderClient()
    store = SessionStore()
    provisioner = MailboxProvisioner(client, store, spawn=_run_now)
    provisioner.generate_random_mailbox()
    pending_address = client.accounts[1][0]

    address = provisioner.generate_random_mailbox()

    assert address == pending_address
    assert store.token == "token-2"
    assert len(client.accounts) == 3
    assert provisioner.has_pending


def test_random_mailbox_shape():
    client = _ProviderClient(domains=["one.io", "two.io"])
    store = SessionStore()
    provisioner = MailboxProvisioner(client, store, spawn=lambda fn: None)

    address = provisioner.generate_random_mailbox()

    alias, domain = address.split("@")
    assert len(alias) == 8
    assert alias.isalnum() and alias == alias.lower()
    assert domain in ("one.io", "two.io")
    password = client.accounts[0][1]
    assert len(password) == 12
    assert client.token_requests[0] == (address, password)


def test_prefetch_runs_once_while_in_flight():
    spawned = []
    client = _ProviderClient()
    provisioner = MailboxProvisioner(client, SessionStore(), spawn=spawned.append)

    assert provisioner.prefetch() is True
    assert provisioner.is_prefetching
    assert provisioner.prefetch() is False
    assert len(spawned) == 1

    spawned[0]()

    assert len(client.accounts) == 1
    assert provisioner.has_pending
    assert not provisioner.is_prefetching
    assert provisioner.prefetch() is False


def test_prefetch_spawn_failure_releases_in_flight_flag():
    attempts = []

    def _flaky_spawn(fn):
        attempts.append(fn)
        if len(attempts) == 1:
            raise RuntimeError("can't start new thread")
        fn()

    client = _ProviderClient()
    provisioner = MailboxProvisioner(client, SessionStore(), spawn=_flaky_spawn)

    with pytest.raises(RuntimeError, match="new thread"):
        provisioner.prefetch()

    assert not provisioner.is_prefetching
    assert provisioner.prefetch() is True
    assert provisioner.has_pending
    assert len(attempts) == 2


def test_activation_survives_prefetch_spawn_failure():
    def _broken_spawn(fn):
        raise RuntimeError("can't start new thread")

    store = SessionStore()
    provisioner = MailboxProvisioner(_ProviderClient(), store, spawn=_broken_spawn)

    address = provisioner.create_mailbox("me@domainX")

    assert address == "me@domainX"
    assert store.address == "me@domainX"
    assert not provisioner.is_prefetching


def test_prefetch_failure_cooldown():
    now = {"t": 100.0}
    client = _ProviderClient()
    client.account_error = TransientProviderError("Server Error: 503", status_code=503)
    provisioner = MailboxProvisioner(client, SessionStore(), spawn=_run_now, clock=lambda: now["t"])
    calls = {"count": 0}
    original_provision = provisioner.provision

    def _counting_provision(address=None):
        calls["count"] += 1
        return original_provision(address)

    provisioner.provision = _counting_provision

    assert provisioner.prefetch() is True
    assert calls["count"] == 1
    assert not provisioner.has_pending
    assert not provisioner.is_prefetching

    now["t"] = 110.0
    assert provisioner.prefetch() is False
    assert calls["count"] == 1

    now["t"] = 131.0
    client.account_error = None
    assert provisioner.prefetch() is True
    assert calls["count"] == 2
    assert provisioner.has_pending


def test_custom_address_taken_surfaces_and_keeps_session():
    client = _ProviderClient()
    store = SessionStore()
    provisioner = MailboxProvisioner(client, store, spawn=lambda fn: None)
    provisioner.create_mailbox("first@domainX")
    client.account_error = AddressTakenError()

    with pytest.raises(AddressTakenError):
        provisioner.create_custom_mailbox("Taken", "domainX")

    assert store.address == "first@domainX"
    assert client.token_requests == [("first@domainX", client.accounts[0][1])]


def test_create_custom_mailbox_registers_address_verbatim():
    client = _ProviderClient()
    store = SessionStore()
    provisioner = MailboxProvisioner(client, store, spawn=lambda fn: None)

    assert provisioner.create_custom_mailbox(" Hello.World ", "DomainX") == "hello.world@domainx"
    assert client.domain_calls == 0
    assert store.address == "hello.world@domainx"


@pytest.mark.parametrize("alias, domain", [("", "x.io"), ("ok", ""), ("bad alias", "x.io")])
def test_create_custom_mailbox_validates_input(alias, domain):
    provisioner = MailboxProvisioner(_ProviderClient(), SessionStore(), spawn=lambda fn: None)

    with pytest.raises(ValidationError):
        provisioner.create_custom_mailbox(alias, domain)


def test_missing_token_is_data_integrity_error():
    client = _ProviderClient()
    client.token_value = None
    store = SessionStore()
    provisioner = MailboxProvisioner(client, store, spawn=lambda fn: None)

    with pytest.raises(DataIntegrityError, match="authentication token"):
        provisioner.generate_random_mailbox()

    assert store.active is None
    assert len(client.accounts) == 1


def test_domain_failure_is_service_unavailable():
    class _NoDomains(_ProviderClient):
        def list_domains(self):
            raise TransientProviderError("Server Error: 502", status_code=502)

    provisioner = MailboxProvisioner(_NoDomains(), SessionStore(), spawn=lambda fn: None)

    with pytest.raises(ServiceUnavailableError):
        provisioner.generate_random_mailbox()
