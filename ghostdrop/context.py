from dataclasses import dataclass

from ghostdrop.constants import API_BASE_URL
from ghostdrop.infra.mail_client import MailClient
from ghostdrop.infra.session_store import SessionStore
from ghostdrop.services.mail_sync import MailPoller
from ghostdrop.services.message_detail import MessageFetcher
from ghostdrop.services.provisioning import MailboxProvisioner


@dataclass
class MailContext:
    """One independent mailbox client: its own session, spare mailbox and known ids."""

    session_store: SessionStore
    client: MailClient
    provisioner: MailboxProvisioner
    poller: MailPoller
    fetcher: MessageFetcher

    @classmethod
    def create(cls, base_url=API_BASE_URL, spawn=None, **client_options):
        session_store = SessionStore()
        client = MailClient(session_store, base_url=base_url, **client_options)
        return cls(
            session_store=session_store,
            client=client,
            provisioner=MailboxProvisioner(client, session_store, spawn=spawn),
            poller=MailPoller(client, session_store),
            fetcher=MessageFetcher(client, session_store),
        )

    @property
    def address(self):
        return self.session_store.address

    def generate_random_mailbox(self):
        address = self.provisioner.generate_random_mailbox()
        self.poller.reset()
        return address

    def create_custom_mailbox(self, alias, domain):
        address = self.provisioner.create_custom_mailbox(alias, domain)
        self.poller.reset()
        return address

    def close(self):
        self.session_store.clear()
        self.client.close()


__all__ = ["MailContext"]
