import os

from ghostdrop.domain.helpers import safe_filename
from ghostdrop.domain.models import MessageDetail
from ghostdrop.errors import DataIntegrityError


class MessageFetcher:
    """On-demand message bodies and attachment bytes for the active mailbox.

    In-flight fetches are not deduplicated; callers that can re-select a
    message must tag requests and drop late responses themselves.
    """

    def __init__(self, client, session_store):
        self.client = client
        self.session_store = session_store

    def fetch_detail(self, message_id):
        self.session_store.require_active()
        payload = self.client.get_message(message_id)
        if not payload:
            raise DataIntegrityError(f"Message with ID {message_id} not found or could not be loaded.")
        return MessageDetail.from_api(payload)

    def fetch_attachment(self, message_id, attachment_id):
        self.session_store.require_active()
        return self.client.download_attachment(message_id, attachment_id) or b""

    def save_attachment(self, message_id, attachment, directory):
        content = self.fetch_attachment(message_id, attachment.id)
        os.makedirs(directory, exist_ok=True)
        base, ext = os.path.splitext(safe_filename(attachment.filename))
        path = os.path.join(directory, f"{base}{ext}")
        counter = 1
        while os.path.exists(path):
            path = os.path.join(directory, f"{base} ({counter}){ext}")
            counter += 1
        with open(path, "wb") as f:
            f.write(content)
        return path


__all__ = ["MessageFetcher"]
