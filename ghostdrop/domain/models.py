from dataclasses import dataclass, field

from ghostdrop.constants import NO_SUBJECT, UNKNOWN_SENDER
from ghostdrop.errors import DataIntegrityError


@dataclass(frozen=True)
class Mailbox:
    address: str
    token: str


@dataclass(frozen=True, eq=False)
class Session:
    """The active mailbox binding.

    Compared by identity: two activations of the same address are still
    distinct sessions, so results issued against the first can be told apart.
    """

    address: str
    token: str


@dataclass(frozen=True)
class Attachment:
    id: str
    filename: str
    content_type: str
    size_bytes: int = 0

    @classmethod
    def from_api(cls, payload):
        payload = payload or {}
        if not isinstance(payload, dict):
            raise DataIntegrityError("Attachment record is not an object.")
        return cls(
            id=str(payload.get("id") or ""),
            filename=payload.get("filename") or "attachment",
            content_type=payload.get("contentType") or "application/octet-stream",
            size_bytes=_size_bytes(payload.get("size")),
        )


def _size_bytes(value):
    try:
        return int(value or 0)
    except (TypeError, ValueError) as exc:
        raise DataIntegrityError(f"Attachment size is not a number: {value!r}") from exc


def _sender_address(payload):
    sender = payload.get("from") or {}
    if isinstance(sender, dict):
        return sender.get("address") or UNKNOWN_SENDER
    return UNKNOWN_SENDER


@dataclass(frozen=True)
class MessageSummary:
    id: str
    sender: str
    subject: str
    received_at: str

    @classmethod
    def from_api(cls, payload):
        payload = payload or {}
        return cls(
            id=str(payload.get("id") or ""),
            sender=_sender_address(payload),
            subject=payload.get("subject") or NO_SUBJECT,
            received_at=payload.get("createdAt") or "",
        )


@dataclass(frozen=True)
class MessageDetail(MessageSummary):
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)
    text_body: str = ""
    html_body: str = ""

    @property
    def body(self) -> str:
        return self.text_body or self.html_body or ""

    @classmethod
    def from_api(cls, payload):
        payload = payload or {}
        if not isinstance(payload, dict):
            raise DataIntegrityError("Message payload is not an object.")
        html_parts = payload.get("html") or []
        if isinstance(html_parts, str):
            html_parts = [html_parts]
        return cls(
            id=str(payload.get("id") or ""),
            sender=_sender_address(payload),
            subject=payload.get("subject") or NO_SUBJECT,
            received_at=payload.get("createdAt") or "",
            attachments=tuple(Attachment.from_api(item) for item in payload.get("attachments") or []),
            text_body=payload.get("text") or "",
            html_body=html_parts[0] if html_parts else "",
        )


__all__ = ["Attachment", "Mailbox", "MessageDetail", "MessageSummary", "Session"]
