import html
import re
from datetime import datetime

from ghostdrop.constants import BYTES_PER_KB, BYTES_PER_MB

ALIAS_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")
UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._ -]+")


def strip_html(text):
    """Strip HTML tags, CSS, scripts and decode entities to plain text."""
    if not text:
        return ""
    text = re.sub(r"<style[^>]*>.*?</style>", "", text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<script[^>]*>.*?</script>", "", text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<head[^>]*>.*?</head>", "", text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<!--.*?-->", "", text, flags=re.DOTALL)
    text = re.sub(r"<br\s*/?>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"</?(p|div|tr)[^>]*>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"<li[^>]*>", "\n• ", text, flags=re.IGNORECASE)
    text = re.sub(r"<a[^>]*href=[\"']([^\"']*)[\"'][^>]*>([^<]*)</a>", r"\2 [\1]", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", "", text)
    text = html.unescape(text)
    cleaned = []
    prev_blank = False
    for line in text.split("\n"):
        stripped = " ".join(line.split())
        if not stripped:
            if not prev_blank:
                cleaned.append("")
                prev_blank = True
        else:
            cleaned.append(stripped)
            prev_blank = False
    return "\n".join(cleaned).strip()


def format_date(iso_str):
    """Format ISO date string for display."""
    try:
        dt = datetime.fromisoformat(iso_str.replace("Z", "+00:00"))
        now = datetime.now(dt.tzinfo) if dt.tzinfo else datetime.now()
        if dt.date() == now.date():
            return dt.strftime("%I:%M %p").lstrip("0")
        if dt.year == now.year:
            return dt.strftime("%b %d")
        return dt.strftime("%b %d, %Y")
    except (AttributeError, TypeError, ValueError):
        return iso_str[:10] if iso_str else ""


def format_size(size_bytes):
    """Format file size for display."""
    if not size_bytes:
        return ""
    if size_bytes < BYTES_PER_KB:
        return f"{size_bytes} B"
    if size_bytes < BYTES_PER_MB:
        return f"{size_bytes / BYTES_PER_KB:.1f} KB"
    return f"{size_bytes / BYTES_PER_MB:.1f} MB"


def normalize_alias(alias):
    """Lower-case and validate a user-entered mailbox alias; return None when invalid."""
    value = (alias or "").strip().lower()
    if not value or not ALIAS_PATTERN.match(value):
        return None
    return value


def safe_filename(name, fallback="attachment"):
    value = UNSAFE_FILENAME_CHARS.sub("_", (name or "").strip()).strip(" .")
    return value or fallback


def message_matches_search(message, search_text):
    """Case-insensitive match of sender or subject."""
    needle = (search_text or "").strip().lower()
    if not needle:
        return True
    return needle in (message.sender or "").lower() or needle in (message.subject or "").lower()
