APP_NAME = "GhostDrop"
API_BASE_URL = "https://api.mail.tm"
ASSISTANT_BASE_URL = "http://127.0.0.1:3000"
POLL_INTERVAL_MS = 5000
HTTP_CONNECT_TIMEOUT_SEC = 10
HTTP_READ_TIMEOUT_SEC = 30
HTTP_MAX_ATTEMPTS = 5
HTTP_RETRY_BASE_DELAY_SEC = 1.5

UNAUTHENTICATED_ENDPOINTS = ("/accounts", "/token")
JSON_CONTENT_TYPES = ("application/json", "application/ld+json")

PREFETCH_COOLDOWN_SEC = 30
ALIAS_LENGTH = 8
PASSWORD_LENGTH = 12
ALIAS_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"

UNKNOWN_SENDER = "Unknown Sender"
NO_SUBJECT = "(no subject)"

BYTES_PER_KB = 1024
BYTES_PER_MB = 1024 * 1024
NEW_MESSAGE_HIGHLIGHT_MS = 2000
QT_THREAD_POOL_MAX_WORKERS = 4
QT_WINDOW_DEFAULT_GEOMETRY = "1100x700"
QT_WINDOW_MIN_WIDTH = 720
QT_WINDOW_MIN_HEIGHT = 480
