ROOT_LAYOUT_MARGINS = (0, 0, 0, 0)
ROOT_LAYOUT_SPACING = 0
TOP_BAR_MARGINS = (12, 8, 12, 8)
TOP_BAR_SPACING = 8
CONTENT_MARGINS = (12, 12, 12, 12)
CONTENT_SPACING = 10
MESSAGE_LIST_MIN_WIDTH = 320
SPLITTER_SIZES = (360, 740)

NEW_MESSAGE_HIGHLIGHT_COLOR = "#fff4c2"
LOADING_BODY_TEXT = "Loading full message..."
NO_MESSAGE_TEXT = "No message selected."
EMPTY_INBOX_TEXT = "Waiting for incoming emails..."
NOTIFICATION_TITLE = "New Email Received"
NOTIFICATION_DURATION_MS = 5000

CHAT_DOCK_TITLE = "GhostDrop Support AI"
CHAT_DOCK_MIN_WIDTH = 300
CHAT_ASSISTANT_NAME = "Ghosty"
CHAT_USER_NAME = "You"
CHAT_GREETING = "Hi there! I'm Ghosty, the GhostDrop support assistant. How can I help you today?"
CHAT_TYPING_TEXT = "Ghosty is typing..."
