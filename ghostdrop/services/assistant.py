import logging

import requests

from ghostdrop.constants import ASSISTANT_BASE_URL, HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC

logger = logging.getLogger(__name__)

SUMMARY_ERROR = "Error: Failed to generate summary. Please try again later."
CHAT_EMPTY_PROMPT = "Please ask a question."
CHAT_NOT_CONFIGURED = (
    "Error: The AI assistant is not configured correctly on the server. "
    "The API key may be missing or invalid."
)
CHAT_UNAVAILABLE = "Sorry, I'm having trouble connecting to the support AI right now. Please try again later."


class AssistantClient:
    """Client for the summarization/chat proxy.

    Nothing raises past this class: every failure is turned into a
    human-readable string for display.
    """

    def __init__(self, base_url=ASSISTANT_BASE_URL, request_timeout=(HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC)):
        self.base_url = (base_url or ASSISTANT_BASE_URL).rstrip("/")
        self.request_timeout = request_timeout
        self.session = requests.Session()

    def _post(self, path, payload):
        resp = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.request_timeout)
        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        if not resp.ok:
            raise RuntimeError(data.get("error") or f"Request failed with status {resp.status_code}")
        return data

    def summarize(self, email_text):
        if not (email_text or "").strip():
            return ""
        try:
            data = self._post("/api/gemini/summarize", {"emailText": email_text})
        except (requests.RequestException, RuntimeError) as exc:
            logger.error("Error summarizing email: %s", exc)
            return SUMMARY_ERROR
        return data.get("summary") or "No summary available."

    def chat(self, message, session_id=None):
        """Return ``(response_text, session_id)``; the id is kept on failure."""
        if not (message or "").strip():
            return CHAT_EMPTY_PROMPT, session_id
        payload = {"message": message}
        if session_id:
            payload["sessionId"] = session_id
        try:
            data = self._post("/api/gemini/chat", payload)
        except (requests.RequestException, RuntimeError) as exc:
            logger.error("Error sending message to chat service: %s", exc)
            text = str(exc)
            if "API key" in text or "not configured" in text:
                return CHAT_NOT_CONFIGURED, session_id
            return CHAT_UNAVAILABLE, session_id
        return data.get("response") or "", data.get("sessionId") or session_id

    def close(self):
        session = getattr(self, "session", None)
        if session is not None:
            session.close()
            self.session = None


__all__ = ["AssistantClient"]
