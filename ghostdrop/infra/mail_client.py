import logging
import time

import requests

from ghostdrop.constants import (
    API_BASE_URL,
    HTTP_CONNECT_TIMEOUT_SEC,
    HTTP_MAX_ATTEMPTS,
    HTTP_READ_TIMEOUT_SEC,
    HTTP_RETRY_BASE_DELAY_SEC,
    JSON_CONTENT_TYPES,
    UNAUTHENTICATED_ENDPOINTS,
)
from ghostdrop.errors import (
    AddressTakenError,
    MalformedResponseError,
    ProviderError,
    TransientProviderError,
)

logger = logging.getLogger(__name__)

RESPONSE_JSON = "json"
RESPONSE_BLOB = "blob"


def _is_attachment_endpoint(endpoint):
    return "/attachments/" in endpoint


class MailClient:
    """mail.tm REST client with bounded exponential-backoff retries."""

    def __init__(
        self,
        session_store,
        base_url=API_BASE_URL,
        request_timeout=(HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC),
        max_attempts=HTTP_MAX_ATTEMPTS,
        retry_base_delay_sec=HTTP_RETRY_BASE_DELAY_SEC,
    ):
        self.session_store = session_store
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.request_timeout = request_timeout
        self.max_attempts = max(1, int(max_attempts or 1))
        self.retry_base_delay_sec = max(0.0, float(retry_base_delay_sec or 0))
        self.session = requests.Session()

    def _headers(self, endpoint):
        headers = {}
        attachment = _is_attachment_endpoint(endpoint)
        if endpoint in UNAUTHENTICATED_ENDPOINTS:
            headers["Accept"] = "application/json"
        elif not attachment:
            headers["Accept"] = "application/ld+json"
        if not attachment:
            headers["Content-Type"] = "application/json"
        token = self.session_store.token
        if token and endpoint not in UNAUTHENTICATED_ENDPOINTS:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def retry_delay(self, attempt):
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        return self.retry_base_delay_sec * (2 ** (attempt - 1))

    @staticmethod
    def _error_for_status(response, endpoint):
        status = response.status_code
        reason = getattr(response, "reason", "") or ""
        if status == 400 and endpoint == "/accounts":
            return AddressTakenError()
        if 400 <= status < 500 and status != 429:
            logger.error("Provider request %s failed with status %s: %s", endpoint, status, response.text)
            label = f"{reason} ({status})" if reason else f"({status})"
            return ProviderError(f"Request failed: {label}", status_code=status)
        return TransientProviderError(f"Server Error: {status} {reason}".strip(), status_code=status)

    @staticmethod
    def _parse_json(response, endpoint):
        if response.status_code == 204:
            return None
        content_type = (response.headers.get("content-type") or "").lower()
        if not any(kind in content_type for kind in JSON_CONTENT_TYPES):
            return None
        if not response.text:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Failed to parse JSON response from %s: %s", endpoint, exc)
            raise MalformedResponseError("Received invalid data from the server.") from exc

    def _attempt(self, endpoint, method, body, response_kind):
        session = self.session
        if session is None:
            raise ProviderError("Mail client is closed.")
        try:
            response = session.request(
                method,
                f"{self.base_url}{endpoint}",
                headers=self._headers(endpoint),
                json=body,
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            raise TransientProviderError(f"Network error: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise self._error_for_status(response, endpoint)

        if response_kind == RESPONSE_BLOB:
            return response.content
        return self._parse_json(response, endpoint)

    def request(self, endpoint, method="GET", body=None, response_kind=RESPONSE_JSON):
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._attempt(endpoint, method, body, response_kind)
            except ProviderError as exc:
                if not exc.retriable or attempt >= self.max_attempts:
                    raise
                delay = self.retry_delay(attempt)
                logger.warning(
                    "Attempt %s failed for %s. Retrying in %.1fs: %s", attempt, endpoint, delay, exc
                )
                time.sleep(delay)

    @staticmethod
    def _members(payload):
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            members = payload.get("hydra:member")
            if members is None:
                members = payload.get("member")
            return members if isinstance(members, list) else []
        return []

    def list_domains(self):
        payload = self.request("/domains")
        return [item.get("domain") for item in self._members(payload) if isinstance(item, dict) and item.get("domain")]

    def create_account(self, address, password):
        return self.request("/accounts", method="POST", body={"address": address, "password": password})

    def issue_token(self, address, password):
        payload = self.request("/token", method="POST", body={"address": address, "password": password})
        if not isinstance(payload, dict):
            return None
        return payload.get("token") or None

    def list_messages(self):
        return [item for item in self._members(self.request("/messages")) if isinstance(item, dict)]

    def get_message(self, message_id):
        return self.request(f"/messages/{message_id}")

    def download_attachment(self, message_id, attachment_id):
        return self.request(
            f"/messages/{message_id}/attachments/{attachment_id}",
            response_kind=RESPONSE_BLOB,
        )

    def close(self):
        session = getattr(self, "session", None)
        if session is not None:
            session.close()
            self.session = None


__all__ = ["MailClient", "RESPONSE_BLOB", "RESPONSE_JSON"]
