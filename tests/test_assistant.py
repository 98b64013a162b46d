from ghostdrop.services import assistant
from ghostdrop.services.assistant import AssistantClient


class _Resp:
    def __init__(self, status_code=200, payload=None, json_error=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._payload = payload
        self._json_error = json_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class _Session:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json))
        if self.error is not None:
            raise self.error
        return self.response


def _client(response=None, error=None):
    client = AssistantClient(base_url="http://proxy.invalid/")
    client.session = _Session(response, error)
    return client


def test_summarize_returns_summary():
    client = _client(_Resp(200, {"summary": "- code 1234"}))

    assert client.summarize("Your code is 1234") == "- code 1234"
    assert client.session.posts == [("http://proxy.invalid/api/gemini/summarize", {"emailText": "Your code is 1234"})]


def test_summarize_empty_text_skips_request():
    client = _client(_Resp(200, {"summary": "x"}))

    assert client.summarize("   ") == ""
    assert client.session.posts == []


def test_summarize_failure_becomes_error_string():
    client = _client(error=assistant.requests.exceptions.ConnectionError("down"))

    assert client.summarize("text") == assistant.SUMMARY_ERROR


def test_chat_threads_session_id():
    client = _client(_Resp(200, {"response": "Hi!", "sessionId": "s-1"}))

    assert client.chat("hello") == ("Hi!", "s-1")
    client.session.response = _Resp(200, {"response": "Again", "sessionId": "s-1"})
    assert client.chat("again", session_id="s-1") == ("Again", "s-1")
    assert client.session.posts[1][1] == {"message": "again", "sessionId": "s-1"}


def test_chat_configuration_error_is_reported_in_plain_text():
    client = _client(_Resp(500, {"error": "Chatbot is not configured"}))

    assert client.chat("hello", session_id="s-9") == (assistant.CHAT_NOT_CONFIGURED, "s-9")


def test_chat_generic_failure_and_empty_prompt():
    client = _client(_Resp(502, json_error=ValueError("html page")))

    assert client.chat("hello") == (assistant.CHAT_UNAVAILABLE, None)
    assert client.chat("  ") == (assistant.CHAT_EMPTY_PROMPT, None)
