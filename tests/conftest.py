import email.message
import json

import pytest

from config import Configuration


class FakeResponse:
    """Stands in for the object returned by an urllib opener."""

    def __init__(self, body=b"", status=200, charset="utf-8", read_error=None):
        self.status = status
        self._body = body
        self._read_error = read_error
        self.headers = email.message.Message()
        self.headers["Content-Type"] = f"text/html; charset={charset}"
        self.closed = False

    def getcode(self):
        return self.status

    def read(self):
        if self._read_error is not None:
            raise self._read_error
        return self._body

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeOpener:
    """Replays a list of outcomes: FakeResponse objects or exceptions."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []
        self.timeouts = []

    def open(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def tour_payload(name="Test Tour", items=None):
    if items is None:
        items = [{"lat": 48.1, "lng": 11.6, "alt": 520}]
    return {
        "page": {
            "_embedded": {
                "tour": {
                    "name": name,
                    "_embedded": {"coordinates": {"items": items}},
                }
            }
        }
    }


def tour_page(payload) -> str:
    """HTML page embedding the payload the way the tour service does."""
    text = json.dumps(payload)
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return (
        "<html><head><script>\n"
        f'kmtBoot.setProps("{escaped}");\n'
        "kmtBoot.init();\n"
        "</script></head><body></body></html>"
    )


@pytest.fixture
def config():
    return Configuration(user_agent="komootgpx", http_timeout=10.0,
                         max_retries=3, retry_interval=2.0, deadline=30.0)


@pytest.fixture
def sleeps():
    return []
