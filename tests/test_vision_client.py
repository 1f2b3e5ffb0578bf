"""VisionClient: 요청 형태와 실패 매핑 (requests.post 를 monkeypatch)"""

import base64

import pytest
import requests

from backend.errors import ExternalCallFailed
from backend.utils import vision_client as vc


class _Resp:
    def __init__(self, status=200, payload=None, text=""):
        self.status_code = status
        self.ok = 200 <= status < 300
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _ok(content):
    return _Resp(payload={"choices": [{"message": {"content": content}}]})


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def install(response):
        def fake_post(url, **kwargs):
            calls.append({"url": url, **kwargs})
            if isinstance(response, Exception):
                raise response
            return response
        monkeypatch.setattr(vc.requests, "post", fake_post)
        return calls

    return install


def test_describe_sends_one_chat_completion(captured):
    calls = captured(_ok('{"content": {}}'))
    client = vc.VisionClient("sk-test", base_url="https://example.test/v1/", max_tokens=300)

    assert client.describe(b"\x89PNG", "image/png") == '{"content": {}}'

    assert len(calls) == 1
    call = calls[0]
    assert call["url"] == "https://example.test/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["timeout"] is None
    body = call["json"]
    assert body["model"] == "gpt-4o-mini"
    assert body["max_tokens"] == 300
    text_part, image_part = body["messages"][0]["content"]
    assert text_part == {"type": "text", "text": vc.ANALYSIS_PROMPT}
    expected = base64.b64encode(b"\x89PNG").decode("ascii")
    assert image_part["image_url"]["url"] == f"data:image/png;base64,{expected}"


def test_missing_key_fails_without_calling(captured):
    calls = captured(_ok("x"))
    with pytest.raises(ExternalCallFailed):
        vc.VisionClient("").describe(b"img")
    assert calls == []


@pytest.mark.parametrize(
    "response",
    [
        requests.exceptions.ConnectionError("down"),
        _Resp(status=429, text="rate limited"),
        _Resp(status=200, payload=None, text="<html>"),
        _Resp(status=200, payload={"choices": []}),
        _Resp(status=200, payload={"choices": [{"message": {"content": None}}]}),
    ],
)
def test_failures_map_to_external_call_failed(captured, response):
    calls = captured(response)
    with pytest.raises(ExternalCallFailed):
        vc.VisionClient("sk-test").describe(b"img")
    assert len(calls) == 1
