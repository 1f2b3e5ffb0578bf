"""frontend/api.py: 오류를 {"error": ...} 로 통일하는지"""

import pytest
import requests

import api


class _Resp:
    def __init__(self, status=200, payload=None, text=""):
        self.status_code = status
        self._payload = payload
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code}")

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def test_analyze_posts_multipart_image(monkeypatch):
    seen = {}

    def fake_post(url, files=None, timeout=None):
        seen.update(url=url, files=files)
        return _Resp(payload={"jsonFileName": "x-content.json"})

    monkeypatch.setattr(api.requests, "post", fake_post)
    assert api.analyze_image(b"img", "a.png", "image/png") == {"jsonFileName": "x-content.json"}
    assert seen["url"].endswith("/analyze")
    assert seen["files"] == {"image": ("a.png", b"img", "image/png")}


def test_server_error_body_is_passed_through(monkeypatch):
    monkeypatch.setattr(api.requests, "post",
                        lambda *a, **k: _Resp(422, payload={"error": "Not recognized as food"}))
    assert api.analyze_image(b"img", "a.png") == {"error": "Not recognized as food"}


def test_network_error_becomes_error_dict(monkeypatch):
    def boom(*a, **k):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(api.requests, "get", boom)
    for call in (lambda: api.fetch_result("x.json"), api.list_entries, lambda: api.get_entry(0)):
        assert "error" in call()


@pytest.mark.parametrize("index", [0, 5])
def test_get_entry_url(monkeypatch, index):
    seen = {}

    def fake_get(url, timeout=None):
        seen["url"] = url
        return _Resp(payload={"item_name": "Apple"})

    monkeypatch.setattr(api.requests, "get", fake_get)
    assert api.get_entry(index) == {"item_name": "Apple"}
    assert seen["url"].endswith(f"/entries/{index}")


def test_non_json_success(monkeypatch):
    monkeypatch.setattr(api.requests, "get", lambda *a, **k: _Resp(200, payload=None, text="<html>"))
    assert "error" in api.list_entries()
