from __future__ import annotations

import json as _json

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code=200, content=b"", text=None):
        self.status_code = status_code
        self.content = content
        self.text = text if text is not None else content.decode("utf-8", errors="replace")

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        return _json.loads(self.text)


class FakeSession:
    """Records calls and replays a canned response (or raises ``exc``)."""

    def __init__(self, response=None, exc=None):
        self.response = response or FakeResponse()
        self.exc = exc
        self.calls = []

    def _handle(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response

    def get(self, url, **kwargs):
        return self._handle("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._handle("POST", url, **kwargs)


HOURLY_HTML = """<html><body><table>
<tr><th>เวลา</th><th>ระดับน้ำ(ม.)</th><th>ปริมาณน้ำ</th></tr>
<tr><td>01/10/2024 05:00</td><td>1.20</td><td>10</td></tr>
<tr><td>01/10/2024 06:00</td><td>-</td><td>11</td></tr>
<tr><td>01/10/2024 07:00</td><td>1.40</td><td>12</td></tr>
</table></body></html>"""


@pytest.fixture
def hourly_html_bytes():
    return HOURLY_HTML.encode("utf-8")


@pytest.fixture
def cache_dir(tmp_path, monkeypatch):
    path = tmp_path / "cache"
    monkeypatch.setenv("RFM_CACHE_DIR", str(path))
    return path


@pytest.fixture
def fake_session():
    def make(status_code=200, content=b"", text=None, exc=None):
        return FakeSession(FakeResponse(status_code, content, text), exc=exc)
    return make
