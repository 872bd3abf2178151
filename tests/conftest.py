import http.client
import io
import threading

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from mediaframe.devserver import make_server


def make_response(status=200, headers=None, body=b'', url='https://example.com/', encoding=None):
    """A requests.Response whose body is read lazily from memory, like stream=True.

    The encoding is picked from the headers the way HTTPAdapter.build_response does.
    """
    response = requests.Response()
    response.status_code = status
    response.headers = CaseInsensitiveDict(headers or {})
    response.raw = io.BytesIO(body)
    response.url = url
    response.encoding = encoding or get_encoding_from_headers(response.headers)
    return response


class Origin:
    """Canned origin: maps (method, url) to responses and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, url, **kwargs):
        self.routes[(method, url)] = kwargs

    def __call__(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if (method, url) not in self.routes:
            raise requests.ConnectionError(f'no route to {url}')
        return make_response(url=url, **self.routes[(method, url)])


@pytest.fixture
def origin(monkeypatch):
    fake = Origin()
    monkeypatch.setattr('mediaframe.fetcher.requests.request', fake)
    return fake


@pytest.fixture
def live_server():
    server = make_server('127.0.0.1', 0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server.server_address
    server.shutdown()
    server.server_close()


@pytest.fixture
def client(live_server):
    host, port = live_server

    def get(path):
        conn = http.client.HTTPConnection(host, port, timeout=10)
        try:
            conn.request('GET', path)
            resp = conn.getresponse()
            return resp.status, resp.headers, resp.read()
        finally:
            conn.close()

    return get
