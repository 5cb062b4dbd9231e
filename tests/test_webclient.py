import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs

import pytest
import requests

from foxlib.webclient import (
    FetchResult,
    fetch_response,
    http_client,
    http_get,
    http_post,
    http_post_form,
    read_token,
    response,
)


class _EchoHandler(BaseHTTPRequestHandler):
    def _reply(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode() if length else ""
        payload = json.dumps({
            "method": self.command,
            "headers": {k.lower(): v for k, v in self.headers.items()},
            "body": body,
        }).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = _reply
    do_POST = _reply

    def log_message(self, *args):
        pass


@pytest.fixture(scope="module")
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _EchoHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def _closed_port_url():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}"


def test_response_layout():
    out = response("http://x", b'{"a":1}')
    assert out == b'{"url": http://x , "data": {"a":1} }'


def test_read_token_from_file(tmp_path):
    path = tmp_path / "tok"
    path.write_text("token\n")
    assert read_token(str(path)) == "token"


def test_read_token_plain_value(tmp_path):
    assert read_token("token") == "token"


def test_fetch_get(server_url):
    result = fetch_response(server_url + "/path")
    assert result.status_code == 200
    assert result.status.startswith("200")
    assert result.error is None
    echoed = json.loads(result.data)
    assert echoed["method"] == "GET"
    assert echoed["headers"]["accept"] == "*/*"


def test_fetch_post(server_url):
    args = b'{"k": "v"}'
    result = fetch_response(server_url, args)
    echoed = json.loads(result.data)
    assert echoed["method"] == "POST"
    assert echoed["body"] == args.decode()
    assert echoed["headers"]["content-type"] == "application/json"


def test_fetch_unreachable():
    url = _closed_port_url()
    result = fetch_response(url)
    assert isinstance(result, FetchResult)
    assert isinstance(result.error, requests.RequestException)
    assert result.status_code == 0
    assert result.data == b""
    assert result.url == url


def test_http_get_headers(server_url):
    resp = http_get(server_url, {"X-Test": "value"})
    assert resp.json()["headers"]["x-test"] == "value"


def test_http_get_unreachable_raises():
    with pytest.raises(requests.ConnectionError):
        http_get(_closed_port_url(), {})


def test_http_post_body(server_url):
    resp = http_post(server_url, {"Content-Type": "text/plain"}, b"payload")
    echoed = resp.json()
    assert echoed["method"] == "POST"
    assert echoed["body"] == "payload"


def test_http_post_form_round_trip(server_url):
    form = {"b": ["2"], "a": ["1", "3"]}
    resp = http_post_form(server_url, {}, form)
    body = resp.json()["body"]
    assert parse_qs(body) == form
    assert body.index("a=") < body.index("b=")


def test_http_client_session(server_url):
    client = http_client(5)
    resp = client.get(server_url)
    assert resp.status_code == 200
    assert resp.json()["method"] == "GET"