"""Small HTTP client helpers built on requests."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode

import requests

log = logging.getLogger(__name__)


class _TimeoutSession(requests.Session):
    """A session that applies a default timeout to every request."""

    def __init__(self, timeout: float | None) -> None:
        super().__init__()
        self.timeout = timeout

    def request(self, method, url, **kwargs):  # type: ignore[override]
        if self.timeout is not None:
            kwargs.setdefault("timeout", self.timeout)
        return super().request(method, url, **kwargs)


def http_client(timeout: float = 0) -> requests.Session:
    """Return an HTTP session; a positive timeout (seconds) applies to every call."""
    return _TimeoutSession(timeout if timeout > 0 else None)


_client = http_client()


@dataclass
class FetchResult:
    """The outcome of fetching a URL."""

    url: str
    data: bytes = b""
    error: Exception | None = None
    status: str = ""
    status_code: int = 0


def fetch_response(rurl: str, args: bytes = b"") -> FetchResult:
    """POST the JSON arguments to the URL, or GET it when there are none."""
    result = FetchResult(url=rurl)
    try:
        if args:
            resp = _client.post(rurl, data=args, headers={"Content-Type": "application/json"})
        else:
            resp = _client.get(rurl, headers={"Accept": "*/*"})
    except requests.RequestException as exc:
        log.warning("HTTP Error %s", exc)
        result.error = exc
        return result
    result.status = f"{resp.status_code} {resp.reason}"
    result.status_code = resp.status_code
    result.data = resp.content
    return result


def response(rurl: str, data: bytes) -> bytes:
    """Wrap the URL and data into the space separated JSON-like envelope."""
    return b" ".join([b'{"url":', rurl.encode("utf-8"), b",", b'"data":', data, b"}"])


def read_token(r: str) -> str:
    """Return the file's content without newlines if r names a file, else r."""
    if os.path.exists(r):
        with open(r, encoding="utf-8") as handle:
            return handle.read().replace("\n", "")
    return r


def _send(method: str, rurl: str, headers: Mapping[str, str] | None, body: Any) -> requests.Response:
    resp = requests.request(method, rurl, headers=dict(headers or {}), data=body)
    log.debug("%s %s -> %s", method, rurl, resp.status_code)
    return resp


def http_get(rurl: str, headers: Mapping[str, str] | None = None) -> requests.Response:
    """Perform a GET request with the given headers."""
    return _send("GET", rurl, headers, None)


def http_post(rurl: str, headers: Mapping[str, str] | None, buffer: bytes) -> requests.Response:
    """Perform a POST request with the given headers and body."""
    return _send("POST", rurl, headers, buffer)


def http_post_form(
    rurl: str, headers: Mapping[str, str] | None, form_data: Mapping[str, Any]
) -> requests.Response:
    """POST the form values URL-encoded, with keys in sorted order."""
    items = [(key, form_data[key]) for key in sorted(form_data)]
    return _send("POST", rurl, headers, urlencode(items, doseq=True))