"""Request counting, rate limiting, ETag and response header middleware."""

from __future__ import annotations

import hashlib
import logging
import platform
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

import flask

log = logging.getLogger(__name__)

_PERIODS = {"S": 1, "M": 60, "H": 3600, "D": 86400}
_COUNTED = {"GET": "get", "POST": "post", "PUT": "put", "DELETE": "delete"}


@dataclass
class RequestCounters:
    """Totals of GET, POST, PUT and DELETE requests seen by a server."""

    get: int = 0
    post: int = 0
    put: int = 0
    delete: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, method: str) -> None:
        """Count one request of the given method; other methods are ignored."""
        name = _COUNTED.get(method)
        if name is None:
            return
        with self._lock:
            setattr(self, name, getattr(self, name) + 1)


@dataclass
class RateLimiter:
    """A fixed-window limiter allowing `limit` requests per `period` seconds per key."""

    limit: int
    period: float
    client_ip_header: str = ""
    clock: Callable[[], float] = time.monotonic
    _windows: dict = field(default_factory=dict, repr=False, compare=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def allow(self, key: str) -> bool:
        """Count a request for the key and return whether it is within the limit."""
        now = self.clock()
        with self._lock:
            start, count = self._windows.get(key, (now, 0))
            if now - start >= self.period:
                start, count = now, 0
            count += 1
            self._windows[key] = (start, count)
            return count <= self.limit


def parse_rate(period: str) -> tuple[int, int]:
    """Parse a '<limit>-<S|M|H|D>' rate into (limit, period in seconds)."""
    parts = period.split("-")
    if len(parts) != 2:
        raise ValueError(f"incorrect rate format '{period}'")
    limit_text, unit = parts
    seconds = _PERIODS.get(unit.strip().upper())
    if seconds is None:
        raise ValueError(f"incorrect rate period '{unit}' in '{period}'")
    try:
        limit = int(limit_text.strip())
    except ValueError as exc:
        raise ValueError(f"incorrect rate limit '{limit_text}' in '{period}'") from exc
    return limit, seconds


def etag(text: str, weak: bool = False) -> str:
    """Return an ETag made of the text's byte length and SHA-1 digest."""
    data = text.encode("utf-8")
    tag = f'"{len(data)}-{hashlib.sha1(data).hexdigest()}"'
    if weak:
        tag = "W/" + tag
    return tag


def _server_header() -> str:
    # the date keeps the year-day-month layout servers have always announced
    stamp = datetime.now().strftime("%Y-%d-%m")
    return f"foxden (python{platform.python_version()} {stamp})"


def install_middleware(
    app: flask.Flask,
    counters: RequestCounters | None,
    limiter: RateLimiter | None,
    etag_value: str = "",
    cache_control: str = "",
) -> None:
    """Add request counting, rate limiting and Server/ETag headers to the app."""
    tag = etag(etag_value) if etag_value and cache_control else ""

    @app.before_request
    def _count_request():
        if counters is not None:
            counters.record(flask.request.method)
        return None

    @app.before_request
    def _limit_request():
        if limiter is None:
            return None
        request = flask.request
        key = ""
        if limiter.client_ip_header:
            key = request.headers.get(limiter.client_ip_header, "")
        if not key:
            key = request.remote_addr or ""
        if not limiter.allow(key):
            response = flask.Response("Limit exceeded", status=429)
            response.headers["X-RateLimit-Limit"] = str(limiter.limit)
            return response
        return None

    @app.before_request
    def _check_not_modified():
        request = flask.request
        if tag and request.method == "GET":
            match = request.headers.get("If-None-Match", "")
            if match and tag in match:
                return flask.Response(status=304)
        return None

    @app.after_request
    def _add_headers(response):
        response.headers.add("Server", _server_header())
        if tag and flask.request.method == "GET":
            response.headers["Etag"] = tag
            response.headers["Cache-Control"] = cache_control
        return response