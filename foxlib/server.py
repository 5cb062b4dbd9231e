"""Web server set-up: configuration, routing, common handlers and start-up."""

from __future__ import annotations

import functools
import json
import logging
import os
import socket
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import flask

from foxlib.middleware import RateLimiter, RequestCounters, install_middleware, parse_rate

log = logging.getLogger(__name__)

DEFAULT_LIMITER_PERIOD = "100-S"
_METHODS = ("GET", "POST", "PUT", "DELETE")
_SHORT_FORMAT = "%(asctime)s %(filename)s:%(lineno)d: %(message)s"
_LONG_FORMAT = "%(asctime)s %(pathname)s:%(lineno)d: %(message)s"


@dataclass
class WebServer:
    """Configuration of a web server."""

    port: int = 0
    base: str = ""
    verbose: int = 0
    server_key: str = ""
    server_crt: str = ""
    log_file: str = ""
    log_long_file: bool = False
    limiter_period: str = ""
    limiter_header: str = ""
    metrics_prefix: str = ""
    etag: str = ""
    cache_control: str = ""
    mode: str = ""
    production: bool = False


@dataclass
class Route:
    """A route: method, path (':name' and '*rest' parameters), handler and access."""

    method: str
    path: str
    handler: Callable[..., Any]
    scope: str = ""
    authorized: bool = False


class _DatedFileHandler(logging.Handler):
    """Writes log records to a file whose name is a strftime pattern."""

    def __init__(self, pattern: str) -> None:
        super().__init__()
        self.pattern = pattern
        self._name = ""
        self._stream = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            name = time.strftime(self.pattern)
            if name != self._name:
                if self._stream is not None:
                    self._stream.close()
                self._stream = open(name, "a", encoding="utf-8")
                self._name = name
            self._stream.write(self.format(record) + "\n")
            self._stream.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        super().close()


def log_name(srv_log_name: str) -> str:
    """Return the dated log file pattern for the host or pod."""
    try:
        hostname = socket.gethostname()
    except OSError as exc:
        log.warning("unable to get hostname %s", exc)
        hostname = ""
    pod = os.environ.get("MY_POD_NAME", "")
    if pod:
        hostname = pod
    if hostname:
        return f"{srv_log_name}_{hostname}_%Y%m%d"
    return f"{srv_log_name}_%Y%m%d"


def _setup_logging(web_server: WebServer) -> None:
    fmt = _LONG_FORMAT if web_server.log_long_file else _SHORT_FORMAT
    root = logging.getLogger()
    if web_server.log_file:
        handler = _DatedFileHandler(log_name(web_server.log_file))
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)
    elif not root.handlers:
        logging.basicConfig(format=fmt)


def init_server(web_server: WebServer) -> RateLimiter:
    """Set up logging and return the rate limiter the configuration asks for."""
    _setup_logging(web_server)
    period = web_server.limiter_period or DEFAULT_LIMITER_PERIOD
    log.info("limiter rate='%s'", period)
    limit, seconds = parse_rate(period)
    log.info("webServer configuration:\n%s", web_server)
    return RateLimiter(limit, seconds, web_server.limiter_header)


def _flask_path(path: str) -> str:
    parts = []
    for segment in path.split("/"):
        if segment.startswith(":"):
            segment = f"<{segment[1:]}>"
        elif segment.startswith("*"):
            segment = f"<path:{segment[1:]}>"
        parts.append(segment)
    return "/".join(parts)


def _apply_mode(app: flask.Flask, web_server: WebServer) -> None:
    if web_server.mode == "release":
        app.debug = False
    elif web_server.mode == "debug":
        app.debug = True
    elif web_server.mode == "test":
        app.testing = True
    if web_server.production:
        app.debug = False
        app.testing = False


def _install_logger(app: flask.Flask) -> None:
    @app.before_request
    def _start_timer():
        flask.g.foxlib_start = time.perf_counter()

    @app.after_request
    def _log_request(response):
        request = flask.request
        duration = time.perf_counter() - flask.g.get("foxlib_start", time.perf_counter())
        client = request.access_route[0] if request.access_route else request.remote_addr
        log.info(
            "%s %d %s %s [client: %s] [bytes in: %s | out: %s] [req: %.6f sec]",
            request.environ.get("SERVER_PROTOCOL", ""),
            response.status_code,
            request.method,
            request.path,
            client,
            request.content_length or 0,
            response.calculate_content_length() or 0,
            duration,
        )
        return response


def _guarded(handler: Callable[..., Any], scope: str, authorizer: Callable[[str], Any]):
    @functools.wraps(handler)
    def view(*args, **kwargs):
        denied = authorizer(scope)
        if denied is not None:
            return denied
        return handler(*args, **kwargs)

    return view


def _register(app: flask.Flask, route: Route, view: Callable[..., Any]) -> None:
    if route.method not in _METHODS:
        return
    log.info(
        "method %s path %s auth %s scope '%s'",
        route.method, route.path, route.authorized, route.scope,
    )
    app.add_url_rule(
        _flask_path(route.path),
        endpoint=f"{route.method} {route.path}",
        view_func=view,
        methods=[route.method],
    )


def _metrics_text(prefix: str, counters: RequestCounters, uptime: float) -> str:
    entries = [
        ("get_requests", "reports total number of HTTP GET requests", "counter", counters.get),
        ("post_requests", "reports total number of HTTP POST requests", "counter", counters.post),
        ("put_requests", "reports total number of HTTP PUT requests", "counter", counters.put),
        ("uptime", "reports server uptime in seconds", "counter", uptime),
    ]
    lines = []
    for name, help_text, kind, value in entries:
        lines.append(f"# HELP {prefix}_{name} {help_text}")
        lines.append(f"# TYPE {prefix}_{name} {kind}")
        lines.append(f"{prefix}_{name} {value}")
    return "\n".join(lines) + "\n"


def router(
    routes: list[Route],
    static: str,
    web_server: WebServer,
    authorizer: Callable[[str], Any] | None = None,
) -> flask.Flask:
    """Build the application; authorizer(scope) returns None to allow or a response to deny."""
    limiter = init_server(web_server)
    start_time = time.time()
    counters = RequestCounters()

    app = flask.Flask(__name__, static_folder=None)
    _apply_mode(app, web_server)
    app.secret_key = "secret"
    app.config["SESSION_COOKIE_NAME"] = "server_session"
    app.extensions["foxlib.counters"] = counters
    _install_logger(app)

    api_routes: list[dict[str, str]] = []

    def apis():
        return flask.jsonify(api_routes)

    def qlkeys():
        fname = f"{static}/ql_keys.json"
        try:
            keys = json.loads(Path(fname).read_text(encoding="utf-8"))
            if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
                raise ValueError(f"{fname} must hold a JSON list of strings")
        except (OSError, ValueError) as exc:
            log.error("ERROR %s", exc)
            return flask.jsonify(None), 500
        return flask.jsonify(keys)

    def metrics():
        text = _metrics_text(web_server.metrics_prefix, counters, time.time() - start_time)
        return flask.Response(text, mimetype="text/plain")

    app.add_url_rule("/apis", "apis", apis, methods=["GET"])
    app.add_url_rule("/qlkeys", "qlkeys", qlkeys, methods=["GET"])
    app.add_url_rule("/metrics", "metrics", metrics, methods=["GET"])

    read_routes = [r for r in routes if r.authorized and r.scope != "write"]
    write_routes = [r for r in routes if r.authorized and r.scope == "write"]
    if (read_routes or write_routes) and authorizer is None:
        raise ValueError("authorized routes need an authorizer")

    for route in routes:
        if not route.authorized:
            _register(app, route, route.handler)
    for route in read_routes:
        _register(app, route, _guarded(route.handler, "read", authorizer))
    for route in write_routes:
        _register(app, route, _guarded(route.handler, "write", authorizer))

    if static and os.path.isdir(static):
        for entry in sorted(os.scandir(static), key=lambda e: e.name):
            if not entry.is_dir():
                continue
            directory = os.path.abspath(entry.path)

            def serve(filename, _directory=directory):
                return flask.send_from_directory(_directory, filename)

            app.add_url_rule(
                f"{web_server.base}/{entry.name}/<path:filename>",
                endpoint=f"static {entry.name}",
                view_func=serve,
            )

    for rule in app.url_map.iter_rules():
        for method in sorted((rule.methods or set()) - {"HEAD", "OPTIONS"}):
            api_routes.append({"method": method, "path": rule.rule})

    install_middleware(app, counters, limiter, web_server.etag, web_server.cache_control)
    return app


def start_server(app: flask.Flask, web_server: WebServer) -> None:
    """Run the application over HTTPS when a key is configured, else over HTTP."""
    ssl_context = None
    if web_server.server_key:
        ssl_context = (web_server.server_crt, web_server.server_key)
        log.info("Start HTTPs server on port :%d", web_server.port)
    else:
        log.info("Start HTTP server on port :%d", web_server.port)
    app.run(host="0.0.0.0", port=web_server.port, ssl_context=ssl_context)