"""Template records, page rendering and the metrics page."""

from __future__ import annotations

import logging
import re
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import jinja2
import psutil

log = logging.getLogger(__name__)

_TIME0 = time.time()
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _text(val: Any) -> str:
    if val is None:
        return "<nil>"
    if isinstance(val, bool):
        return "true" if val else "false"
    return str(val)


def _format_duration(ns: int) -> str:
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < 1_000:
        return f"{sign}{u}ns"
    if u < 1_000_000:
        whole, frac = divmod(u, 1_000)
        digits = f"{frac:03d}".rstrip("0")
        return f"{sign}{whole}{'.' + digits if digits else ''}\u00b5s"
    if u < 1_000_000_000:
        whole, frac = divmod(u, 1_000_000)
        digits = f"{frac:06d}".rstrip("0")
        return f"{sign}{whole}{'.' + digits if digits else ''}ms"
    secs, frac = divmod(u, 1_000_000_000)
    digits = f"{frac:09d}".rstrip("0")
    seconds = f"{secs % 60}{'.' + digits if digits else ''}s"
    hours, minutes = secs // 3600, (secs % 3600) // 60
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{seconds}"


class TmplRecord(dict):
    """A mapping of values handed to a template."""

    def get_string(self, key: str) -> str:
        """Return the text form of a value, or '' if missing."""
        if key in self:
            return _text(self[key])
        return ""

    def get_int(self, key: str) -> int:
        """Return the value as an integer, or 0 if missing or not an integer."""
        if key not in self:
            return 0
        text = _text(self[key])
        if _INT_PATTERN.fullmatch(text):
            return int(text)
        log.error("unable to convert %r to int", text)
        return 0

    def get_error(self) -> str:
        """Return the text form of the 'Error' value, or ''."""
        return self.get_string("Error")

    def get_bytes(self, key: str) -> bytes:
        """Return the bytes stored under a key, or b'' if missing."""
        if key not in self:
            return b""
        data = self[key]
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"value under {key!r} is not bytes: {data!r}")
        return bytes(data)

    def get_elapsed_time(self) -> str:
        """Return the time passed since 'StartTime' (Unix seconds), or ''."""
        if "StartTime" not in self:
            return ""
        start = self["StartTime"]
        if isinstance(start, bool) or not isinstance(start, int):
            raise TypeError(f"StartTime must be an integer, got {start!r}")
        return _format_duration(time.time_ns() - start * 1_000_000_000)


def _environment(directory: str | Path) -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(directory)),
        autoescape=False,
        keep_trailing_newline=True,
    )


@dataclass
class Templates:
    """Renders page templates kept under static/templates; a set html is returned as is."""

    html: str = ""

    def tmpl(self, tdir: str | Path, tfile: str, tmpl_data: Mapping[str, Any]) -> str:
        """Render static/templates/<tfile> under tdir; '' if rendering fails."""
        if self.html:
            return self.html
        template = _environment(Path(tdir) / "static" / "templates").get_template(tfile)
        try:
            return template.render(dict(tmpl_data))
        except jinja2.TemplateError as exc:
            log.error("template.Tmpl %s", exc)
            return ""

    def text_tmpl(self, tdir: str | Path, tfile: str, tmpl_data: Mapping[str, Any]) -> str:
        """Render a plain text template the same way as tmpl."""
        return self.tmpl(tdir, tfile, tmpl_data)


def parse_tmpl(tdir: str | Path, tmpl: str, data: Mapping[str, Any]) -> str:
    """Render the template file tdir/tmpl with the data."""
    return _environment(tdir).get_template(tmpl).render(dict(data))


def tmpl_page(tdir: str | Path, tmpl: str, tmpl_data: Mapping[str, Any] | None) -> str:
    """Render a page template with the given data."""
    return Templates().tmpl(tdir, tmpl, tmpl_data if tmpl_data is not None else TmplRecord())


def make_tmpl(title: str) -> TmplRecord:
    """Return a template record with a title and the current start time."""
    return TmplRecord(Title=title, StartTime=int(time.time()))


def error_page(tdir: str | Path, msg: str, err: Any) -> str:
    """Render the error page with the message."""
    log.error("ERROR: %s", err)
    tmpl = make_tmpl("Error")
    tmpl["Content"] = msg
    return tmpl_page(tdir, "error.tmpl", tmpl)


def header_page(tdir: str | Path) -> str:
    """Render the page header."""
    return tmpl_page(tdir, "header.tmpl", make_tmpl("Header"))


def footer_page(tdir: str | Path) -> str:
    """Render the page footer."""
    return tmpl_page(tdir, "footer.tmpl", make_tmpl("Footer"))


def error_tmpl(tdir: str | Path, msg: str, err: Any) -> str:
    """Render a status page reporting an error."""
    tmpl = make_tmpl("Status")
    tmpl["Content"] = f"<div>{msg}</div>\n<br/><h3>ERROR</h3>{_text(err)}"
    return tmpl_page(tdir, "error.tmpl", tmpl)


def success_tmpl(tdir: str | Path, msg: str) -> str:
    """Render a status page reporting success."""
    tmpl = make_tmpl("Status")
    tmpl["Content"] = f"<h3>SUCCESS</h3><div>{msg}</div>"
    return tmpl_page(tdir, "success.tmpl", tmpl)


def faq_page(tdir: str | Path) -> str:
    """Render the FAQ page."""
    return tmpl_page(tdir, "faq.tmpl", make_tmpl("FAQ"))


def metrics_page(get_requests: int = 0, post_requests: int = 0) -> TmplRecord:
    """Return a template record with host and process metrics."""
    tmpl = make_tmpl("Metrics")
    tmpl["NGo"] = threading.active_count()
    tmpl["Memory"] = psutil.virtual_memory().percent
    try:
        tmpl["Swap"] = psutil.swap_memory().percent
    except (psutil.Error, OSError, RuntimeError):
        tmpl["Swap"] = 0.0
    try:
        load1, load5, load15 = psutil.getloadavg()
    except (OSError, AttributeError):
        load1 = load5 = load15 = 0.0
    tmpl["Load1"], tmpl["Load5"], tmpl["Load15"] = load1, load5, load15
    tmpl["CPU"] = psutil.cpu_percent(interval=0.001, percpu=True)
    try:
        process = psutil.Process()
    except psutil.Error:
        process = None
    if process is not None:
        connections = getattr(process, "net_connections", None) or process.connections
        try:
            tmpl["Connections"] = connections()
        except (psutil.Error, OSError):
            pass
        try:
            tmpl["OpenFiles"] = process.open_files()
        except (psutil.Error, OSError):
            pass
    tmpl["Uptime"] = time.time() - _TIME0
    tmpl["GetRequests"] = get_requests
    tmpl["PostRequests"] = post_requests
    return tmpl