"""General helpers: strings, hashing, paths, time stamps, SQL and colours."""

from __future__ import annotations

import hashlib
import json
import logging
import math
import os
import random
import re
import socket
import string
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterable

log = logging.getLogger(__name__)

_RANDOM_CHARS = "abcdfghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ" + string.digits
_RANDOM_LENGTH = 16
_SIZE_BASE = 1000.0
_SIZE_UNITS = ("", "KB", "MB", "GB", "TB", "PB")
_DATE_LAYOUT = "%Y%m%d"
_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
_BIND_PATTERN = re.compile(r":[a-zA-Z_0-9]+")
_OCTAL_PATTERN = re.compile(r"[+-]?0[0-7_]+")

BLACK = "0;30m"
RED = "0;31m"
GREEN = "0;32m"
BROWN = "0;33m"
BLUE = "0;34m"
PURPLE = "0;35m"
CYAN = "0;36m"
LIGHT_PURPLE = "1;35m"
LIGHT_CYAN = "1;36m"
BOLD = "\x1b[1m"
PLAIN = "\x1b[0m"


def _go_float(f: float) -> str:
    """Format a float the way a default value formatter shows it (shortest %g)."""
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"
    if f == 0:
        return "-0" if math.copysign(1.0, f) < 0 else "0"
    sign, digits, exponent = Decimal(repr(f)).normalize().as_tuple()
    ds = "".join(str(d) for d in digits)
    nd = len(ds)
    dp = nd + exponent
    exp = dp - 1
    prefix = "-" if sign else ""
    if exp < -4 or exp >= 6:
        mantissa = ds[0] + ("." + ds[1:] if nd > 1 else "")
        esign = "-" if exp < 0 else "+"
        return f"{prefix}{mantissa}e{esign}{abs(exp):02d}"
    if dp <= 0:
        return f"{prefix}0.{'0' * -dp}{ds}"
    if dp >= nd:
        return f"{prefix}{ds}{'0' * (dp - nd)}"
    return f"{prefix}{ds[:dp]}.{ds[dp:]}"


def _go_str(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, float):
        return _go_float(val)
    if val is None:
        return "<nil>"
    return str(val)


def random_string() -> str:
    """Return a random 16 character alphanumeric string."""
    return "".join(random.choice(_RANDOM_CHARS) for _ in range(_RANDOM_LENGTH))


def record_size(v: Any) -> int:
    """Return the size in bytes of the compact JSON form of the object."""
    return len(json.dumps(v, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


def base_path(base: str, api: str) -> str:
    """Return the end-point path of an API under the given base."""
    if not base:
        return api
    if api.startswith("/"):
        api = api[1:]
    if base.startswith("/"):
        return f"{base}/{api}"
    return f"/{base}/{api}"


def get_hash(data: bytes) -> str:
    """Return the hex SHA-256 digest of the data."""
    return hashlib.sha256(data).hexdigest()


def file_name(fname: str) -> str:
    """Return the last path segment of a name, cut at its first dot."""
    return fname.split("/")[-1].split(".")[0]


def _walk(path: str, out: list[str]) -> None:
    out.append(path)
    if not os.path.isdir(path) or os.path.islink(path):
        return
    try:
        names = sorted(os.listdir(path))
    except OSError as exc:
        log.warning("unable to access %s, error %s", path, exc)
        return
    for name in names:
        _walk(os.path.join(path, name), out)


def find_files(root: str) -> list[str]:
    """Return the root and every path below it, in lexical walk order."""
    if not root:
        return []
    if not os.path.lexists(root):
        log.warning("unable to access %s", root)
        return [root]
    files: list[str] = []
    _walk(root, files)
    return files


def _parse_int_auto(text: str) -> int:
    if text != text.strip():
        raise ValueError(f"invalid integer {text!r}")
    try:
        return int(text, 0)
    except ValueError:
        if _OCTAL_PATTERN.fullmatch(text):
            return int(text.replace("_", ""), 8)
        raise


def time_format(ts: Any) -> str:
    """Return a Unix time stamp as a UTC 'YYYY-MM-DD HH:MM:SS' string."""
    if isinstance(ts, bool):
        return _go_str(ts)
    if isinstance(ts, int):
        seconds = ts
    elif isinstance(ts, float):
        if not math.isfinite(ts):
            return _go_str(ts)
        seconds = int(ts)
    elif isinstance(ts, str):
        try:
            seconds = _parse_int_auto(ts)
        except ValueError:
            return ts
    else:
        return _go_str(ts)
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(_TIME_LAYOUT)


def size_format(val: Any) -> str:
    """Return the value followed by its size in powers of ten, e.g. '1500 (1.5KB)'."""
    if isinstance(val, bool):
        return _go_str(val)
    if isinstance(val, (int, float)):
        size = float(val)
    elif isinstance(val, str):
        if val != val.strip():
            return val
        try:
            size = float(val)
        except ValueError:
            return val
    else:
        return _go_str(val)
    shown = _go_str(val)
    for unit in _SIZE_UNITS:
        if size < _SIZE_BASE:
            return f"{shown} ({size:3.1f}{unit})"
        size /= _SIZE_BASE
    raise ValueError(f"size {shown} is beyond the largest known unit")


def get_env(key: str) -> str:
    """Return an environment value up to its first '=', or an empty string."""
    value = os.environ.get(key)
    if value is None:
        return ""
    return value.split("=")[0]


def full_path(fname: str) -> str:
    """Return the name joined to the working directory when it is relative."""
    if not fname.startswith("/"):
        try:
            return os.path.join(os.getcwd(), fname)
        except OSError:
            return fname
    return fname


def domain() -> str:
    """Return the last two labels of the host name, or 'localhost'."""
    try:
        hostname = socket.gethostname()
    except OSError as exc:
        log.error("unable to get hostname, error: %s", exc)
        hostname = ""
    result = "localhost"
    if "." in hostname:
        result = ".".join(hostname.split(".")[-2:])
    log.info("Domain %s", result)
    return result


def padded_key(key: str, max_len: int) -> str:
    """Pad the key with spaces up to max_len characters."""
    return key.ljust(max_len)


def expire(value: int) -> int:
    """Return an absolute time stamp: a 10 digit value as is, else now plus value."""
    if len(str(value)) == 10:
        return value
    return int(time.time()) + value


def unix_time(ts: str) -> int:
    """Convert a 10 digit time stamp or a YYYYMMDD date into Unix seconds."""
    if len(ts) == 10:
        try:
            return int(ts)
        except ValueError:
            return 0
    try:
        parsed = datetime.strptime(ts, _DATE_LAYOUT)
    except ValueError as exc:
        log.warning("unable to parse, error %s", exc)
        return 0
    return int(parsed.replace(tzinfo=timezone.utc).timestamp())


def unix_to_time(ts: int) -> str:
    """Return the UTC date of a Unix time stamp as YYYYMMDD."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime(_DATE_LAYOUT)


def replace_binds(stm: str) -> str:
    """Replace named ':bind' placeholders with '?'."""
    return _BIND_PATTERN.sub("?", stm)


def print_sql(stm: str, args: Iterable[Any], msg: str) -> None:
    """Log an SQL statement with its bound values."""
    log.info("%s", msg)
    log.info("### SQL statement ###\n%s\n", stm)
    values = "".join(f"\t'{_go_str(v)}'\n" for v in args)
    log.info("### SQL values ###\n%s", values)


def color(col: str, text: str) -> str:
    """Wrap text in ANSI bold and colour escape codes."""
    return BOLD + "\x1b[" + col + text + PLAIN


def color_url(rurl: str) -> str:
    """Return the URL coloured blue."""
    return color(BLUE, rurl)


def _bracketed(args: tuple) -> str:
    return "[" + " ".join(_go_str(a) for a in args) + "]"


def error(*args: Any) -> None:
    """Print a coloured server error message."""
    print(color(RED, "Server ERROR"), _bracketed(args))


def warning(*args: Any) -> None:
    """Print a coloured server warning message."""
    print(color(BROWN, "Server WARNING"), _bracketed(args))