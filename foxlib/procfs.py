"""Process and CPU metrics read from the /proc file system."""

from __future__ import annotations

import logging
import mmap
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)

USER_HZ = 100
UNLIMITED = float(2**64 - 1)
_COLUMNS = re.compile(r"\s{2,}")


@dataclass
class ProcFS:
    """Resource metrics of the current process and the host's CPUs."""

    cpu_total: float = 0.0
    vsize: float = 0.0
    rss: float = 0.0
    open_fds: float = 0.0
    max_fds: float = 0.0
    max_vsize: float = 0.0
    user_cpus: list[float] = field(default_factory=list)
    system_cpus: list[float] = field(default_factory=list)
    sum_user_cpus: float = 0.0
    sum_system_cpus: float = 0.0


def _read_process_stat(path: Path) -> tuple[float, float, float]:
    text = path.read_text()
    fields = text[text.rindex(")") + 2 :].split()
    utime, stime = int(fields[11]), int(fields[12])
    vsize, rss_pages = int(fields[20]), int(fields[21])
    return (utime + stime) / USER_HZ, float(vsize), float(rss_pages * mmap.PAGESIZE)


def _read_limits(path: Path) -> dict[str, float]:
    limits: dict[str, float] = {}
    for line in path.read_text().splitlines()[1:]:
        cols = _COLUMNS.split(line.strip())
        if len(cols) < 2:
            continue
        limits[cols[0]] = UNLIMITED if cols[1] == "unlimited" else float(int(cols[1]))
    return limits


def _read_cpu_stat(path: Path) -> tuple[float, float, list[tuple[int, float, float]]]:
    total_user = total_system = 0.0
    per_cpu: list[tuple[int, float, float]] = []
    for line in path.read_text().splitlines():
        parts = line.split()
        if not parts or not parts[0].startswith("cpu"):
            continue
        user = int(parts[1]) / USER_HZ
        system = int(parts[3]) / USER_HZ
        if parts[0] == "cpu":
            total_user, total_system = user, system
        else:
            per_cpu.append((int(parts[0][3:]), user, system))
    per_cpu.sort()
    return total_user, total_system, per_cpu


def _collect(root: str | os.PathLike, pid: int) -> ProcFS:
    root = Path(root)
    metrics = ProcFS()
    proc = root / str(pid)
    if proc.is_dir():
        try:
            metrics.cpu_total, metrics.vsize, metrics.rss = _read_process_stat(proc / "stat")
        except (OSError, ValueError, IndexError) as exc:
            log.debug("unable to read %s: %s", proc / "stat", exc)
        try:
            metrics.open_fds = float(len(os.listdir(proc / "fd")))
        except OSError as exc:
            log.debug("unable to list %s: %s", proc / "fd", exc)
        try:
            limits = _read_limits(proc / "limits")
        except (OSError, ValueError) as exc:
            log.debug("unable to read %s: %s", proc / "limits", exc)
        else:
            metrics.max_fds = limits.get("Max open files", 0.0)
            metrics.max_vsize = limits.get("Max address space", 0.0)
    else:
        log.warning("unable to get procfs info for %s", proc)

    try:
        total_user, total_system, per_cpu = _read_cpu_stat(root / "stat")
    except (OSError, ValueError, IndexError) as exc:
        log.warning("unable to get %s info: %s", root / "stat", exc)
    else:
        metrics.user_cpus = [user for _, user, _ in per_cpu]
        # the per-CPU system list repeats the user times, as the metrics always have
        metrics.system_cpus = [user for _, user, _ in per_cpu]
        metrics.sum_user_cpus = total_user
        metrics.sum_system_cpus = total_system
    return metrics


def procfs_metrics() -> ProcFS:
    """Return the metrics of the running process; zeros where /proc is unavailable."""
    return _collect("/proc", os.getpid())