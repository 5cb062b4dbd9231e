import mmap

import pytest

from foxlib.procfs import UNLIMITED, USER_HZ, ProcFS, _collect, procfs_metrics


def _stat_line(utime, stime, vsize, rss):
    fields = ["S"] + ["0"] * 10 + [str(utime), str(stime)] + ["0"] * 7
    fields += [str(vsize), str(rss)] + ["0"] * 5
    return "123 (my proc) " + " ".join(fields) + "\n"


LIMITS = (
    "Limit                     Soft Limit           Hard Limit           Units     \n"
    "Max open files            1024                 4096                 files     \n"
    "Max address space         unlimited            unlimited            bytes     \n"
)

CPU_STAT = (
    "cpu  300 0 120 9000 0 0 0 0 0 0\n"
    "cpu1 200 0 80 4500 0 0 0 0 0 0\n"
    "cpu0 100 0 40 4500 0 0 0 0 0 0\n"
    "intr 1 2 3\n"
)


@pytest.fixture
def proc_root(tmp_path):
    proc = tmp_path / "123"
    (proc / "fd").mkdir(parents=True)
    for name in ("0", "1", "2"):
        (proc / "fd" / name).write_text("")
    (proc / "stat").write_text(_stat_line(150, 50, 4096000, 250))
    (proc / "limits").write_text(LIMITS)
    (tmp_path / "stat").write_text(CPU_STAT)
    return tmp_path


def test_process_metrics_from_fake_tree(proc_root):
    metrics = _collect(proc_root, 123)
    assert metrics.cpu_total == pytest.approx((150 + 50) / USER_HZ)
    assert metrics.vsize == 4096000.0
    assert metrics.rss == 250 * mmap.PAGESIZE
    assert metrics.open_fds == 3.0
    assert metrics.max_fds == 1024.0
    assert metrics.max_vsize == UNLIMITED


def test_cpu_stat_ordered_by_cpu_index(proc_root):
    metrics = _collect(proc_root, 123)
    assert metrics.user_cpus == [100 / USER_HZ, 200 / USER_HZ]
    assert metrics.system_cpus == metrics.user_cpus
    assert metrics.sum_user_cpus == pytest.approx(300 / USER_HZ)
    assert metrics.sum_system_cpus == pytest.approx(120 / USER_HZ)


def test_missing_process_leaves_zeros_but_reads_cpu(proc_root):
    metrics = _collect(proc_root, 999)
    assert (metrics.cpu_total, metrics.vsize, metrics.open_fds) == (0.0, 0.0, 0.0)
    assert len(metrics.user_cpus) == 2


def test_missing_everything_gives_defaults(tmp_path):
    assert _collect(tmp_path, 1) == ProcFS()


def test_live_metrics_are_consistent():
    metrics = procfs_metrics()
    assert metrics.cpu_total >= 0.0
    assert metrics.open_fds >= 0.0
    assert len(metrics.user_cpus) == len(metrics.system_cpus)