"""Synthetic system metrics consumed by `top`, `df` and `free`."""

import logging
import os
import random
import time

from virtual_shell_mcp.models.result import DiskUsage, MemoryUsage, ResourceSnapshot

logger = logging.getLogger(__name__)

FALLBACK_MEMORY_TOTAL_MIB = 8192
FALLBACK_MEMORY_USED_MIB = 4096
DISK_TOTAL_MIB = 102400
DISK_USED_MIB = 25600

_MIB = 1024 * 1024


def _host_memory_mib() -> tuple[int, int] | None:
    """(used, total) in MiB as reported by the host, or None where unsupported."""
    try:
        page_size = os.sysconf("SC_PAGE_SIZE")
        total_pages = os.sysconf("SC_PHYS_PAGES")
        free_pages = os.sysconf("SC_AVPHYS_PAGES")
    except (AttributeError, ValueError, OSError):
        return None
    if page_size <= 0 or total_pages <= 0 or free_pages < 0:
        return None
    total = round(page_size * total_pages / _MIB)
    used = round(page_size * (total_pages - free_pages) / _MIB)
    if total <= 0:
        return None
    return used, total


class ResourceSnapshotGenerator:
    """
    Produces fresh pseudo-random resource snapshots.

    Memory figures come from the host when it reports them; disk figures are
    fixed; CPU and process count are random within plausible bounds.
    """

    def __init__(self, rng: random.Random | None = None, use_host_memory: bool = True) -> None:
        self._rng = rng or random.Random()
        self._use_host_memory = use_host_memory
        self._started = time.monotonic()

    def _memory(self) -> MemoryUsage:
        reported = _host_memory_mib() if self._use_host_memory else None
        used, total = reported or (FALLBACK_MEMORY_USED_MIB, FALLBACK_MEMORY_TOTAL_MIB)
        return MemoryUsage(used=used, total=total, percentage=round(used / total * 100, 1))

    def _uptime(self) -> float:
        try:
            with open("/proc/uptime", encoding="utf-8") as handle:
                return float(handle.read().split()[0])
        except (OSError, ValueError, IndexError):
            return time.monotonic() - self._started

    def snapshot(self) -> ResourceSnapshot:
        return ResourceSnapshot(
            cpu=round(self._rng.random() * 100, 1),
            memory=self._memory(),
            disk=DiskUsage(
                used=DISK_USED_MIB,
                total=DISK_TOTAL_MIB,
                percentage=round(DISK_USED_MIB / DISK_TOTAL_MIB * 100, 1),
            ),
            processes=self._rng.randint(150, 349),
            uptime=self._uptime(),
        )

    def load_average(self) -> tuple[float, float, float]:
        return tuple(round(self._rng.randint(0, 98) / 100, 2) for _ in range(3))

    def randint(self, low: int, high: int) -> int:
        """Exposes the generator's randomness to the text formatters."""
        return self._rng.randint(low, high)
