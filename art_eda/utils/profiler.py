"""
Per-report resource measurements.

Every report run is wrapped in `profile_block`, and the numbers end up next to
the result set in the persisted JSON:
- wall-clock duration (perf_counter)
- process CPU percent over the block (psutil)
- peak resident memory, polled by a daemon thread while the block runs

Example:
    from art_eda.utils.profiler import profile_block

    with profile_block("top_museums") as stats:
        TopMuseumsReport().execute(conn)

    stats.as_dict()
"""

from __future__ import annotations

import contextlib
import threading
import time
from dataclasses import dataclass
from typing import Any, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """Measurements of one profiled block; filled in when the block exits."""

    label: str
    start_ts: float = 0.0
    end_ts: float = 0.0
    duration_seconds: float = 0.0
    peak_rss_bytes: Optional[int] = None
    cpu_percent: Optional[float] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "duration_seconds": round(self.duration_seconds, 4),
            "peak_rss_bytes": self.peak_rss_bytes,
            "cpu_percent": None if self.cpu_percent is None else round(self.cpu_percent, 1),
        }


@contextlib.contextmanager
def profile_block(label: str, sample_interval_ms: int = 50) -> Generator[ProfileStats, None, None]:
    """
    Measure the enclosed block.

    Parameters
    ----------
    label : str
        Name stored on the stats, usually the report name.
    sample_interval_ms : int
        Polling period of the RSS sampler.

    Notes
    -----
    A report spends most of its time waiting on Postgres, so peak RSS mostly
    tracks the size of the fetched rows.
    """
    process = psutil.Process()
    stats = ProfileStats(label=label)
    peak = {"rss": process.memory_info().rss}
    done = threading.Event()

    def _poll_rss() -> None:
        while not done.wait(timeout=sample_interval_ms / 1000.0):
            try:
                peak["rss"] = max(peak["rss"], process.memory_info().rss)
            except psutil.Error:
                return

    process.cpu_percent(interval=None)  # first call only primes the counter
    poller = threading.Thread(target=_poll_rss, name=f"rss-{label}", daemon=True)
    poller.start()

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        done.set()
        poller.join(timeout=1.0)
        peak["rss"] = max(peak["rss"], process.memory_info().rss)
        stats.peak_rss_bytes = peak["rss"] or None
        stats.cpu_percent = process.cpu_percent(interval=None)


__all__ = ["ProfileStats", "profile_block"]
