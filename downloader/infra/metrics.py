from __future__ import annotations
import time
from collections import defaultdict
from threading import Lock
from typing import Dict
from dataclasses import dataclass
from downloader.infra.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Counter:
    """Simple counter metric"""
    value: int = 0

    def inc(self, amount: int = 1) -> None:
        self.value += amount


@dataclass
class Histogram:
    """Track distribution of values (e.g., upstream latency) as running totals"""
    count: int = 0
    total: float = 0.0
    low: float | None = None
    high: float | None = None

    def observe(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.low = value if self.low is None else min(self.low, value)
        self.high = value if self.high is None else max(self.high, value)

    def get_stats(self) -> dict:
        if not self.count:
            return {"count": 0, "min": 0, "max": 0, "avg": 0}

        return {
            "count": self.count,
            "min": self.low,
            "max": self.high,
            "avg": self.total / self.count,
        }


class MetricsCollector:
    """
    Lightweight in-process metrics.
    The host bot decides whether and how to export them.
    """

    def __init__(self):
        self._counters: Dict[str, Counter] = defaultdict(Counter)
        self._histograms: Dict[str, Histogram] = defaultdict(Histogram)
        self._lock = Lock()

    def inc_counter(self, name: str, amount: int = 1, labels: dict | None = None) -> None:
        """Increment a counter metric"""
        key = self._make_key(name, labels)
        with self._lock:
            self._counters[key].inc(amount)

    def observe_histogram(self, name: str, value: float, labels: dict | None = None) -> None:
        """Add a value to histogram"""
        key = self._make_key(name, labels)
        with self._lock:
            self._histograms[key].observe(value)

    def get_metrics(self) -> dict:
        """Get all current metrics"""
        with self._lock:
            counters = {k: v.value for k, v in self._counters.items()}
            histograms = {k: v.get_stats() for k, v in self._histograms.items()}

        return {
            "counters": counters,
            "histograms": histograms,
        }

    def reset(self) -> None:
        """Reset all metrics"""
        with self._lock:
            self._counters.clear()
            self._histograms.clear()
        logger.info("Metrics reset")

    @staticmethod
    def _make_key(name: str, labels: dict | None) -> str:
        """Create a metric key from name and labels"""
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


_metrics = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector"""
    return _metrics


def inc_counter(name: str, amount: int = 1, **labels) -> None:
    """Increment a counter metric"""
    _metrics.inc_counter(name, amount, labels or None)


def observe_histogram(name: str, value: float, **labels) -> None:
    """Record a histogram value"""
    _metrics.observe_histogram(name, value, labels or None)


class Timer:
    """Context manager to time operations"""

    def __init__(self, metric_name: str, **labels):
        self.metric_name = metric_name
        self.labels = labels
        self.start_time: float | None = None

    def __enter__(self):
        self.start_time = time.monotonic()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            duration = time.monotonic() - self.start_time
            observe_histogram(self.metric_name, duration, **self.labels)


class DownloaderMetrics:
    """Downloader-level metrics tracking"""

    @staticmethod
    def command_executed(platform: str) -> None:
        inc_counter("downloader_commands_total", platform=platform)

    @staticmethod
    def command_failed(platform: str, error: str) -> None:
        inc_counter("downloader_command_failures_total", platform=platform, error=error)

    @staticmethod
    def upstream_error(endpoint: str, status: int) -> None:
        inc_counter("downloader_upstream_errors_total", endpoint=endpoint, status=status)

    @staticmethod
    def media_relayed(kind: str) -> None:
        inc_counter("downloader_media_relayed_total", kind=kind)

    @staticmethod
    def relay_fallback(kind: str) -> None:
        inc_counter("downloader_relay_fallbacks_total", kind=kind)

    @staticmethod
    def track_upstream_time(endpoint: str) -> Timer:
        return Timer("downloader_upstream_seconds", endpoint=endpoint)
