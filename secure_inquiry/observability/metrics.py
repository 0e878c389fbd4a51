"""Prometheus-style metrics collector. Thread-safe, in-memory. No real Prometheus dependency."""

import threading
from typing import Any


class MetricsCollector:
    """
    In-memory Prometheus-style registry. Tracks counters, gauges and latency histograms.
    Thread-safe. Exposes increment, set_gauge, observe_latency, export_metrics.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # Counters: name -> value or name -> {labelled key -> value}
        self._counters: dict[str, float] = {}
        self._counters_by_labels: dict[str, dict[str, float]] = {}
        self._gauges: dict[str, float] = {}
        # Histograms: name -> list of observed values (for latency)
        self._histograms: dict[str, list[float]] = {}

    def increment(
        self,
        name: str,
        value: float = 1.0,
        *,
        category: str | None = None,
    ) -> None:
        """Increment a counter. Optional category for dimensional metrics."""
        with self._lock:
            if category is not None:
                key = f"{name}:category={category}"
                labels = self._counters_by_labels.setdefault(name, {})
                labels[key] = labels.get(key, 0) + value
            else:
                self._counters[name] = self._counters.get(name, 0) + value

    def set_gauge(self, name: str, value: float, *, category: str | None = None) -> None:
        """Set a gauge to an absolute value (e.g. circuit open = 1)."""
        key = name if category is None else f"{name}:category={category}"
        with self._lock:
            self._gauges[key] = value

    def observe_latency(self, name: str, latency_ms: float) -> None:
        """Record a latency observation (histogram-style)."""
        with self._lock:
            self._histograms.setdefault(name, []).append(latency_ms)

    def counter_value(self, name: str, *, category: str | None = None) -> float:
        with self._lock:
            if category is None:
                return self._counters.get(name, 0)
            return self._counters_by_labels.get(name, {}).get(f"{name}:category={category}", 0)

    def export_metrics(self) -> dict[str, Any]:
        """Export all metrics as a dict (simulated Prometheus-style)."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "counters_by_labels": {
                    k: dict(v) for k, v in self._counters_by_labels.items()
                },
                "gauges": dict(self._gauges),
                "histograms": {
                    k: {
                        "count": len(v),
                        "sum": sum(v),
                        "values": list(v),
                    }
                    for k, v in self._histograms.items()
                },
            }

    def reset(self) -> None:
        """Reset all metrics (for tests)."""
        with self._lock:
            self._counters.clear()
            self._counters_by_labels.clear()
            self._gauges.clear()
            self._histograms.clear()
