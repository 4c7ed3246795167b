"""Time-series metrics for the skill service."""
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Dict, List, Optional
import time


class MetricsCollector:
    """Counters, gauges and timings kept in memory for the /metrics endpoint."""

    def __init__(self, service_name: str, max_datapoints: int = 1000):
        self.service_name = service_name
        self.metrics: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.counters: Dict[str, int] = defaultdict(int)
        self.gauges: Dict[str, float] = defaultdict(float)
        self.max_datapoints = max_datapoints

    def increment(self, metric_name: str, value: int = 1, tags: Optional[Dict[str, str]] = None):
        self.counters[metric_name] += value
        self._add_datapoint(metric_name, value, "counter", tags)

    def gauge(self, metric_name: str, value: float, tags: Optional[Dict[str, str]] = None):
        self.gauges[metric_name] = value
        self._add_datapoint(metric_name, value, "gauge", tags)

    def timing(self, metric_name: str, duration_ms: float, tags: Optional[Dict[str, str]] = None):
        self._add_datapoint(metric_name, duration_ms, "timing", tags)

    @contextmanager
    def timer(self, metric_name: str, tags: Optional[Dict[str, str]] = None):
        """Record the wall time of the enclosed block in milliseconds, even on failure."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timing(metric_name, (time.perf_counter() - start) * 1000, tags)

    def _add_datapoint(self, metric_name: str, value: float, metric_type: str,
                       tags: Optional[Dict[str, str]] = None):
        series = self.metrics[metric_name]
        series.append({
            "timestamp": time.time(),
            "value": value,
            "type": metric_type,
            "tags": tags or {},
        })
        if len(series) > self.max_datapoints:
            del series[:-self.max_datapoints]

    def get_metric_data(self, metric_name: str, time_period_minutes: Optional[int] = 60) -> List[Dict[str, Any]]:
        """Datapoints of one metric; ``None`` means the whole retained series."""
        if metric_name not in self.metrics:
            return []
        if time_period_minutes is None:
            return list(self.metrics[metric_name])
        cutoff_time = time.time() - (time_period_minutes * 60)
        return [dp for dp in self.metrics[metric_name] if dp["timestamp"] >= cutoff_time]

    def get_all_metrics(self, time_period_minutes: Optional[int] = 60) -> Dict[str, Any]:
        return {
            "service": self.service_name,
            "timestamp": time.time(),
            "counters": dict(self.counters),
            "gauges": dict(self.gauges),
            "time_series": {
                name: self.get_metric_data(name, time_period_minutes) for name in self.metrics
            },
        }
