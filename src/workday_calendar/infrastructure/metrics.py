"""
Application Metrics.

Provides Prometheus-compatible metrics for monitoring.
"""

import time
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional, Union

from flask import Flask, Response, g, request


def _labels_key(labels: Dict[str, str]) -> str:
    """Create a unique key from labels."""
    if not labels:
        return ""
    return ",".join(f'{k}="{v}"' for k, v in sorted(labels.items()))


def _parse_labels(key: str) -> Dict[str, str]:
    if not key:
        return {}
    labels = {}
    for part in key.split(","):
        if "=" in part:
            k, v = part.split("=", 1)
            labels[k] = v.strip('"')
    return labels


@dataclass
class MetricValue:
    """A single metric value with labels."""
    value: float
    labels: Dict[str, str] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


class Counter:
    """A monotonically increasing counter metric."""

    kind = "counter"

    def __init__(self, name: str, description: str) -> None:
        self.name = name
        self.description = description
        self._values: Dict[str, float] = defaultdict(float)
        self._lock = Lock()

    def inc(self, value: float = 1.0, **labels: str) -> None:
        key = _labels_key(labels)
        with self._lock:
            self._values[key] += value

    def get(self, **labels: str) -> float:
        """Current value for a label set."""
        with self._lock:
            return self._values.get(_labels_key(labels), 0.0)

    def collect(self) -> List[MetricValue]:
        with self._lock:
            return [
                MetricValue(value=v, labels=_parse_labels(k))
                for k, v in self._values.items()
            ]


class Gauge(Counter):
    """A gauge metric that can go up and down."""

    kind = "gauge"

    def set(self, value: float, **labels: str) -> None:
        key = _labels_key(labels)
        with self._lock:
            self._values[key] = value

    def dec(self, value: float = 1.0, **labels: str) -> None:
        self.inc(-value, **labels)


class Histogram:
    """A histogram metric for tracking distributions."""

    kind = "histogram"

    DEFAULT_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

    def __init__(
        self,
        name: str,
        description: str,
        buckets: tuple = DEFAULT_BUCKETS,
    ) -> None:
        self.name = name
        self.description = description
        self.buckets = buckets
        self._counts: Dict[str, Dict[float, int]] = defaultdict(lambda: defaultdict(int))
        self._sums: Dict[str, float] = defaultdict(float)
        self._totals: Dict[str, int] = defaultdict(int)
        self._lock = Lock()

    def observe(self, value: float, **labels: str) -> None:
        key = _labels_key(labels)
        with self._lock:
            self._sums[key] += value
            self._totals[key] += 1
            for bucket in self.buckets:
                if value <= bucket:
                    self._counts[key][bucket] += 1

    def collect(self) -> List[MetricValue]:
        """Collect cumulative _bucket series (ending with +Inf), _sum and _count."""
        with self._lock:
            values = []
            for key, total in self._totals.items():
                labels = _parse_labels(key)
                for bucket in self.buckets:
                    values.append(MetricValue(
                        value=float(self._counts[key][bucket]),
                        labels={**labels, "le": str(bucket), "series": "bucket"},
                    ))
                values.append(MetricValue(
                    value=float(total),
                    labels={**labels, "le": "+Inf", "series": "bucket"},
                ))
                values.append(MetricValue(value=self._sums[key], labels={**labels, "series": "sum"}))
                values.append(MetricValue(value=float(total), labels={**labels, "series": "count"}))
            return values


Metric = Union[Counter, Gauge, Histogram]


class MetricsRegistry:
    """Registry for all application metrics."""

    def __init__(self) -> None:
        # HTTP metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
        )
        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "HTTP request latency in seconds",
        )
        self.http_requests_in_progress = Gauge(
            "http_requests_in_progress",
            "Number of HTTP requests currently being processed",
        )

        # Business metrics
        self.workday_increments_total = Counter(
            "workday_increments_total",
            "Total number of workday increments computed",
        )
        self.holidays_registered_total = Counter(
            "holidays_registered_total",
            "Total number of holidays registered",
        )

    @property
    def all_metrics(self) -> List[Metric]:
        return [
            self.http_requests_total,
            self.http_request_duration_seconds,
            self.http_requests_in_progress,
            self.workday_increments_total,
            self.holidays_registered_total,
        ]

    def to_prometheus_format(self) -> str:
        """Export metrics in Prometheus text format."""
        lines = []

        for metric in self.all_metrics:
            lines.append(f"# HELP {metric.name} {metric.description}")
            lines.append(f"# TYPE {metric.name} {metric.kind}")
            for mv in metric.collect():
                labels = dict(mv.labels)
                name = metric.name
                series = labels.pop("series", None)
                if series:
                    name = f"{name}_{series}"
                label_str = ",".join(f'{k}="{v}"' for k, v in labels.items())
                label_str = f"{{{label_str}}}" if label_str else ""
                lines.append(f"{name}{label_str} {mv.value}")

        return "\n".join(lines) + "\n"


# Global metrics registry
_metrics: Optional[MetricsRegistry] = None


def get_metrics() -> MetricsRegistry:
    """Get global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics


def setup_metrics_middleware(app: Flask) -> None:
    """
    Setup Flask middleware for automatic HTTP metrics collection.

    Args:
        app: Flask application instance.
    """
    metrics = get_metrics()

    @app.before_request
    def before_request() -> None:
        g.metrics_start_time = time.time()
        metrics.http_requests_in_progress.inc(
            method=request.method,
            endpoint=request.endpoint or "unknown",
        )

    @app.after_request
    def after_request(response):
        duration = time.time() - getattr(g, "metrics_start_time", time.time())
        endpoint = request.endpoint or "unknown"
        method = request.method

        metrics.http_requests_total.inc(
            method=method,
            endpoint=endpoint,
            status=str(response.status_code),
        )
        metrics.http_request_duration_seconds.observe(
            duration,
            method=method,
            endpoint=endpoint,
        )
        metrics.http_requests_in_progress.dec(
            method=method,
            endpoint=endpoint,
        )

        return response


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint handler."""
    return Response(
        get_metrics().to_prometheus_format(),
        mimetype="text/plain; charset=utf-8",
    )
