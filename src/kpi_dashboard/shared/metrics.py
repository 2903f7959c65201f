"""Prometheus metrics for the dashboard API and corpus generation."""
import time

from prometheus_client import REGISTRY, Counter, Gauge, Histogram


def _find_metric(name: str):
    # Counters store their name without the _total suffix
    names = {name, name.removesuffix("_total")}
    for collector in list(REGISTRY._collector_to_names.keys()):
        if getattr(collector, "_name", None) in names:
            return collector
    return None


def _get_or_create_metric(metric_class, name: str, doc: str, labelnames=None, **kwargs):
    """Get existing metric or create new one to avoid duplication errors on reload."""
    existing = _find_metric(name)
    if existing is not None:
        return existing
    try:
        if labelnames is not None:
            kwargs["labelnames"] = labelnames
        return metric_class(name, doc, registry=REGISTRY, **kwargs)
    except ValueError as e:
        if "Duplicated timeseries" in str(e):
            existing = _find_metric(name)
            if existing is not None:
                return existing
        raise


# Request metrics
api_requests_total = _get_or_create_metric(
    Counter,
    "dashboard_api_requests_total",
    "Total number of API requests handled",
    ["endpoint", "status_code"],
)

api_errors_total = _get_or_create_metric(
    Counter,
    "dashboard_api_errors_total",
    "Total number of API requests that failed with an internal error",
    ["endpoint", "error_type"],
)

# Computation metrics
dashboard_compute_duration_seconds = _get_or_create_metric(
    Histogram,
    "dashboard_compute_duration_seconds",
    "Time taken to filter and aggregate a dashboard payload",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

# Corpus metrics
corpus_build_duration_seconds = _get_or_create_metric(
    Histogram,
    "dashboard_corpus_build_duration_seconds",
    "Time taken to generate the synthetic order corpus",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

corpus_orders = _get_or_create_metric(
    Gauge, "dashboard_corpus_orders", "Number of orders in the cached corpus"
)

# Export metrics
csv_exports_total = _get_or_create_metric(
    Counter, "dashboard_csv_exports_total", "Total number of CSV exports served"
)


class MetricsCollector:
    """Helper class for collecting and updating metrics."""

    def record_request(self, endpoint: str, status_code: int):
        """Record a handled request."""
        api_requests_total.labels(endpoint=endpoint, status_code=str(status_code)).inc()

    def record_error(self, endpoint: str, error_type: str):
        """Record an internal error surfaced as a 500."""
        api_errors_total.labels(endpoint=endpoint, error_type=error_type).inc()

    def record_dashboard_compute(self, duration: float):
        """Record dashboard aggregation time."""
        dashboard_compute_duration_seconds.observe(duration)

    def record_corpus_built(self, order_count: int, duration: float):
        """Record a corpus build."""
        corpus_build_duration_seconds.observe(duration)
        corpus_orders.set(order_count)

    def record_csv_export(self):
        """Record a CSV export."""
        csv_exports_total.inc()


class Timer:
    """Context manager measuring elapsed wall time in seconds."""

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        self.elapsed = 0.0
        return self

    def __exit__(self, *exc_info) -> None:
        self.elapsed = time.perf_counter() - self.start


# Global metrics collector instance
metrics_collector = MetricsCollector()
