"""
Helper for idempotent Prometheus metric registration.

Importing the metrics module twice in one process (uvicorn --reload, or
several test apps) must not fail with a duplicate registration error, so an
already registered collector is returned instead.
"""

from typing import Any, TypeVar

from prometheus_client import REGISTRY, Counter, Gauge, Histogram

MetricT = TypeVar("MetricT", Counter, Gauge, Histogram)


def get_or_create(
    metric_cls: type[MetricT],
    name: str,
    doc: str,
    labels: list[str] | None = None,
    **kwargs: Any,
) -> MetricT:
    """
    Register a metric, or return the collector already registered under name.

    Args:
        metric_cls: Counter, Gauge or Histogram.
        name: Metric name.
        doc: Metric documentation.
        labels: Optional list of label names.
        **kwargs: Extra constructor arguments, e.g. histogram buckets.

    Returns:
        The metric instance.
    """
    try:
        return metric_cls(name, doc, labels or [], **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]
