"""Observability layer - logging and metrics."""

from category_topics.observability.logging import setup_logging
from category_topics.observability.metrics import MetricsCollector, get_metrics

__all__ = ["setup_logging", "MetricsCollector", "get_metrics"]
