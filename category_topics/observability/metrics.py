"""
Prometheus metrics for monitoring analysis runs.

Defines metrics for:
- Documents accepted, filtered and dropped before analysis
- Categories analyzed, skipped and failed
- Per-stage latency (vocabulary, tfidf, clustering, topic modeling)

The library never starts an HTTP server on its own; the CLI does when
asked to.
"""

import logging

from prometheus_client import (
    REGISTRY,
    Counter,
    Histogram,
    start_http_server,
)

from category_topics.config.settings import get_settings

logger = logging.getLogger(__name__)

# Buckets for stage latency histograms (in seconds)
LATENCY_BUCKETS = (0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)


class MetricsCollector:
    """
    Prometheus metrics collector for the category analysis pipeline.

    Usage:
        metrics = get_metrics()
        metrics.record_documents("malformed", 3)
        metrics.record_stage_latency("topic_model", 0.42)
    """

    def __init__(self):
        """Initialize Prometheus metrics."""

        self.documents_seen = Counter(
            "category_topics_documents_total",
            "Documents seen by the orchestrator",
            ["status"],  # status: accepted, malformed, duplicate, excluded, empty
        )

        self.categories_processed = Counter(
            "category_topics_categories_total",
            "Categories processed per run",
            ["status"],  # status: complete, partial, skipped, failed
        )

        self.stage_skips = Counter(
            "category_topics_stage_skips_total",
            "Stages skipped for insufficient data",
            ["stage"],
        )

        self.stage_latency = Histogram(
            "category_topics_stage_latency_seconds",
            "Time spent in each pipeline stage for one category",
            ["stage"],
            buckets=LATENCY_BUCKETS,
        )

        self.run_latency = Histogram(
            "category_topics_run_latency_seconds",
            "Wall time of a full orchestrator run",
            buckets=LATENCY_BUCKETS,
        )

        logger.debug("Prometheus metrics initialized")

    def start_server(self, port: int | None = None) -> None:
        """
        Start Prometheus metrics HTTP server.

        Args:
            port: Port to expose metrics on (default from settings)
        """
        settings = get_settings()
        port = port or settings.metrics_port

        start_http_server(port, registry=REGISTRY)
        logger.info(f"Prometheus metrics server started on port {port}")

    def record_documents(self, status: str, count: int = 1) -> None:
        """
        Record documents by admission status.

        Args:
            status: accepted, malformed, duplicate, excluded or empty
            count: Number of documents
        """
        if count > 0:
            self.documents_seen.labels(status=status).inc(count)

    def record_category(self, status: str) -> None:
        """Record the final status of one category."""
        self.categories_processed.labels(status=status).inc()

    def record_skip(self, stage: str) -> None:
        """Record a stage that reported insufficient data."""
        self.stage_skips.labels(stage=stage).inc()

    def record_stage_latency(self, stage: str, latency: float) -> None:
        """
        Record stage latency.

        Args:
            stage: Stage name (vocabulary, tfidf, clustering, topic_model)
            latency: Latency in seconds
        """
        self.stage_latency.labels(stage=stage).observe(latency)

    def record_run_latency(self, latency: float) -> None:
        """Record the wall time of one orchestrator run."""
        self.run_latency.observe(latency)


# Global metrics instance
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
