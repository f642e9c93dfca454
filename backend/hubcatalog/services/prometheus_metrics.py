"""
Prometheus Metrics Collection for Hub Catalog
HTTP traffic and catalog write-path counters
"""

import logging
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

logger = logging.getLogger(__name__)

# Create registry for metrics
registry = CollectorRegistry()

# HTTP Metrics
http_requests_total = Counter(
    "hubcatalog_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=registry,
)

http_request_duration_seconds = Histogram(
    "hubcatalog_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
    registry=registry,
)

# Catalog write-path metrics
plugin_registrations_total = Counter(
    "hubcatalog_plugin_registrations_total",
    "Plugin registration attempts by outcome",
    ["outcome"],
    registry=registry,
)

tags_created_total = Counter(
    "hubcatalog_tags_created_total",
    "Tags added to the shared vocabulary",
    registry=registry,
)

catalog_inserts_total = Counter(
    "hubcatalog_catalog_inserts_total",
    "Rows inserted per catalog table",
    ["table"],
    registry=registry,
)


class PrometheusMetrics:
    """Thin recording facade over the module-level collectors"""

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float) -> None:
        http_requests_total.labels(method=method, endpoint=endpoint, status=str(status_code)).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    def record_registration(self, outcome: str) -> None:
        """outcome: success, validation_error, persistence_error, resolution_inconsistency"""
        plugin_registrations_total.labels(outcome=outcome).inc()

    def record_tag_created(self) -> None:
        tags_created_total.inc()

    def record_insert(self, table: str) -> None:
        catalog_inserts_total.labels(table=table).inc()

    def get_metrics(self) -> bytes:
        """Text exposition of every collector in the catalog registry"""
        return generate_latest(registry)


_metrics_instance: Optional[PrometheusMetrics] = None


def get_metrics_instance() -> PrometheusMetrics:
    """Get metrics facade (singleton)"""
    global _metrics_instance
    if _metrics_instance is None:
        _metrics_instance = PrometheusMetrics()
        logger.debug("Created PrometheusMetrics instance")
    return _metrics_instance
