"""
Prometheus Metrics Middleware for Hub Catalog
Automatic metrics collection for HTTP requests
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..services.prometheus_metrics import get_metrics_instance

logger = logging.getLogger(__name__)

API_ENDPOINTS = ("/api/plugins", "/api/tags", "/api/issues", "/api/faqs", "/health", "/metrics")


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware to automatically collect Prometheus metrics for HTTP requests
    """

    def __init__(self, app):
        super().__init__(app)
        self.metrics = get_metrics_instance()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and collect metrics"""
        start_time = time.time()
        method = request.method
        endpoint = self._normalize_endpoint(request.url.path)

        try:
            response = await call_next(request)
        except Exception:
            self.metrics.record_http_request(method, endpoint, 500, time.time() - start_time)
            raise

        self.metrics.record_http_request(method, endpoint, response.status_code, time.time() - start_time)
        return response

    def _normalize_endpoint(self, path: str) -> str:
        """Collapse static asset paths so label cardinality stays bounded"""
        normalized = path.rstrip("/") or "/"
        if normalized in API_ENDPOINTS or normalized == "/":
            return normalized
        return "static"
