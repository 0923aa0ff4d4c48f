from typing import Optional
from prometheus_client import Counter, Histogram, CollectorRegistry, generate_latest, CONTENT_TYPE_LATEST

from utils.logger import setup_logger

logger = setup_logger(__name__)


class PrometheusMetrics:
    def __init__(self, enabled: bool = False):
        self.enabled = enabled

        if self.enabled:
            self.registry = CollectorRegistry()

            self.request_count = Counter(
                'market_requests_total',
                'Total number of requests',
                ['method', 'endpoint', 'status'],
                registry=self.registry
            )

            self.request_duration = Histogram(
                'market_request_duration_seconds',
                'Request duration in seconds',
                ['method', 'endpoint'],
                registry=self.registry
            )

            self.tracked_events = Counter(
                'market_tracked_events_total',
                'User history events recorded',
                ['mode', 'action'],
                registry=self.registry
            )

            self.recommendation_count = Counter(
                'market_recommendations_total',
                'Recommendation lists served',
                ['mode', 'strategy'],
                registry=self.registry
            )

            self.recommendation_duration = Histogram(
                'market_recommendation_duration_seconds',
                'Recommendation generation duration in seconds',
                ['mode'],
                registry=self.registry
            )

            self.core_failures = Counter(
                'market_recommendation_failures_total',
                'Storage failures swallowed by the recommendation core',
                ['operation'],
                registry=self.registry
            )

            logger.info("Prometheus metrics initialized successfully")

    def record_request(self, method: str, endpoint: str, status: int, duration_seconds: float):
        if not self.enabled:
            return

        self.request_count.labels(method=method, endpoint=endpoint, status=status).inc()
        self.request_duration.labels(method=method, endpoint=endpoint).observe(duration_seconds)

    def record_tracked_event(self, mode: str, action: str):
        if not self.enabled:
            return

        self.tracked_events.labels(mode=mode, action=action).inc()

    def record_recommendation(self, mode: str, strategy: str, duration_seconds: float):
        if not self.enabled:
            return

        self.recommendation_count.labels(mode=mode, strategy=strategy).inc()
        self.recommendation_duration.labels(mode=mode).observe(duration_seconds)

    def record_failure(self, operation: str):
        if not self.enabled:
            return

        self.core_failures.labels(operation=operation).inc()

    def generate_metrics(self) -> bytes:
        if not self.enabled:
            return b""

        return generate_latest(self.registry)

    def get_content_type(self) -> str:
        if not self.enabled:
            return "text/plain"

        return CONTENT_TYPE_LATEST


prometheus_metrics: Optional[PrometheusMetrics] = None


def init_prometheus_metrics(enabled: bool = False) -> PrometheusMetrics:
    global prometheus_metrics
    prometheus_metrics = PrometheusMetrics(enabled=enabled)
    return prometheus_metrics


def get_prometheus_metrics() -> PrometheusMetrics:
    # disabled instance until the app initialises a real one
    if prometheus_metrics is None:
        return PrometheusMetrics(enabled=False)
    return prometheus_metrics
