"""Prometheus metrics configuration"""

from prometheus_client import Counter, Histogram, Info
from prometheus_fastapi_instrumentator import Instrumentator
from typing import Callable
import time
from functools import wraps

from ..config import settings

# Application info
app_info = Info('secondlife_exchange', 'SecondLife Exchange Information')
app_info.info({
    'version': settings.VERSION,
    'service': 'secondlife-exchange-backend'
})

# Matching metrics
recommendations_generated_total = Counter(
    'recommendations_generated_total',
    'Total recommendations returned',
    ['mode']
)

recommendation_generation_duration_seconds = Histogram(
    'recommendation_generation_duration_seconds',
    'Time taken to generate recommendations',
    ['mode']
)

anonymous_recommendation_requests_total = Counter(
    'anonymous_recommendation_requests_total',
    'Recommendation requests answered with the anonymous fallback'
)

preferences_saved_total = Counter(
    'preferences_saved_total',
    'Preference upserts',
    ['operation']
)

# Exchange metrics
exchange_transitions_total = Counter(
    'exchange_transitions_total',
    'Exchange status transitions',
    ['status']
)

# Database metrics
db_query_duration_seconds = Histogram(
    'db_query_duration_seconds',
    'Database query duration in seconds',
    ['query_type']
)


def setup_metrics(app):
    """
    Setup Prometheus metrics for FastAPI app

    Args:
        app: FastAPI application instance
    """
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics"],
        env_var_name="ENABLE_METRICS",
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True
    )

    instrumentator.instrument(app).expose(app, endpoint="/metrics")

    return instrumentator


def track_db_query(query_type: str):
    """
    Decorator to track database query time

    Usage:
        @track_db_query("fetch_candidates")
        def fetch_candidates():
            pass
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                db_query_duration_seconds.labels(
                    query_type=query_type
                ).observe(time.time() - start_time)

        return wrapper

    return decorator


def record_recommendations(mode: str, count: int, duration: float):
    """Record one recommendation run"""
    recommendations_generated_total.labels(mode=mode).inc(count)
    recommendation_generation_duration_seconds.labels(mode=mode).observe(duration)


def record_anonymous_recommendation():
    """Record a request served by the anonymous fallback"""
    anonymous_recommendation_requests_total.inc()


def record_preferences_saved(created: bool):
    """Record a preference upsert"""
    preferences_saved_total.labels(operation="create" if created else "update").inc()


def record_exchange_transition(status: str):
    """Record an exchange entering a status"""
    exchange_transitions_total.labels(status=status).inc()
