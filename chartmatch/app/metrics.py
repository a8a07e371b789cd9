"""
Métriques Prometheus pour l'application.

Ce module définit les métriques HTTP et métier (classements, rareté) et expose `/metrics`.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Business metrics
MATCH_REQUESTS = Counter(
    "chart_match_requests_total",
    "Total chart similarity rankings",
    ["category"],
)
MATCH_LATENCY = Histogram(
    "chart_match_latency_seconds",
    "Latency of corpus ranking requests (matches and insights)",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)
RARITY_LABELS = Counter(
    "chart_rarity_label_total",
    "Rarity estimates by qualitative label",
    ["label"],
)


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte les métriques de comptage des requêtes et de latence par route pour l'exposition
    Prometheus. La route est le gabarit FastAPI (ex: `/reference/people/{person_id}`) afin de
    borner la cardinalité des labels.
    """

    async def dispatch(self, request: Request, call_next):
        """Mesure la requête et alimente les compteurs."""
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = request.scope.get("route")
        path = getattr(route, "path", None) or "unmatched"
        REQUEST_COUNT.labels(request.method, path, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(path).observe(time.perf_counter() - start)
        return response
