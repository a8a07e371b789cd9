"""
Application principale FastAPI.

Ce module assemble les composants de l'application : middlewares, routes, métriques,
gestion d'erreurs et configuration de l'API de correspondance de cartes.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (request id, métriques)
- Monter les routers (santé, cartes, corpus, métriques)
"""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from chartmatch.api.errors import register_error_handlers
from chartmatch.api.routes_charts import router as charts_router
from chartmatch.api.routes_health import router as health_router
from chartmatch.api.routes_reference import router as reference_router
from chartmatch.app.metrics import PrometheusMiddleware, metrics_router
from chartmatch.core.container import container
from chartmatch.core.logging import setup_logging
from chartmatch.middlewares.request_id import RequestIDMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Lit les paramètres d'exécution
    - Ajoute les middlewares utiles au debug/traçabilité
    - Publie les routes et les gestionnaires d'erreurs
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(charts_router)
    app.include_router(reference_router)
    app.include_router(metrics_router)
    return app


app = create_app()


def main():
    """Lance le serveur uvicorn sur l'hôte et le port configurés."""
    settings = container.settings
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT, reload=False)


if __name__ == "__main__":
    main()
