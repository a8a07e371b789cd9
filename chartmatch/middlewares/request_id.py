"""Middleware Starlette pour ajouter et propager un identifiant de requête.

Ce module implémente un middleware qui lie l'identifiant X-Request-ID au contexte structlog
(présent dans chaque log de la requête), le place dans `request.state` pour les enveloppes
d'erreur et le renvoie dans l'en-tête de réponse avec la durée de traitement.
"""

import time
from collections.abc import Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware pour ajouter et propager un identifiant de requête."""

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Request-ID",
        timing_header: str = "X-Process-Time-ms",
    ) -> None:
        """Initialise le middleware.

        Args:
            app: Application ASGI à wrapper.
            header_name: Nom de l'en-tête HTTP pour l'ID de requête.
            timing_header: Nom de l'en-tête HTTP pour la durée de traitement.
        """
        super().__init__(app)
        self.header_name = header_name
        self.timing_header = timing_header

    async def dispatch(self, request, call_next: Callable):
        """Traite une requête en liant son identifiant au contexte de log.

        Args:
            request: Requête HTTP entrante.
            call_next: Fonction pour appeler le middleware suivant.

        Returns:
            Response: Réponse HTTP avec en-têtes d'identifiant et de durée.
        """
        request_id = request.headers.get(self.header_name) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        duration_ms = int((time.perf_counter() - start) * 1000)
        response.headers[self.header_name] = request_id
        response.headers[self.timing_header] = str(duration_ms)
        return response
