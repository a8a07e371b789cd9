"""Configuration de logging basée sur structlog.

Objectif du module
------------------
- Fournir des logs structurés: console lisible en développement, JSON en production.
- Fusionner les variables de contexte (ex: `request_id`) dans chaque événement.
"""

import logging
import sys

import structlog


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog pour l'application.

    Args:
        level: Niveau minimal (nom standard `logging`, ex: "DEBUG", "INFO"); un nom
            inconnu retombe sur INFO.
        json_output: Rendu JSON d'une ligne par événement au lieu du rendu console.
    """
    min_level = getattr(logging, level.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )
