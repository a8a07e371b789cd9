"""
Routes liées aux cartes: correspondances avec le corpus et rareté.

Ce module regroupe les endpoints `/charts` qui reçoivent une carte déjà calculée par le
service externe et renvoient le classement par similarité et/ou l'estimation de rareté.
"""

from fastapi import APIRouter

from chartmatch.api.schemas import (
    InsightsRequest,
    InsightsResponse,
    MatchRequest,
    MatchResponse,
    RarityRequest,
)
from chartmatch.app.metrics import MATCH_LATENCY, MATCH_REQUESTS, RARITY_LABELS
from chartmatch.core.container import container
from chartmatch.domain.models import RarityResult

router = APIRouter(prefix="/charts", tags=["charts"])
service = container.insights


def _effective_top_n(requested: int | None) -> int:
    settings = container.settings
    return min(requested or settings.MATCH_DEFAULT_TOP_N, settings.MATCH_MAX_TOP_N)


@router.post("/matches", response_model=MatchResponse)
def chart_matches(payload: MatchRequest):
    """
    Classe les personnalités du corpus par similarité avec la carte.

    Paramètres:
    - payload: `MatchRequest` (carte, top_n, catégorie optionnelle).

    Retour:
    - `MatchResponse` avec au plus `top_n` correspondances.
    """
    top_n = _effective_top_n(payload.top_n)
    with MATCH_LATENCY.time():
        matches = service.matches(payload.chart, top_n=top_n, category=payload.category)
    MATCH_REQUESTS.labels(payload.category or "all").inc()
    return {"matches": matches}


@router.post("/rarity", response_model=RarityResult)
def chart_rarity(payload: RarityRequest):
    """Estime la rareté « 1 sur N » de la carte."""
    result = service.rarity(payload.chart)
    RARITY_LABELS.labels(result.label).inc()
    return result


@router.post("/insights", response_model=InsightsResponse)
def chart_insights(payload: InsightsRequest):
    """Retourne correspondances et rareté en un seul appel."""
    top_n = _effective_top_n(payload.top_n)
    with MATCH_LATENCY.time():
        data = service.insights(payload.chart, top_n=top_n)
    MATCH_REQUESTS.labels("all").inc()
    RARITY_LABELS.labels(data["rarity"].label).inc()
    return data
