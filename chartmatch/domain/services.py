from collections.abc import Sequence
from typing import Any

import structlog

from chartmatch.domain.entities import Chart, ReferencePerson
from chartmatch.domain.matcher import DEFAULT_TOP_N, rank_matches
from chartmatch.domain.models import MatchResult, RarityResult
from chartmatch.domain.rarity import estimate_rarity


class ChartInsightService:
    """Service métier: correspondances avec le corpus et rareté d'une carte.

    Responsabilités:
    - Classer le corpus de référence (ou un sous-ensemble) par similarité.
    - Estimer la rareté de la carte, indépendamment du corpus.
    - Journaliser un résumé de chaque calcul (jamais la carte complète).
    """

    def __init__(self, corpus_repo):
        """Initialise le service avec le dépôt du corpus.

        Paramètres:
        - corpus_repo: dépôt en lecture seule exposant `all()` et `search()`.
        """
        self.corpus = corpus_repo
        self._log = structlog.get_logger(__name__).bind(component="chart_insights")

    def _candidates(self, category: str | None) -> Sequence[ReferencePerson]:
        if category:
            return self.corpus.search(category=category)
        return self.corpus.all()

    def matches(
        self, chart: Chart, top_n: int = DEFAULT_TOP_N, category: str | None = None
    ) -> list[MatchResult]:
        """Retourne les `top_n` personnalités les plus proches de `chart`.

        Paramètres:
        - chart: carte natale déjà calculée.
        - top_n: nombre maximal de correspondances.
        - category: restreint le classement à une catégorie du corpus.
        """
        candidates = self._candidates(category)
        results = rank_matches(chart, candidates, top_n)
        self._log.info(
            "chart_matches_computed",
            corpus_size=len(candidates),
            top_n=top_n,
            category=category,
            returned=len(results),
            top_score=results[0].score if results else None,
        )
        return results

    def rarity(self, chart: Chart) -> RarityResult:
        """Estime la rareté de `chart`."""
        result = estimate_rarity(chart)
        self._log.info(
            "chart_rarity_computed",
            score=result.score,
            ratio=result.ratio,
            label=result.label,
            unusual=[f.name for f in result.factors if f.unusual],
        )
        return result

    def insights(self, chart: Chart, top_n: int = DEFAULT_TOP_N) -> dict[str, Any]:
        """Combine correspondances et rareté pour une même carte.

        Retour: dict avec `matches` (liste de `MatchResult`) et `rarity` (`RarityResult`).
        """
        return {"matches": self.matches(chart, top_n), "rarity": self.rarity(chart)}
