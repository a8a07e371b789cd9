"""
Moteur de classement par similarité.

Objectif: comparer une carte à toutes les personnalités du corpus, agréger les scores
pondérés des six facteurs en un pourcentage entier, collecter au plus trois points communs
et renvoyer les N meilleures correspondances.
"""

import math
from collections.abc import Sequence

from chartmatch.domain.entities import Chart, ReferencePerson
from chartmatch.domain.features import ChartFeatures, extract_features
from chartmatch.domain.models import MatchBreakdown, MatchLabel, MatchResult
from chartmatch.domain.scorers import SCORERS, WEIGHTS, Factor

MAX_COMMONALITIES = 3
DEFAULT_TOP_N = 5

# (seuil, libellé court, description affichée)
MATCH_TIERS: tuple[tuple[int, MatchLabel, str], ...] = (
    (70, "Strong", "Strong Match"),
    (50, "Notable", "Notable Match"),
    (35, "Moderate", "Moderate Match"),
)


def to_percent(value: float) -> int:
    """Arrondit une valeur de [0, 1] en pourcentage entier (demi arrondi vers le haut)."""
    return max(0, min(100, math.floor(value * 100 + 0.5)))


def match_label(score: int) -> MatchLabel:
    """Libellé qualitatif d'un score (affichage uniquement)."""
    for threshold, label, _ in MATCH_TIERS:
        if score >= threshold:
            return label
    return "Light"


def match_description(score: int) -> str:
    """Description affichée d'un score de correspondance."""
    for threshold, _, description in MATCH_TIERS:
        if score >= threshold:
            return description
    return "Light Similarities"


def score_person(features: ChartFeatures, person: ReferencePerson) -> MatchResult:
    """
    Calcule la correspondance entre une carte (déjà extraite) et une personnalité.

    Les points communs sont conservés dans l'ordre d'évaluation des facteurs,
    tronqués aux trois premiers.
    """
    values: dict[Factor, float] = {}
    commonalities: list[str] = []
    for factor in Factor:
        result = SCORERS[factor](features, person)
        values[factor] = result.value
        if result.commonality:
            commonalities.append(result.commonality)

    total = sum(values[f] * WEIGHTS[f] for f in Factor)
    score = to_percent(total)
    return MatchResult(
        person=person,
        score=score,
        label=match_label(score),
        description=match_description(score),
        breakdown=MatchBreakdown(**{f.value: to_percent(values[f]) for f in Factor}),
        commonalities=tuple(commonalities[:MAX_COMMONALITIES]),
    )


def rank_matches(
    chart: Chart,
    corpus: Sequence[ReferencePerson],
    top_n: int = DEFAULT_TOP_N,
) -> list[MatchResult]:
    """
    Classe le corpus complet par similarité décroissante avec `chart`.

    Toutes les fiches sont évaluées; le tri est stable, donc à score égal la première
    fiche du corpus reste devant.

    Args:
        chart: Carte natale soumise.
        corpus: Fiches de référence, dans leur ordre de chargement.
        top_n: Nombre de correspondances à retourner (borné par la taille du corpus).

    Returns:
        list[MatchResult]: Correspondances triées par score décroissant.
    """
    if top_n <= 0:
        return []
    features = extract_features(chart)
    matches = [score_person(features, person) for person in corpus]
    matches.sort(key=lambda m: m.score, reverse=True)
    return matches[:top_n]
