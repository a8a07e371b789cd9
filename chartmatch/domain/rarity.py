"""Estimation de la rareté d'une carte.

Ce module applique une heuristique additive facteur par facteur, puis convertit le score
obtenu en ratio « 1 sur N » via une fonction par morceaux monotone, et enfin en libellé
qualitatif. Aucun corpus n'intervient: le résultat ne dépend que de la carte.
"""

from chartmatch.domain.entities import Chart
from chartmatch.domain.features import ChartFeatures, StructureRarity, extract_features
from chartmatch.domain.models import RarityFactor, RarityLabel, RarityResult

BALANCED_STRENGTH_KEYWORDS = ("balanced", "neutral", "average")

BALANCED_STRENGTH_POINTS = 15
RARE_STRUCTURE_POINTS = 40
UNCOMMON_STRUCTURE_POINTS = 10
MISSING_ELEMENT_POINTS = 20
DOMINANT_ELEMENT_POINTS = 25
EVEN_SPREAD_POINTS = 30
MANY_STARS_POINTS = 15
FEW_STARS_POINTS = 10
CONCENTRATED_STEMS_POINTS = 20

DOMINANT_ELEMENT_MIN_PCT = 60
EVEN_SPREAD_MAX_GAP = 8
MANY_STARS_MIN = 10
FEW_STARS_MAX = 1
CONCENTRATED_STEMS_MAX_ELEMENTS = 2

BASE_RATIO = 50

RARITY_LABELS: tuple[tuple[int, RarityLabel], ...] = (
    (50000, "Exceptionally Rare"),
    (10000, "Very Rare"),
    (2000, "Uncommon"),
    (500, "Somewhat Unusual"),
    (150, "Slightly Distinctive"),
)


def score_to_ratio(score: int) -> int:
    """
    Convertit un score additif en ratio « 1 sur N ».

    La fonction est monotone croissante mais discontinue aux bornes des segments
    (par exemple 19 → 290 puis 20 → 500).
    """
    if score <= 0:
        return BASE_RATIO
    if score < 20:
        return 100 + score * 10
    if score < 40:
        return 500 + (score - 20) * 50
    if score < 60:
        return 2000 + (score - 40) * 200
    if score < 80:
        return 8000 + (score - 60) * 500
    return 20000 + (score - 80) * 2000


def ratio_label(ratio: int) -> RarityLabel:
    """Libellé qualitatif associé à un ratio."""
    for threshold, label in RARITY_LABELS:
        if ratio >= threshold:
            return label
    return "Common Pattern"


def describe_ratio(ratio: int) -> str:
    """Phrase lisible; au-delà de 1000 le ratio est arrondi au millier le plus proche."""
    shown = int(ratio / 1000 + 0.5) * 1000 if ratio > 1000 else ratio
    return f"Approximately 1 in {shown:,} charts share your pattern"


def _strength_factor(features: ChartFeatures) -> tuple[int, RarityFactor | None]:
    strength = features.strength.lower()
    if any(k in strength for k in BALANCED_STRENGTH_KEYWORDS):
        return BALANCED_STRENGTH_POINTS, RarityFactor(
            name="DM Strength",
            description=f"{features.strength} strength is rarer than Strong or Weak (~20%)",
            unusual=True,
        )
    return 0, None


def _structure_factor(features: ChartFeatures) -> tuple[int, RarityFactor | None]:
    if features.structure_rarity is StructureRarity.RARE:
        return RARE_STRUCTURE_POINTS, RarityFactor(
            name="Structure Type",
            description=f"{features.structure} is a rare structure (~2%)",
            unusual=True,
        )
    if features.structure_rarity is StructureRarity.UNCOMMON:
        return UNCOMMON_STRUCTURE_POINTS, RarityFactor(
            name="Structure Type",
            description=f"{features.structure} is uncommon (~10%)",
            unusual=True,
        )
    return 0, None


def _element_factor(features: ChartFeatures) -> tuple[int, RarityFactor | None]:
    # seuls les éléments transmis comptent; une clé absente n'est pas un zéro
    by_element = features.reported_percentages
    if not any(by_element.values()):
        return 0, None
    highest = max(by_element, key=by_element.__getitem__)
    max_pct = by_element[highest]
    min_pct = min(by_element.values())

    if any(pct == 0 for pct in by_element.values()):
        missing = ", ".join(el for el, pct in by_element.items() if pct == 0)
        return MISSING_ELEMENT_POINTS, RarityFactor(
            name="Missing Element",
            description=f"Chart is missing {missing} entirely (~12%)",
            unusual=True,
        )
    if max_pct >= DOMINANT_ELEMENT_MIN_PCT:
        return DOMINANT_ELEMENT_POINTS, RarityFactor(
            name="Dominant Element",
            description=f"{highest} dominates with {max_pct:g}% of the chart",
            unusual=True,
        )
    if max_pct - min_pct <= EVEN_SPREAD_MAX_GAP:
        return EVEN_SPREAD_POINTS, RarityFactor(
            name="Balanced Elements",
            description="Exceptionally even element distribution",
            unusual=True,
        )
    return 0, None


def _star_factor(features: ChartFeatures) -> tuple[int, RarityFactor | None]:
    count = features.star_count
    if count >= MANY_STARS_MIN:
        return MANY_STARS_POINTS, RarityFactor(
            name="Many Stars", description=f"{count} symbolic stars (top 20%)", unusual=True
        )
    if count <= FEW_STARS_MAX:
        return FEW_STARS_POINTS, RarityFactor(
            name="Few Stars", description=f"Only {count} symbolic stars", unusual=True
        )
    return 0, None


def _stem_diversity_factor(features: ChartFeatures) -> tuple[int, RarityFactor | None]:
    distinct = set(features.pillar_stem_elements)
    if distinct and len(distinct) <= CONCENTRATED_STEMS_MAX_ELEMENTS:
        return CONCENTRATED_STEMS_POINTS, RarityFactor(
            name="Concentrated Stems",
            description=f"Pillar stems use only {' and '.join(sorted(distinct))}",
            unusual=True,
        )
    return 0, None


RARITY_RULES = (
    _strength_factor,
    _structure_factor,
    _element_factor,
    _star_factor,
    _stem_diversity_factor,
)


def estimate_rarity(chart: Chart) -> RarityResult:
    """
    Estime la rareté d'une carte.

    Le maître du jour est listé à titre informatif (distribution supposée uniforme) et ne
    contribue jamais au score; seules les règles déclenchées apparaissent ensuite.

    Args:
        chart: Carte natale soumise.

    Returns:
        RarityResult: Score additif, ratio, libellé, description et facteurs.
    """
    features = extract_features(chart)
    stem = features.day_master_stem or "Unknown"
    factors = [
        RarityFactor(
            name="Day Master Stem",
            description=f"{stem} is one of 10 Day Masters (not a rarity factor)",
            unusual=False,
        )
    ]
    score = 0
    for rule in RARITY_RULES:
        points, factor = rule(features)
        if factor is not None:
            score += points
            factors.append(factor)

    ratio = score_to_ratio(score)
    return RarityResult(
        score=score,
        ratio=ratio,
        label=ratio_label(ratio),
        description=describe_ratio(ratio),
        factors=tuple(factors),
    )
