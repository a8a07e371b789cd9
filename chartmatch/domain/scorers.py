"""Scoreurs de similarité par facteur.

Chaque scoreur compare un attribut extrait de la carte soumise à l'attribut pré-calculé
d'une personnalité du corpus et retourne une valeur dans [0, 1], avec éventuellement une
note de « point commun ».

La table `SCORERS` associe chaque membre de l'énumération fermée `Factor` à sa fonction;
`WEIGHTS` fixe sa pondération. Leur exhaustivité est vérifiée à l'import.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from chartmatch.domain.entities import ELEMENTS, ReferencePerson
from chartmatch.domain.features import ChartFeatures, classify_structure_families

PRIMARY_ELEMENT_WEIGHT = 1.0
SECONDARY_ELEMENT_WEIGHT = 0.7
SIMILAR_BALANCE_THRESHOLD = 0.7
STAR_COUNT_CAP = 10
STAR_SCORE_CEILING = 0.5


class Factor(str, Enum):
    """Facteurs de similarité, dans l'ordre d'évaluation."""

    DAY_MASTER = "day_master"
    DM_STRENGTH = "dm_strength"
    ELEMENTS = "elements"
    STRUCTURE = "structure"
    PILLARS = "pillars"
    STARS = "stars"


@dataclass(frozen=True)
class FactorScore:
    """Score normalisé d'un facteur et note de point commun éventuelle."""

    value: float
    commonality: str | None = None


def score_day_master(features: ChartFeatures, person: ReferencePerson) -> FactorScore:
    """Tronc identique > même élément > même polarité; seul le plus haut palier compte."""
    ref = person.day_master
    if features.day_master_stem and features.day_master_stem == ref.stem:
        return FactorScore(1.0, f"Same Day Master: {ref.stem}")
    if features.day_master_element and features.day_master_element == ref.element:
        return FactorScore(0.5, f"Same element: {ref.element}")
    if features.day_master_polarity and features.day_master_polarity == ref.polarity:
        return FactorScore(0.2)
    return FactorScore(0.0)


def score_dm_strength(features: ChartFeatures, person: ReferencePerson) -> FactorScore:
    """Catégorie de force identique, sinon rapprochement grossier faible/fort."""
    mine = features.strength.lower()
    theirs = person.dm_strength.lower()
    if mine and mine == theirs:
        return FactorScore(1.0, f"Both {person.dm_strength} Day Master")
    if ("weak" in mine and theirs == "weak") or ("strong" in mine and theirs == "strong"):
        return FactorScore(0.8)
    return FactorScore(0.0)


def reference_element_vector(person: ReferencePerson) -> tuple[float, ...]:
    """Vecteur synthétique: 1.0 pour l'élément primaire, 0.7 pour le secondaire."""
    weights = dict.fromkeys(ELEMENTS, 0.0)
    primary, secondary = person.dominant_elements
    weights[secondary] = SECONDARY_ELEMENT_WEIGHT
    weights[primary] = PRIMARY_ELEMENT_WEIGHT
    return tuple(weights[el] for el in ELEMENTS)


def cosine_similarity(a: tuple[float, ...], b: tuple[float, ...]) -> float:
    """Similarité cosinus bornée à [0, 1]; 0 si l'un des vecteurs est nul."""
    dot = sum(x * y for x, y in zip(a, b, strict=True))
    magnitude = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if magnitude <= 0:
        return 0.0
    return max(0.0, min(1.0, dot / magnitude))


def score_elements(features: ChartFeatures, person: ReferencePerson) -> FactorScore:
    """Cosinus entre la distribution normalisée de la carte et le vecteur de référence."""
    total = sum(features.element_percentages) or 1.0
    normalized = tuple(p / total for p in features.element_percentages)
    value = cosine_similarity(normalized, reference_element_vector(person))
    if value > SIMILAR_BALANCE_THRESHOLD:
        return FactorScore(value, "Similar element balance")
    return FactorScore(value)


def score_structure(features: ChartFeatures, person: ReferencePerson) -> FactorScore:
    """
    Compare les structures.

    Égalité, inclusion d'un libellé dans l'autre ou premier mot commun: 1.0.
    Famille commune (ressource, richesse, officier, sept tueries): 0.6.
    """
    mine = features.structure.lower()
    theirs = person.structure.lower()
    if not mine:
        return FactorScore(0.0)
    if mine == theirs or theirs in mine or mine.split()[0] in theirs:
        return FactorScore(1.0, f"Same structure: {person.structure}")
    if features.structure_families & classify_structure_families(person.structure):
        return FactorScore(0.6)
    return FactorScore(0.0)


def score_pillars(features: ChartFeatures, person: ReferencePerson) -> FactorScore:
    """Tronc du pilier du jour identique au maître du jour de référence (binaire)."""
    if features.day_pillar_stem and features.day_pillar_stem == person.day_master.stem:
        return FactorScore(1.0)
    return FactorScore(0.0)


def score_stars(features: ChartFeatures, person: ReferencePerson) -> FactorScore:
    """Base liée au nombre d'étoiles de la carte, plafonnée à 0.5."""
    if features.star_count <= 0:
        return FactorScore(0.0)
    return FactorScore(min(features.star_count / STAR_COUNT_CAP, 1.0) * STAR_SCORE_CEILING)


Scorer = Callable[[ChartFeatures, ReferencePerson], FactorScore]

SCORERS: dict[Factor, Scorer] = {
    Factor.DAY_MASTER: score_day_master,
    Factor.DM_STRENGTH: score_dm_strength,
    Factor.ELEMENTS: score_elements,
    Factor.STRUCTURE: score_structure,
    Factor.PILLARS: score_pillars,
    Factor.STARS: score_stars,
}

WEIGHTS: dict[Factor, float] = {
    Factor.DAY_MASTER: 0.30,
    Factor.DM_STRENGTH: 0.15,
    Factor.ELEMENTS: 0.20,
    Factor.STRUCTURE: 0.15,
    Factor.PILLARS: 0.10,
    Factor.STARS: 0.10,
}

if set(SCORERS) != set(Factor) or set(WEIGHTS) != set(Factor):
    raise RuntimeError("every Factor needs a scorer and a weight")
if not math.isclose(sum(WEIGHTS.values()), 1.0):
    raise RuntimeError("factor weights must sum to 1")
