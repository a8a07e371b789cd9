"""Extraction des caractéristiques comparables d'une carte.

Ce module normalise une carte hétérogène en un petit ensemble d'attributs
(`ChartFeatures`) utilisés par les scoreurs de similarité et l'estimateur de rareté.
Les libellés de structure y sont classés une seule fois en familles et en classe de rareté.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from chartmatch.domain.entities import ELEMENTS, Chart


class StructureFamily(str, Enum):
    """Familles de structures partageant un même dieu dominant."""

    RESOURCE = "resource"
    WEALTH = "wealth"
    OFFICER = "officer"
    KILLING = "killing"


class StructureRarity(str, Enum):
    """Classe de fréquence d'une structure."""

    RARE = "rare"
    UNCOMMON = "uncommon"
    COMMON = "common"


# Ordre de priorité: les mots-clés « rares » sont testés avant les « peu communs ».
RARE_STRUCTURE_KEYWORDS = ("follow", "special", "fake", "transform", "dominant")
UNCOMMON_STRUCTURE_KEYWORDS = ("killing", "hurting officer")


@dataclass(frozen=True)
class ChartFeatures:
    """Attributs comparables d'une carte (voir `extract_features`)."""

    day_master_stem: str
    day_master_element: str
    day_master_polarity: str
    strength: str
    element_percentages: tuple[float, ...]
    reported_elements: frozenset[str]
    structure: str
    structure_families: frozenset[StructureFamily]
    structure_rarity: StructureRarity
    day_pillar_stem: str
    pillar_stem_elements: tuple[str, ...]
    star_count: int

    @property
    def percentages_by_element(self) -> dict[str, float]:
        return dict(zip(ELEMENTS, self.element_percentages, strict=True))

    @property
    def reported_percentages(self) -> dict[str, float]:
        """Pourcentages des seuls éléments présents dans la carte reçue."""
        return {
            el: pct for el, pct in self.percentages_by_element.items() if el in self.reported_elements
        }


@lru_cache(maxsize=256)
def classify_structure_families(structure: str) -> frozenset[StructureFamily]:
    """Familles mentionnées par un libellé de structure (comparaison insensible à la casse)."""
    lowered = structure.lower()
    return frozenset(f for f in StructureFamily if f.value in lowered)


def classify_structure_rarity(structure: str) -> StructureRarity:
    """Classe de rareté d'un libellé de structure."""
    lowered = structure.lower()
    if any(k in lowered for k in RARE_STRUCTURE_KEYWORDS):
        return StructureRarity.RARE
    if any(k in lowered for k in UNCOMMON_STRUCTURE_KEYWORDS):
        return StructureRarity.UNCOMMON
    return StructureRarity.COMMON


def _day_pillar_stem(chart: Chart) -> str:
    for pillar in chart.pillars:
        if pillar.label.strip().lower() == "day":
            return pillar.gan.strip()
    # Year, Month, Day, Hour sans libellés
    if len(chart.pillars) == 4:
        return chart.pillars[2].gan.strip()
    return ""


def extract_features(chart: Chart) -> ChartFeatures:
    """
    Extrait les attributs comparables d'une carte.

    Fonction pure: les champs absents sont remplacés par des valeurs neutres
    (chaîne vide, liste vide, zéro), sans jamais lever d'erreur.

    Args:
        chart: Carte natale reçue du service de calcul.

    Returns:
        ChartFeatures: Attributs normalisés.
    """
    percentages = chart.elements.percentages
    structure = chart.professional.structure.strip()
    return ChartFeatures(
        day_master_stem=chart.day_master.stem.strip(),
        day_master_element=chart.day_master.info.element.strip(),
        day_master_polarity=chart.day_master.info.polarity.strip(),
        strength=chart.professional.dm_strength.strip(),
        element_percentages=tuple(percentages.get(el, 0.0) for el in ELEMENTS),
        reported_elements=frozenset(el for el in ELEMENTS if el in percentages),
        structure=structure,
        structure_families=classify_structure_families(structure),
        structure_rarity=classify_structure_rarity(structure),
        day_pillar_stem=_day_pillar_stem(chart),
        pillar_stem_elements=tuple(
            p.gan_info.element.strip() for p in chart.pillars if p.gan_info.element.strip()
        ),
        star_count=len(chart.stars or []),
    )
