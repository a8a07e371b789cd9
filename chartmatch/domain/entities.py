"""
Entités du domaine métier.

Ce module définit les modèles d'entrée: la carte BaZi reçue du service de calcul externe
(`Chart`) et les fiches du corpus de référence (`ReferencePerson`).

Une carte incomplète reste valide: chaque champ optionnel a une valeur neutre
(chaîne vide, liste vide, zéro) pour que l'absence d'information ne fasse jamais échouer
un calcul.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

ELEMENTS: tuple[str, ...] = ("Wood", "Fire", "Earth", "Metal", "Water")

ReferenceCategory = Literal["artist", "leader", "scientist", "entrepreneur", "performer"]

# Pourcentage fini et positif (NaN et infinis refusés)
Percentage = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class _Upstream(BaseModel):
    """Base des modèles reçus du service externe: champs inconnus ignorés."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class GanZhiInfo(_Upstream):
    """Élément et polarité d'un tronc ou d'une branche."""

    name: str = ""
    element: str = ""
    polarity: str = ""


class DayMaster(_Upstream):
    """Maître du jour: tronc céleste du pilier du jour."""

    stem: str = ""
    info: GanZhiInfo = Field(default_factory=GanZhiInfo)


class Pillar(_Upstream):
    """Pilier (Year/Month/Day/Hour) avec son tronc `gan` et sa branche `zhi`."""

    label: str = ""
    gan: str = ""
    zhi: str = ""
    gan_info: GanZhiInfo = Field(default_factory=GanZhiInfo)
    zhi_info: GanZhiInfo = Field(default_factory=GanZhiInfo)


class ElementData(_Upstream):
    """Distribution élémentaire en pourcentages (somme ~100)."""

    percentages: dict[str, Percentage] = Field(default_factory=dict)
    dominant: str = ""


class Star(_Upstream):
    """Étoile symbolique attachée à un pilier."""

    name: str = ""
    pillar: str = ""
    zhi: str = ""
    desc: str = ""


class Professional(_Upstream):
    """Évaluation professionnelle: force du maître du jour et structure."""

    dm_strength: str = ""
    structure: str = ""
    favorable_elements: list[str] = Field(default_factory=list)
    unfavorable_elements: list[str] = Field(default_factory=list)


class Chart(_Upstream):
    """Carte natale complète telle que produite par le service de calcul."""

    day_master: DayMaster = Field(default_factory=DayMaster)
    professional: Professional = Field(default_factory=Professional)
    elements: ElementData = Field(default_factory=ElementData)
    pillars: list[Pillar] = Field(default_factory=list)
    stars: list[Star] | None = None


class BirthInfo(BaseModel):
    """Données de naissance d'une personnalité (affichage uniquement)."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    day: int
    hour: int | None = None
    minute: int | None = None
    city: str = ""
    country: str = ""


class ReferenceDayMaster(BaseModel):
    """Maître du jour pré-calculé d'une personnalité."""

    model_config = ConfigDict(frozen=True)

    stem: str
    element: Literal["Wood", "Fire", "Earth", "Metal", "Water"]
    polarity: Literal["Yang", "Yin"]


class ReferencePerson(BaseModel):
    """Fiche du corpus de référence (immuable pour toute la durée du processus)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: ReferenceCategory
    birth: BirthInfo
    brief: str = ""
    keywords: tuple[str, ...] = ()
    day_master: ReferenceDayMaster
    dm_strength: str = Field(..., min_length=1)
    structure: str = Field(..., min_length=1)
    dominant_elements: tuple[
        Literal["Wood", "Fire", "Earth", "Metal", "Water"],
        Literal["Wood", "Fire", "Earth", "Metal", "Water"],
    ]
