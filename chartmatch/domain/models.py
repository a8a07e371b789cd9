"""Modèles de résultats du domaine (valeurs dérivées, éphémères).

Objectif du module
------------------
- Définir les enregistrements produits à chaque requête: `MatchResult` et `RarityResult`.
- Ces valeurs sont recalculées à chaque appel, jamais modifiées ni persistées.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from chartmatch.domain.entities import ReferencePerson

MatchLabel = Literal["Strong", "Notable", "Moderate", "Light"]

RarityLabel = Literal[
    "Exceptionally Rare",
    "Very Rare",
    "Uncommon",
    "Somewhat Unusual",
    "Slightly Distinctive",
    "Common Pattern",
]


class MatchBreakdown(BaseModel):
    """Sous-scores entiers (0-100) par facteur de similarité."""

    model_config = ConfigDict(frozen=True)

    day_master: int = Field(..., ge=0, le=100)
    dm_strength: int = Field(..., ge=0, le=100)
    elements: int = Field(..., ge=0, le=100)
    structure: int = Field(..., ge=0, le=100)
    pillars: int = Field(..., ge=0, le=100)
    stars: int = Field(..., ge=0, le=100)


class MatchResult(BaseModel):
    """Correspondance entre la carte soumise et une personnalité du corpus."""

    model_config = ConfigDict(frozen=True)

    person: ReferencePerson
    score: int = Field(..., ge=0, le=100)
    label: MatchLabel
    description: str = ""
    breakdown: MatchBreakdown
    commonalities: tuple[str, ...] = Field(default=(), max_length=3)


class RarityFactor(BaseModel):
    """Facteur examiné par l'estimateur de rareté."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    unusual: bool


class RarityResult(BaseModel):
    """Estimation « 1 sur N » de la rareté d'une carte."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0)
    ratio: int = Field(..., ge=50)
    label: RarityLabel
    description: str
    factors: tuple[RarityFactor, ...] = ()
