# Schémas Pydantic exposés par l'API (requêtes et réponses).

from pydantic import BaseModel, Field

from chartmatch.domain.entities import Chart, ReferenceCategory, ReferencePerson
from chartmatch.domain.models import MatchResult, RarityResult


class MatchRequest(BaseModel):
    """Requête de classement par similarité.

    Champs:
    - chart: Chart (carte natale déjà calculée)
    - top_n: int (au moins 1; défaut MATCH_DEFAULT_TOP_N, plafonné à MATCH_MAX_TOP_N)
    - category: catégorie du corpus (optionnelle)
    """

    chart: Chart
    top_n: int | None = Field(default=None, ge=1)
    category: ReferenceCategory | None = None


class RarityRequest(BaseModel):
    """Requête d'estimation de rareté.

    Champs:
    - chart: Chart (carte natale déjà calculée)
    """

    chart: Chart


class InsightsRequest(BaseModel):
    """Requête combinée correspondances + rareté."""

    chart: Chart
    top_n: int | None = Field(default=None, ge=1)


class MatchResponse(BaseModel):
    """Réponse de classement.

    Champs:
    - matches: list[MatchResult] (triées par score décroissant)
    """

    matches: list[MatchResult]


class InsightsResponse(BaseModel):
    """Réponse combinée: correspondances et rareté."""

    matches: list[MatchResult]
    rarity: RarityResult


class PeopleResponse(BaseModel):
    """Liste filtrée des personnalités du corpus."""

    total: int
    people: list[ReferencePerson]
