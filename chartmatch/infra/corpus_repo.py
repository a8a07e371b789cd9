"""Dépôt du corpus de référence basé sur un fichier JSON.

Ce module charge une seule fois la liste des personnalités pré-analysées, la valide au
démarrage (un défaut de données est une erreur de configuration, pas une erreur de requête)
et l'expose en lecture seule.
"""

import json
import os

from pydantic import TypeAdapter, ValidationError

from chartmatch.domain.entities import ReferencePerson

_CORPUS_ADAPTER = TypeAdapter(list[ReferencePerson])


class CorpusValidationError(RuntimeError):
    """Corpus illisible ou invalide détecté au chargement."""


class JSONCorpusRepository:
    """Dépôt immuable des personnalités de référence.

    Les fiches sont conservées dans l'ordre du fichier, qui sert aussi d'ordre de
    départage à score égal lors du classement.
    """

    def __init__(self, path: str):
        """Charge et valide le corpus.

        Paramètres:
        - path: chemin du fichier JSON (liste de fiches).

        Lève `CorpusValidationError` si le fichier est absent, mal formé, ou contient
        des identifiants dupliqués.
        """
        self.path = path
        self._people = self._load(path)
        self._by_id = {p.id: p for p in self._people}

    @staticmethod
    def _load(path: str) -> tuple[ReferencePerson, ...]:
        if not os.path.exists(path):
            raise CorpusValidationError(f"corpus file not found: {path}")
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as err:
            raise CorpusValidationError(f"corpus file is not valid JSON: {path}") from err
        try:
            people = _CORPUS_ADAPTER.validate_python(raw)
        except ValidationError as err:
            raise CorpusValidationError(f"invalid corpus entry in {path}: {err}") from err

        seen: set[str] = set()
        for person in people:
            if person.id in seen:
                raise CorpusValidationError(f"duplicate corpus id: {person.id}")
            seen.add(person.id)
        return tuple(people)

    def __len__(self) -> int:
        return len(self._people)

    def all(self) -> tuple[ReferencePerson, ...]:
        """Retourne toutes les fiches dans l'ordre du corpus."""
        return self._people

    def get(self, person_id: str) -> ReferencePerson | None:
        """Retourne une fiche par identifiant, ou None si absente."""
        return self._by_id.get(person_id)

    def search(self, category: str | None = None, query: str = "") -> tuple[ReferencePerson, ...]:
        """Filtre le corpus par catégorie et texte libre.

        Le texte est recherché (sans tenir compte de la casse) dans le nom, le résumé et
        les mots-clés. L'ordre du corpus est conservé.
        """
        needle = query.strip().lower()

        def _matches(person: ReferencePerson) -> bool:
            if category and person.category != category:
                return False
            if not needle:
                return True
            return (
                needle in person.name.lower()
                or needle in person.brief.lower()
                or any(needle in k.lower() for k in person.keywords)
            )

        return tuple(p for p in self._people if _matches(p))
