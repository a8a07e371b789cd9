"""
Routes de consultation du corpus de référence.

Expose la liste des personnalités (filtrable par catégorie et texte libre) et le détail
d'une fiche.
"""

from fastapi import APIRouter, HTTPException

from chartmatch.api.schemas import PeopleResponse
from chartmatch.core.container import container
from chartmatch.core.http_constants import HTTP_NOT_FOUND
from chartmatch.domain.entities import ReferenceCategory, ReferencePerson

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/people", response_model=PeopleResponse)
def list_people(category: ReferenceCategory | None = None, q: str = ""):
    """Liste les personnalités, filtrées par catégorie et/ou recherche textuelle."""
    people = container.corpus_repo.search(category=category, query=q)
    return {"total": len(people), "people": list(people)}


@router.get("/people/{person_id}", response_model=ReferencePerson)
def get_person(person_id: str):
    """Retourne une fiche du corpus par identifiant."""
    person = container.corpus_repo.get(person_id)
    if person is None:
        raise HTTPException(status_code=HTTP_NOT_FOUND, detail="Reference person not found")
    return person
