"""
Endpoint de santé pour vérifier la disponibilité de l'API et du corpus.

Expose `/health` pour signaler l'état général de l'application.
"""


from fastapi import APIRouter

from chartmatch.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et la taille du corpus chargé."""
    return {"status": "ok", "corpus_size": len(container.corpus_repo)}
