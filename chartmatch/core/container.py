from chartmatch.core.settings import get_settings
from chartmatch.domain.services import ChartInsightService
from chartmatch.infra.corpus_repo import JSONCorpusRepository


class Container:
    def __init__(self):
        self.settings = get_settings()
        # Le corpus est chargé et validé une seule fois; une donnée invalide
        # fait échouer le démarrage (CorpusValidationError).
        self.corpus_repo = JSONCorpusRepository(path=self.settings.CORPUS_PATH)
        self.insights = ChartInsightService(self.corpus_repo)


container = Container()
"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, dépôt du corpus, service d'analyse)
et expose un singleton `container` utilisé par le reste de l'application.
"""
