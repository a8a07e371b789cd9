"""Paramètres applicatifs du service de correspondance de cartes.

Les valeurs proviennent de l'environnement puis d'un fichier `.env`, choisi dans cet ordre:
`ENV_FILE` (chemin explicite), `.env.{APP_ENV}` s'il existe dans le répertoire courant,
sinon `.env`.
"""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORPUS_PATH = str(
    Path(__file__).resolve().parent.parent / "infra" / "reference_people.json"
)


def resolve_env_file(base_dir: Path | None = None) -> Path:
    """Retourne le fichier `.env` à charger (il peut ne pas exister)."""
    explicit = os.getenv("ENV_FILE")
    if explicit:
        return Path(explicit)
    base = base_dir or Path.cwd()
    per_env = base / f".env.{os.getenv('APP_ENV', 'dev')}"
    return per_env if per_env.exists() else base / ".env"


class Settings(BaseSettings):
    """Configuration du service (variables insensibles à la casse)."""

    model_config = SettingsConfigDict(
        env_file=resolve_env_file(),
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    APP_NAME: str = "chartmatch"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = False
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8080

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Corpus JSON validé au démarrage
    CORPUS_PATH: str = DEFAULT_CORPUS_PATH

    MATCH_DEFAULT_TOP_N: int = 5
    MATCH_MAX_TOP_N: int = 50


def get_settings() -> Settings:
    """Lit une configuration fraîche (environnement courant)."""
    return Settings()
