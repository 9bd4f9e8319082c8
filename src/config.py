"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe MOVIEINFO_,
et peut optionnellement être fournie via un fichier .env.

Les clés API (TMDB, OMDB, RapidAPI) sont optionnelles - un fournisseur non configuré
échoue avec une erreur de configuration au moment de l'appel.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MOVIEINFO_.
    Exemple : MOVIEINFO_TMDB_API_KEY=xxxx
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIEINFO_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API REST
    api_base_path: str = Field(default="/api/v1")
    api_version: str = Field(default="v1")
    environment: str = Field(default="development")

    # Base de données
    database_url: str = Field(default="sqlite:///movieinfo.db")

    # Clés API (OPTIONNELLES - le fournisseur refuse les appels si non définie)
    tmdb_api_key: Optional[str] = Field(default=None)
    omdb_api_key: Optional[str] = Field(default=None)
    rapidapi_key: Optional[str] = Field(default=None)

    # Points d'entrée des fournisseurs
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")
    omdb_base_url: str = Field(default="http://www.omdbapi.com")
    rapidapi_base_url: str = Field(default="https://imdb-api1.p.rapidapi.com")
    rapidapi_host: str = Field(default="imdb-api1.p.rapidapi.com")
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    # Cache des appels fournisseurs (1 heure)
    cache_dir: Path = Field(default=Path(".cache/api"))
    cache_ttl_seconds: int = Field(default=3600, ge=1)

    # Import en masse : pause entre deux creations (rate limiting fournisseur)
    bulk_import_delay_seconds: float = Field(default=0.5, ge=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/movieinfo.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("api_base_path")
    @classmethod
    def normalize_base_path(cls, v: str) -> str:
        """Force un chemin de base commençant par / et sans / final."""
        return "/" + v.strip("/")

    @property
    def is_production(self) -> bool:
        """Vérifie si l'application tourne en production."""
        return self.environment.lower() == "production"
