"""
Exceptions du domaine.

Chaque exception porte un sens metier independant du transport ;
la couche web les traduit en codes HTTP et en enveloppe de reponse.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from src.core.entities.movie import Movie


class MovieInfoError(Exception):
    """Classe de base des erreurs de l'application."""


class MovieValidationError(MovieInfoError):
    """
    Donnees de film invalides (absentes ou hors bornes).

    Attributes:
        errors: Messages d'erreur par champ
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


class MovieNotFoundError(MovieInfoError):
    """Film absent du catalogue local."""

    def __init__(self, movie_id: str) -> None:
        self.movie_id = movie_id
        super().__init__("Movie not found")


class MovieConflictError(MovieInfoError):
    """
    Import refuse : le film existe deja et l'ecrasement n'est pas demande.

    Attributes:
        existing: Le film deja present en base
    """

    def __init__(self, existing: "Movie") -> None:
        self.existing = existing
        super().__init__("Movie already exists in database")


class UnsupportedSourceError(MovieInfoError):
    """Source externe inconnue ou sans la capacite demandee."""

    def __init__(self, source: Optional[str], supported: tuple[str, ...] = ("tmdb", "omdb")) -> None:
        self.source = source
        self.supported = supported
        super().__init__(f"Unsupported source. Use: {', '.join(supported)}")


class ProviderError(MovieInfoError):
    """
    Echec d'un fournisseur externe (transport, HTTP, reponse inattendue).

    Attributes:
        source: Libelle du fournisseur (ex: "TMDB")
        detail: Message d'origine
    """

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"{source} API Error: {detail}")


class ProviderConfigurationError(ProviderError):
    """Cle API absente ou laissee a sa valeur d'exemple."""

    def __init__(self, source: str) -> None:
        super().__init__(source, f"{source} API key not configured")


class ProviderNotFoundError(ProviderError):
    """Le fournisseur signale explicitement l'absence du film."""


class ExternalMatchNotFoundError(MovieInfoError):
    """Aucun resultat fournisseur ne correspond exactement (titre, annee) au film local."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Movie not found in {source} API")
