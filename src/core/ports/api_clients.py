"""
Interfaces ports pour les fournisseurs de métadonnées de films.

Interfaces abstraites (ports) définissant le contrat commun des fournisseurs externes
et la forme canonique de leurs résultats. Les implémentations (adaptateurs) fournissent
les clients concrets (TMDB, OMDB, RapidAPI IMDb).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ExternalMovieSummary:
    """
    Résultat de recherche normalisé depuis un fournisseur.

    Attributs :
        external_id : ID spécifique au fournisseur (ID TMDB, ID IMDb...)
        title : Titre renvoyé par le fournisseur
        release_year : Année de sortie, None si inconnue
        description : Résumé, None si non fourni
        rating : Note sur 10, None si inconnue
        poster : URL complète du poster
        genre : Noms de genre
        source : Libellé du fournisseur ("TMDB", "OMDB", "RapidAPI-IMDB")
    """

    external_id: str
    title: str
    release_year: Optional[int] = None
    description: Optional[str] = None
    rating: Optional[float] = None
    poster: Optional[str] = None
    genre: list[str] = field(default_factory=list)
    source: str = ""


@dataclass
class ExternalMovieDetail(ExternalMovieSummary):
    """
    Informations détaillées normalisées depuis un fournisseur.

    Utilisées pour créer ou enrichir un film du catalogue local.
    Les champs absents chez le fournisseur restent à None.
    """

    director: Optional[str] = None
    cast: list[str] = field(default_factory=list)
    duration: Optional[int] = None
    budget: Optional[float] = None
    box_office: Optional[float] = None
    language: Optional[str] = None
    country: Optional[str] = None


@dataclass
class ProviderSearchResult:
    """
    Enveloppe d'une recherche sur un fournisseur.

    Les compteurs sont renseignés seulement quand le fournisseur les expose.
    """

    source: str
    results: list[ExternalMovieSummary] = field(default_factory=list)
    total_results: Optional[int] = None
    total_pages: Optional[int] = None
    page: Optional[int] = None


class IMovieProvider(ABC):
    """
    Interface commune des fournisseurs de métadonnées de films.

    Le moteur d'agrégation et l'orchestrateur d'import ne dépendent que
    de ce contrat, jamais des clients concrets.
    """

    @abstractmethod
    async def search(
        self,
        query: str,
        page: int = 1,
        year: Optional[int] = None,
    ) -> ProviderSearchResult:
        """
        Recherche des films par titre.

        Args :
            query : Titre recherché
            page : Page de résultats (ignorée si le fournisseur ne pagine pas)
            year : Filtre par année (ignoré si le fournisseur ne l'accepte pas)

        Retourne :
            Enveloppe de résultats normalisés
        """
        ...

    @abstractmethod
    async def get_details(self, external_id: str) -> ExternalMovieDetail:
        """
        Récupère les informations détaillées d'un film.

        Args :
            external_id : ID spécifique au fournisseur

        Retourne :
            Détail normalisé

        Lève :
            ProviderNotFoundError si le fournisseur ne connaît pas ce film
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source (ex: 'tmdb', 'omdb')."""
        ...

    @property
    def label(self) -> str:
        """Libellé affiché dans les résultats et les messages d'erreur."""
        return self.source.upper()

    @property
    def supports_details(self) -> bool:
        """Indique si le fournisseur expose une fiche détaillée."""
        return True

    async def close(self) -> None:
        """Libère les ressources réseau du client."""
