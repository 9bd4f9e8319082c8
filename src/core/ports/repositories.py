"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance du catalogue.
Les implémentations (adaptateurs) fournissent le stockage concret
(SQLite via SQLModel, en mémoire pour les tests, etc.).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from src.core.entities.movie import Movie
from src.core.value_objects.movie_query import MovieQuery


class IMovieRepository(ABC):
    """
    Interface de stockage du catalogue de films.

    Toute écriture normalise le titre et vérifie les invariants du film ;
    une violation lève MovieValidationError.
    """

    @abstractmethod
    def list_movies(self, query: MovieQuery) -> tuple[list[Movie], int]:
        """Retourne la page demandée et le nombre total de films correspondants."""
        ...

    @abstractmethod
    def get_by_id(self, movie_id: str) -> Optional[Movie]:
        """Récupère un film par son ID interne."""
        ...

    @abstractmethod
    def create(self, movie: Movie) -> Movie:
        """Insère un nouveau film et retourne la version persistée."""
        ...

    @abstractmethod
    def update(self, movie_id: str, changes: dict[str, Any]) -> Optional[Movie]:
        """Applique une mise à jour partielle. Retourne None si absent."""
        ...

    @abstractmethod
    def save(self, movie: Movie) -> Movie:
        """Remplace l'état complet d'un film existant (identifié par movie.id)."""
        ...

    @abstractmethod
    def delete(self, movie_id: str) -> bool:
        """Supprime un film par ID. Retourne True si supprimé."""
        ...

    @abstractmethod
    def find_existing(
        self,
        title: str,
        release_year: Optional[int],
        source: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> Optional[Movie]:
        """
        Cherche un film déjà importé.

        Correspondance sur (titre sans tenir compte de la casse, année exacte),
        ou sur externalIds[source] quand source et external_id sont fournis.
        """
        ...

    @abstractmethod
    def stats(self) -> dict[str, Any]:
        """Statistiques agrégées : vue d'ensemble et genres les plus fréquents."""
        ...

    @abstractmethod
    def delete_all(self) -> int:
        """Vide le catalogue. Retourne le nombre de films supprimés."""
        ...
