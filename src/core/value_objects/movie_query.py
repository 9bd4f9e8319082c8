"""
Objets valeur pour la consultation du catalogue.

- MovieQuery : filtres, tri et pagination demandes par un client REST
- Pagination : metadonnees de pagination calculees a partir du total
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SortField(str, Enum):
    """Champs autorises pour le tri du catalogue."""

    TITLE = "title"
    RELEASE_YEAR = "releaseYear"
    RATING = "rating"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    """Sens du tri."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class MovieQuery:
    """
    Requete de listing du catalogue.

    Attributs :
        search : Termes recherches dans le titre et la description
        genre : Sous-chaine (insensible a la casse) d'un des genres
        director : Sous-chaine (insensible a la casse) du realisateur
        release_year : Annee de sortie exacte
        min_rating / max_rating : Bornes inclusives sur la note
        sort_by / sort_order : Tri (defaut : createdAt descendant)
        page / limit : Pagination 1-indexee
    """

    search: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    release_year: Optional[int] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = 10

    @property
    def skip(self) -> int:
        """Nombre d'elements a sauter avant la page demandee."""
        return (self.page - 1) * self.limit

    @property
    def search_terms(self) -> list[str]:
        """Termes de recherche non vides."""
        if not self.search:
            return []
        return [term for term in self.search.split() if term]


@dataclass(frozen=True)
class Pagination:
    """Metadonnees de pagination d'un listing."""

    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1
