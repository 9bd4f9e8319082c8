"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Port repository : Contrat de persistance du catalogue
- IMovieRepository : Stockage des films

Ports fournisseurs : Contrats pour les services externes
- IMovieProvider : Interface commune des fournisseurs de métadonnées
- ExternalMovieSummary / ExternalMovieDetail : Formes canoniques normalisées
- ProviderSearchResult : Enveloppe d'une recherche sur un fournisseur
"""

from src.core.ports.repositories import IMovieRepository
from src.core.ports.api_clients import (
    ExternalMovieDetail,
    ExternalMovieSummary,
    IMovieProvider,
    ProviderSearchResult,
)

__all__ = [
    # Repositories
    "IMovieRepository",
    # Fournisseurs
    "IMovieProvider",
    "ExternalMovieSummary",
    "ExternalMovieDetail",
    "ProviderSearchResult",
]
