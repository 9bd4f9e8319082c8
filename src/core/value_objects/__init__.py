"""
Objets valeur immutables representant des concepts du domaine sans identite.

Les objets valeur sont definis par leurs attributs plutot que par une identite.
Ils sont immutables et peuvent etre librement partages et compares par valeur.

Exports :
- MovieQuery : Filtres, tri et pagination d'un listing du catalogue
- Pagination : Metadonnees de pagination (total, pages, page suivante/precedente)
- SortField / SortOrder : Enumerations du tri
"""

from src.core.value_objects.movie_query import (
    MovieQuery,
    Pagination,
    SortField,
    SortOrder,
)

__all__ = [
    "MovieQuery",
    "Pagination",
    "SortField",
    "SortOrder",
]
