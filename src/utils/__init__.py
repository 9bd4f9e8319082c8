"""
Utilitaires et constantes pour MovieInfo.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from src.utils.constants import (
    MAX_CAST_MEMBERS,
    OMDB_NOT_AVAILABLE,
    PLACEHOLDER_API_KEYS,
    TMDB_GENRE_MAPPING,
    TMDB_IMAGE_BASE_URL,
)

__all__ = [
    "MAX_CAST_MEMBERS",
    "OMDB_NOT_AVAILABLE",
    "PLACEHOLDER_API_KEYS",
    "TMDB_GENRE_MAPPING",
    "TMDB_IMAGE_BASE_URL",
]
