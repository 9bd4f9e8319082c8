"""
Constantes globales pour MovieInfo.

Ce module contient les constantes partagees :
- Valeurs d'exemple des cles API (equivalent a une cle absente)
- Marqueur OMDB "non disponible"
- URL de base des posters TMDB
- Mapping des IDs de genre TMDB vers noms anglais
- Limite de la distribution conservee
"""

# Valeurs livrees dans les fichiers .env d'exemple, traitees comme non configurees
PLACEHOLDER_API_KEYS = frozenset({
    "your_tmdb_api_key_here",
    "your_omdb_api_key_here",
    "your_rapidapi_key_here",
})

# OMDB renvoie cette chaine pour tout champ inconnu
OMDB_NOT_AVAILABLE = "N/A"

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"

# Nombre maximum d'acteurs conserves dans une fiche detaillee
MAX_CAST_MEMBERS = 10

# Mapping des IDs de genre TMDB (films) vers noms anglais
# Source: https://api.themoviedb.org/3/genre/movie/list?language=en-US
TMDB_GENRE_MAPPING = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}
