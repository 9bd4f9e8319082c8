"""
Normalisation des reponses fournisseurs vers la forme canonique.

Une fonction pure par fournisseur et par type de reponse. Toutes sont
totales : un champ absent, une sous-structure manquante ou un marqueur
"non disponible" donnent une valeur absente (None ou liste vide), jamais
une exception.
"""

from typing import Any, Optional

from src.core.ports.api_clients import ExternalMovieDetail, ExternalMovieSummary
from src.utils.constants import (
    MAX_CAST_MEMBERS,
    OMDB_NOT_AVAILABLE,
    TMDB_GENRE_MAPPING,
    TMDB_IMAGE_BASE_URL,
)
from src.utils.helpers import parse_int, parse_number, parse_year

TMDB_LABEL = "TMDB"
OMDB_LABEL = "OMDB"
RAPIDAPI_LABEL = "RapidAPI-IMDB"


# --- TMDB ---


def _tmdb_poster(poster_path: Optional[str]) -> Optional[str]:
    return f"{TMDB_IMAGE_BASE_URL}{poster_path}" if poster_path else None


def _positive_or_none(value: Any) -> Optional[float]:
    """TMDB renvoie 0 pour une duree ou un montant inconnu."""
    number = parse_number(value)
    return number if number else None


def tmdb_summary(item: dict[str, Any]) -> ExternalMovieSummary:
    """Normalise un element de /search/movie."""
    return ExternalMovieSummary(
        external_id=str(item.get("id", "")),
        title=item.get("title") or item.get("original_title") or "",
        release_year=parse_year(item.get("release_date")),
        description=item.get("overview") or None,
        rating=item.get("vote_average"),
        poster=_tmdb_poster(item.get("poster_path")),
        genre=[
            TMDB_GENRE_MAPPING[genre_id]
            for genre_id in item.get("genre_ids") or []
            if genre_id in TMDB_GENRE_MAPPING
        ],
        source=TMDB_LABEL,
    )


def tmdb_detail(data: dict[str, Any]) -> ExternalMovieDetail:
    """Normalise /movie/{id} avec append_to_response=credits,videos."""
    credits_data = data.get("credits") or {}

    # Premier membre de l'equipe credite comme realisateur
    director = next(
        (
            member.get("name")
            for member in credits_data.get("crew") or []
            if member.get("job") == "Director" and member.get("name")
        ),
        None,
    )

    cast = [
        actor["name"]
        for actor in (credits_data.get("cast") or [])[:MAX_CAST_MEMBERS]
        if actor.get("name")
    ]

    countries = data.get("production_countries") or []
    country = countries[0].get("name") if countries else None

    duration = _positive_or_none(data.get("runtime"))

    return ExternalMovieDetail(
        external_id=str(data.get("id", "")),
        title=data.get("title") or data.get("original_title") or "",
        release_year=parse_year(data.get("release_date")),
        description=data.get("overview") or None,
        rating=data.get("vote_average"),
        poster=_tmdb_poster(data.get("poster_path")),
        genre=[genre["name"] for genre in data.get("genres") or [] if genre.get("name")],
        director=director,
        cast=cast,
        duration=int(duration) if duration else None,
        budget=_positive_or_none(data.get("budget")),
        box_office=_positive_or_none(data.get("revenue")),
        language=data.get("original_language") or None,
        country=country,
        source=TMDB_LABEL,
    )


# --- OMDB ---


def _omdb(value: Any) -> Optional[str]:
    """Valeur OMDB, None si absente ou egale au marqueur N/A."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == OMDB_NOT_AVAILABLE:
        return None
    return text


def _omdb_list(value: Any) -> list[str]:
    text = _omdb(value)
    if text is None:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def omdb_summary(item: dict[str, Any]) -> ExternalMovieSummary:
    """Normalise un element de la recherche OMDB (parametre s)."""
    return ExternalMovieSummary(
        external_id=item.get("imdbID", ""),
        title=item.get("Title") or "",
        release_year=parse_year(_omdb(item.get("Year"))),
        poster=_omdb(item.get("Poster")),
        source=OMDB_LABEL,
    )


def omdb_detail(data: dict[str, Any]) -> ExternalMovieDetail:
    """Normalise la fiche OMDB (parametres i et plot=full)."""
    return ExternalMovieDetail(
        external_id=data.get("imdbID", ""),
        title=data.get("Title") or "",
        release_year=parse_year(_omdb(data.get("Year"))),
        description=_omdb(data.get("Plot")),
        rating=parse_number(_omdb(data.get("imdbRating"))),
        poster=_omdb(data.get("Poster")),
        genre=_omdb_list(data.get("Genre")),
        director=_omdb(data.get("Director")),
        cast=_omdb_list(data.get("Actors"))[:MAX_CAST_MEMBERS],
        duration=parse_int(_omdb(data.get("Runtime"))),
        box_office=parse_number(_omdb(data.get("BoxOffice"))),
        language=_omdb(data.get("Language")),
        country=_omdb(data.get("Country")),
        source=OMDB_LABEL,
    )


# --- RapidAPI (IMDb) ---


def rapidapi_summary(item: dict[str, Any]) -> ExternalMovieSummary:
    """Normalise un element de /searchMovies du proxy IMDb."""
    rating = item.get("rating")
    return ExternalMovieSummary(
        external_id=str(item.get("id", "")),
        title=item.get("title") or "",
        release_year=parse_year(item.get("year")),
        description=item.get("plot") or None,
        rating=parse_number(rating) if rating is not None else None,
        poster=item.get("image") or None,
        source=RAPIDAPI_LABEL,
    )
