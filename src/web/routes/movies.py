"""
Routes CRUD du catalogue de films.

Listing filtre et pagine, fiche, creation, mise a jour partielle,
suppression et statistiques agregees.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError

from ...core.entities.movie import MIN_RELEASE_YEAR, max_release_year
from ...core.exceptions import MovieNotFoundError
from ...core.ports.repositories import IMovieRepository
from ...core.value_objects.movie_query import MovieQuery, Pagination, SortField, SortOrder
from ..deps import get_movie_repository
from ..schemas import (
    MovieCreate,
    MovieUpdate,
    camelize,
    envelope,
    movie_payload,
    pagination_payload,
)

router = APIRouter(prefix="/movies", tags=["movies"])

MAX_PAGE_SIZE = 100

Repository = Annotated[IMovieRepository, Depends(get_movie_repository)]


@router.get("")
def list_movies(
    movie_repo: Repository,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = 10,
    search: Optional[str] = None,
    genre: Optional[str] = None,
    director: Optional[str] = None,
    release_year: Annotated[Optional[int], Query(alias="releaseYear", ge=MIN_RELEASE_YEAR)] = None,
    min_rating: Annotated[Optional[float], Query(alias="minRating", ge=0, le=10)] = None,
    max_rating: Annotated[Optional[float], Query(alias="maxRating", ge=0, le=10)] = None,
    sort_by: Annotated[SortField, Query(alias="sortBy")] = SortField.CREATED_AT,
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.DESC,
):
    """Liste les films avec recherche, filtres, tri et pagination."""
    if release_year is not None and release_year > max_release_year():
        raise RequestValidationError([
            {
                "loc": ("query", "releaseYear"),
                "msg": "Release year cannot be more than 5 years in the future",
                "type": "value_error",
            }
        ])

    query = MovieQuery(
        search=search.strip() if search else None,
        genre=genre.strip() if genre else None,
        director=director.strip() if director else None,
        release_year=release_year,
        min_rating=min_rating,
        max_rating=max_rating,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    movies, total = movie_repo.list_movies(query)
    pagination = Pagination(page=page, limit=limit, total=total)

    return envelope(
        count=len(movies),
        pagination=pagination_payload(pagination),
        data=[movie_payload(movie) for movie in movies],
    )


# Declaree avant /{movie_id} pour ne pas etre capturee comme un ID
@router.get("/stats")
def movie_stats(movie_repo: Repository):
    """Statistiques globales et genres les plus representes."""
    stats = movie_repo.stats()
    return envelope(
        data={
            "overview": camelize(stats["overview"]),
            "topGenres": stats["top_genres"],
        }
    )


@router.get("/{movie_id}")
def get_movie(movie_id: str, movie_repo: Repository):
    movie = movie_repo.get_by_id(movie_id)
    if movie is None:
        raise MovieNotFoundError(movie_id)
    return envelope(data=movie_payload(movie))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_movie(payload: MovieCreate, movie_repo: Repository):
    movie = movie_repo.create(payload.to_entity())
    return envelope(message="Movie created successfully", data=movie_payload(movie))


@router.put("/{movie_id}")
def update_movie(movie_id: str, payload: MovieUpdate, movie_repo: Repository):
    """Mise a jour partielle : seuls les champs fournis sont modifies."""
    movie = movie_repo.update(movie_id, payload.changes())
    if movie is None:
        raise MovieNotFoundError(movie_id)
    return envelope(message="Movie updated successfully", data=movie_payload(movie))


@router.delete("/{movie_id}")
def delete_movie(movie_id: str, movie_repo: Repository):
    if not movie_repo.delete(movie_id):
        raise MovieNotFoundError(movie_id)
    return envelope(message="Movie deleted successfully", data={})
