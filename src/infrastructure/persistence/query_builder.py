"""
Traduction d'une MovieQuery en clauses SQL.

- search : chaque terme est cherche (insensible a la casse) dans le titre
  et la description ; un film correspond si au moins un terme est trouve
- genre : sous-chaine d'au moins un element de la liste des genres (json_each)
- director : sous-chaine insensible a la casse
- release_year : egalite stricte
- min_rating / max_rating : bornes inclusives

Les caracteres % et _ saisis par le client sont recherches litteralement.
"""

from typing import Any

from sqlalchemy import ColumnElement, and_, func, or_
from sqlmodel import col, select

from src.core.value_objects.movie_query import MovieQuery, SortField, SortOrder
from src.infrastructure.persistence.models import MovieModel

_SORT_COLUMNS = {
    SortField.TITLE: MovieModel.title,
    SortField.RELEASE_YEAR: MovieModel.release_year,
    SortField.RATING: MovieModel.rating,
    SortField.CREATED_AT: MovieModel.created_at,
}


def _contains(column: Any, text: str) -> ColumnElement[bool]:
    return col(column).icontains(text, autoescape=True)


def genre_condition(genre: str) -> ColumnElement[bool]:
    """Vrai si au moins un genre du film contient la sous-chaine."""
    genre_values = func.json_each(MovieModel.genres_json).table_valued("value")
    return (
        select(genre_values.c.value)
        .where(genre_values.c.value.icontains(genre, autoescape=True))
        .exists()
    )


def build_filters(query: MovieQuery) -> list[ColumnElement[bool]]:
    """Construit les conditions WHERE correspondant aux filtres de la requete."""
    conditions: list[ColumnElement[bool]] = []

    terms = query.search_terms
    if terms:
        conditions.append(
            or_(*(
                or_(_contains(MovieModel.title, term), _contains(MovieModel.description, term))
                for term in terms
            ))
        )

    if query.genre:
        conditions.append(genre_condition(query.genre))

    if query.director:
        conditions.append(_contains(MovieModel.director, query.director))

    if query.release_year is not None:
        conditions.append(col(MovieModel.release_year) == query.release_year)

    rating_bounds = []
    if query.min_rating is not None:
        rating_bounds.append(col(MovieModel.rating) >= query.min_rating)
    if query.max_rating is not None:
        rating_bounds.append(col(MovieModel.rating) <= query.max_rating)
    if rating_bounds:
        conditions.append(and_(*rating_bounds))

    return conditions


def build_order_by(query: MovieQuery) -> list[Any]:
    """Tri demande, departage par ID pour une pagination stable."""
    column = col(_SORT_COLUMNS[query.sort_by])
    id_column = col(MovieModel.id)
    if query.sort_order == SortOrder.ASC:
        return [column.asc(), id_column.asc()]
    return [column.desc(), id_column.desc()]
