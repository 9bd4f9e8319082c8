"""
Schemas pydantic de l'API REST.

Les corps de requete et de reponse utilisent des cles camelCase ;
les entites du domaine restent en snake_case.
"""

from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.core.entities.movie import (
    DEFAULT_LANGUAGE,
    DESCRIPTION_MAX_LENGTH,
    DIRECTOR_MAX_LENGTH,
    MIN_RELEASE_YEAR,
    TITLE_MAX_LENGTH,
    Movie,
    max_release_year,
)
from src.core.value_objects.movie_query import Pagination


class CamelModel(BaseModel):
    """Base des schemas : alias camelCase, noms Python acceptes en entree."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def _check_release_year(value: Optional[int]) -> Optional[int]:
    if value is not None and value > max_release_year():
        raise ValueError("Release year cannot be more than 5 years in the future")
    return value


class MovieCreate(CamelModel):
    """Corps de POST /movies."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    genre: list[str] = Field(min_length=1)
    director: str = Field(min_length=1, max_length=DIRECTOR_MAX_LENGTH)
    release_year: int = Field(ge=MIN_RELEASE_YEAR)
    rating: float = Field(default=0.0, ge=0, le=10)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    duration: Optional[int] = Field(default=None, ge=1)
    poster: Optional[str] = None
    cast: list[str] = Field(default_factory=list)
    language: Optional[str] = DEFAULT_LANGUAGE
    country: Optional[str] = None
    budget: Optional[float] = Field(default=None, ge=0)
    box_office: Optional[float] = Field(default=None, ge=0)

    @field_validator("release_year")
    @classmethod
    def check_release_year(cls, value: Optional[int]) -> Optional[int]:
        return _check_release_year(value)

    def to_entity(self) -> Movie:
        return Movie(**self.model_dump())


class MovieUpdate(CamelModel):
    """Corps de PUT /movies/{id} : seuls les champs fournis sont modifies."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    genre: Optional[list[str]] = Field(default=None, min_length=1)
    director: Optional[str] = Field(default=None, min_length=1, max_length=DIRECTOR_MAX_LENGTH)
    release_year: Optional[int] = Field(default=None, ge=MIN_RELEASE_YEAR)
    rating: Optional[float] = Field(default=None, ge=0, le=10)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    duration: Optional[int] = Field(default=None, ge=1)
    poster: Optional[str] = None
    cast: Optional[list[str]] = None
    language: Optional[str] = None
    country: Optional[str] = None
    budget: Optional[float] = Field(default=None, ge=0)
    box_office: Optional[float] = Field(default=None, ge=0)

    @field_validator("release_year")
    @classmethod
    def check_release_year(cls, value: Optional[int]) -> Optional[int]:
        return _check_release_year(value)

    def changes(self) -> dict[str, Any]:
        """Champs explicitement fournis par le client."""
        return self.model_dump(exclude_unset=True)


class MovieOut(CamelModel):
    """Representation publique d'un film."""

    id: str
    title: str
    genre: list[str]
    director: str
    release_year: int
    rating: float
    description: Optional[str] = None
    duration: Optional[int] = None
    poster: Optional[str] = None
    cast: list[str] = Field(default_factory=list)
    language: Optional[str] = None
    country: Optional[str] = None
    budget: Optional[float] = None
    box_office: Optional[float] = None
    external_ids: dict[str, str] = Field(default_factory=dict)
    age: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, movie: Movie) -> "MovieOut":
        return cls(**asdict(movie), age=movie.age)


class ImportRequest(CamelModel):
    source: Optional[str] = None
    external_id: Optional[str | int] = None
    overwrite: bool = False


class BulkImportRequest(CamelModel):
    search_query: Optional[str] = None
    source: str = "tmdb"
    limit: int = Field(default=10, ge=1, le=100)


class SyncRequest(CamelModel):
    source: str = "tmdb"


def camelize(value: Any) -> Any:
    """Convertit recursivement dataclasses et dicts vers des cles camelCase."""
    if is_dataclass(value) and not isinstance(value, type):
        value = asdict(value)
    if isinstance(value, dict):
        return {to_camel(key) if isinstance(key, str) else key: camelize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [camelize(item) for item in value]
    return value


def movie_payload(movie: Movie) -> dict[str, Any]:
    """Film serialise pour une reponse JSON."""
    return MovieOut.from_entity(movie).model_dump(mode="json", by_alias=True)


def pagination_payload(pagination: Pagination) -> dict[str, Any]:
    return {
        "page": pagination.page,
        "limit": pagination.limit,
        "total": pagination.total,
        "totalPages": pagination.total_pages,
        "hasNextPage": pagination.has_next_page,
        "hasPrevPage": pagination.has_prev_page,
    }


def envelope(
    data: Any = None,
    message: Optional[str] = None,
    success: bool = True,
    **extra: Any,
) -> dict[str, Any]:
    """Enveloppe commune {success, message?, data?, ...} de toutes les reponses."""
    body: dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    body.update(extra)
    if data is not None:
        body["data"] = data
    return body
