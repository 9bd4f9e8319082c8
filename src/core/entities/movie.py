"""
Movie catalog entity.

Entity representing a movie stored in the local catalog, with the
invariants every persisted record must satisfy.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

MIN_RELEASE_YEAR = 1888
MAX_YEARS_AHEAD = 5
TITLE_MAX_LENGTH = 200
DIRECTOR_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
DEFAULT_LANGUAGE = "English"


def max_release_year() -> int:
    """Derniere annee de sortie acceptee (annee courante + 5)."""
    return date.today().year + MAX_YEARS_AHEAD


def normalize_title(title: str) -> str:
    """Retire les espaces superflus et met la premiere lettre en majuscule."""
    title = title.strip()
    if not title:
        return title
    return title[0].upper() + title[1:]


@dataclass
class Movie:
    """
    Movie stored in the local catalog.

    Attributes:
        id: Store-assigned identifier (None until persisted)
        title: Display title, first character upper-cased on write
        genre: Ordered genre names (at least one)
        director: Director name
        release_year: Release year in [1888, current year + 5]
        rating: Rating in [0, 10]
        external_ids: Provider name -> provider identifier (e.g. {"tmdb": "438631"})
        created_at: Set by the store on creation
        updated_at: Refreshed by the store on every write
    """

    title: str = ""
    genre: list[str] = field(default_factory=list)
    director: str = ""
    release_year: Optional[int] = None
    rating: float = 0.0
    description: Optional[str] = None
    duration: Optional[int] = None
    poster: Optional[str] = None
    cast: list[str] = field(default_factory=list)
    language: Optional[str] = DEFAULT_LANGUAGE
    country: Optional[str] = None
    budget: Optional[float] = None
    box_office: Optional[float] = None
    external_ids: dict[str, str] = field(default_factory=dict)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def age(self) -> Optional[int]:
        """Age du film en annees (annee courante - annee de sortie)."""
        if self.release_year is None:
            return None
        return date.today().year - self.release_year


def invariant_errors(movie: Movie) -> list[str]:
    """
    Liste les violations d'invariants d'un film avant persistance.

    Returns:
        Messages d'erreur lisibles (liste vide si le film est valide)
    """
    errors: list[str] = []

    if not movie.title or not movie.title.strip():
        errors.append("Movie title is required")
    elif len(movie.title) > TITLE_MAX_LENGTH:
        errors.append(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")

    if not movie.genre or not any(g and g.strip() for g in movie.genre):
        errors.append("Movie must have at least one genre")

    if not movie.director or not movie.director.strip():
        errors.append("Director is required")
    elif len(movie.director) > DIRECTOR_MAX_LENGTH:
        errors.append(f"Director name cannot exceed {DIRECTOR_MAX_LENGTH} characters")

    if movie.release_year is None:
        errors.append("Release year is required")
    elif movie.release_year < MIN_RELEASE_YEAR:
        errors.append(f"Release year must be after {MIN_RELEASE_YEAR}")
    elif movie.release_year > max_release_year():
        errors.append("Release year cannot be more than 5 years in the future")

    if movie.rating is not None and not 0 <= movie.rating <= 10:
        errors.append("Rating must be between 0 and 10")

    if movie.description and len(movie.description) > DESCRIPTION_MAX_LENGTH:
        errors.append(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

    if movie.duration is not None and movie.duration < 1:
        errors.append("Duration must be at least 1 minute")

    if movie.budget is not None and movie.budget < 0:
        errors.append("Budget cannot be negative")

    if movie.box_office is not None and movie.box_office < 0:
        errors.append("Box office cannot be negative")

    return errors
