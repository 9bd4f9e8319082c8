"""
Chargement d'un jeu de films d'exemple dans le catalogue.

Le fichier source est un tableau JSON de films aux cles camelCase
(meme forme que le corps de POST /movies).
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic.alias_generators import to_snake

from src.core.entities.movie import Movie, invariant_errors
from src.core.exceptions import MovieValidationError
from src.core.ports.repositories import IMovieRepository

_WRITABLE_FIELDS = frozenset(
    f.name for f in fields(Movie) if f.name not in ("id", "created_at", "updated_at")
)


@dataclass
class SeedReport:
    """Resultat d'un chargement."""

    cleared: int = 0
    inserted: int = 0


def movie_from_payload(payload: dict[str, Any]) -> Movie:
    """Construit un Movie depuis un objet JSON camelCase (cles inconnues ignorees)."""
    values = {to_snake(key): value for key, value in payload.items()}
    return Movie(**{name: value for name, value in values.items() if name in _WRITABLE_FIELDS})


class CatalogSeeder:
    """Remplit le catalogue a partir d'un fichier JSON."""

    def __init__(self, movie_repo: IMovieRepository) -> None:
        self._movie_repo = movie_repo

    def seed(self, source: Path, keep_existing: bool = False) -> SeedReport:
        """
        Charge les films du fichier.

        Args:
            source: Chemin du fichier JSON (tableau de films)
            keep_existing: Conserve les films deja presents au lieu de vider le catalogue

        Raises:
            ValueError: Le fichier ne contient pas un tableau JSON
            MovieValidationError: Un film du fichier est invalide (catalogue inchange)
        """
        payload = json.loads(source.read_text(encoding="utf-8"))
        if not isinstance(payload, list):
            raise ValueError(f"{source}: un tableau JSON de films est attendu")

        movies = [movie_from_payload(item) for item in payload]
        # Tout le fichier est verifie avant de toucher au catalogue
        errors = [
            f"Movie #{index} ({movie.title or '?'}): {message}"
            for index, movie in enumerate(movies, start=1)
            for message in invariant_errors(movie)
        ]
        if errors:
            raise MovieValidationError(errors)

        report = SeedReport()
        if not keep_existing:
            report.cleared = self._movie_repo.delete_all()
            logger.info(f"Catalogue vide ({report.cleared} films supprimes)")

        for movie in movies:
            self._movie_repo.create(movie)
            report.inserted += 1

        logger.info(f"{report.inserted} films inseres depuis {source}")
        return report
