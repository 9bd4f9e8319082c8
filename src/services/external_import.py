"""
Service d'import et de synchronisation depuis les fournisseurs externes.

Trois operations, toutes basees sur le meme controle d'existence :
- import unitaire : creation, conflit, ou ecrasement sur demande
- import en masse : recherche puis creation sequentielle avec pause
- synchronisation : rafraichit un film local depuis sa correspondance exacte
"""

import asyncio
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

from loguru import logger

from src.core.entities.movie import Movie, normalize_title
from src.core.exceptions import (
    ExternalMatchNotFoundError,
    MovieConflictError,
    MovieNotFoundError,
)
from src.core.ports.api_clients import ExternalMovieDetail
from src.core.ports.repositories import IMovieRepository
from src.services.external_search import ExternalSearchService
from src.utils.helpers import title_key

# Realisateur impose par le catalogue quand le fournisseur n'en donne pas
UNKNOWN_DIRECTOR = "Unknown"
SKIP_REASON_EXISTS = "Already exists"

_MOVIE_FIELDS = frozenset(f.name for f in fields(Movie))
_SOURCE_ONLY_FIELDS = frozenset({"external_id", "source"})


def detail_to_fields(detail: ExternalMovieDetail) -> dict[str, Any]:
    """
    Convertit une fiche fournisseur en champs de l'entite Movie.

    Les champs propres au fournisseur (ID, libelle) sont retires, ainsi
    que les valeurs absentes : elles n'ecrasent jamais une valeur locale.
    """
    values: dict[str, Any] = {}
    for f in fields(detail):
        if f.name in _SOURCE_ONLY_FIELDS or f.name not in _MOVIE_FIELDS:
            continue
        value = getattr(detail, f.name)
        if value is None or value == []:
            continue
        values[f.name] = list(value) if isinstance(value, list) else value
    return values


@dataclass
class ImportedItem:
    title: str
    id: Optional[str]


@dataclass
class SkippedItem:
    title: str
    reason: str


@dataclass
class FailedItem:
    title: str
    error: str


@dataclass
class BulkImportReport:
    """Bilan d'un import en masse, chaque film tente figure dans une liste."""

    successful: list[ImportedItem] = field(default_factory=list)
    skipped: list[SkippedItem] = field(default_factory=list)
    failed: list[FailedItem] = field(default_factory=list)

    @property
    def summary(self) -> str:
        return (
            f"Bulk import completed. {len(self.successful)} imported, "
            f"{len(self.skipped)} skipped, {len(self.failed)} failed"
        )


class ExternalImportService:
    """
    Orchestrateur d'import depuis les fournisseurs vers le catalogue local.

    Le repository est propre a la requete (session fraiche) ; le service de
    recherche et ses clients sont partages par le processus.
    """

    def __init__(
        self,
        movie_repo: IMovieRepository,
        search_service: ExternalSearchService,
        delay_seconds: float = 0.5,
    ) -> None:
        """
        Initialise l'orchestrateur.

        Args:
            movie_repo: Repository des films
            search_service: Acces aux fournisseurs externes
            delay_seconds: Pause entre deux creations d'un import en masse
        """
        self._movie_repo = movie_repo
        self._search = search_service
        self._delay_seconds = delay_seconds

    async def import_movie(
        self,
        source: str,
        external_id: str,
        overwrite: bool = False,
    ) -> tuple[Movie, bool]:
        """
        Importe un film depuis un fournisseur.

        Args:
            source: Fournisseur ("tmdb", "omdb")
            external_id: ID du film chez le fournisseur
            overwrite: Fusionne la fiche sur un film deja present au lieu d'echouer

        Returns:
            Tuple (film persiste, True si cree / False si mis a jour)

        Raises:
            UnsupportedSourceError: Fournisseur sans fiche detaillee
            MovieConflictError: Film deja present et overwrite a False
        """
        provider = self._search.detail_provider(source)
        detail = await provider.get_details(external_id)
        values = detail_to_fields(detail)
        title = normalize_title(values.get("title", ""))

        existing = self._movie_repo.find_existing(
            title,
            values.get("release_year"),
            source=provider.source,
            external_id=str(external_id),
        )

        if existing is not None:
            if not overwrite:
                raise MovieConflictError(existing)
            merged = replace(existing, **values)
            merged.external_ids = {**existing.external_ids, provider.source: str(external_id)}
            movie = self._movie_repo.save(merged)
            logger.info(f"Film mis a jour depuis {provider.label}: {movie.title} (id={movie.id})")
            return movie, False

        values.setdefault("director", UNKNOWN_DIRECTOR)
        movie = self._movie_repo.create(
            Movie(**values, external_ids={provider.source: str(external_id)})
        )
        logger.info(f"Film importe depuis {provider.label}: {movie.title} (id={movie.id})")
        return movie, True

    async def bulk_import(
        self,
        search_query: str,
        source: str = "tmdb",
        limit: int = 10,
    ) -> BulkImportReport:
        """
        Importe les premiers resultats d'une recherche, un film a la fois.

        L'existence n'est controlee que par (titre, annee). Une pause est
        inseree entre deux creations successives. L'echec d'un film est
        consigne dans le bilan et n'interrompt pas le lot.

        Raises:
            UnsupportedSourceError: Fournisseur sans fiche detaillee
            ProviderError: Echec de la recherche initiale
        """
        provider = self._search.detail_provider(source)
        search_result = await provider.search(search_query)
        candidates = search_result.results[: max(limit, 0)]

        report = BulkImportReport()
        created = 0

        for summary in candidates:
            try:
                detail = await provider.get_details(summary.external_id)
                values = detail_to_fields(detail)
                title = normalize_title(values.get("title", ""))

                if self._movie_repo.find_existing(title, values.get("release_year")) is not None:
                    report.skipped.append(SkippedItem(title=title, reason=SKIP_REASON_EXISTS))
                    continue

                # Rate limiting (sauf premiere creation)
                if created and self._delay_seconds > 0:
                    await asyncio.sleep(self._delay_seconds)

                values.setdefault("director", UNKNOWN_DIRECTOR)
                movie = self._movie_repo.create(
                    Movie(**values, external_ids={provider.source: str(summary.external_id)})
                )
                created += 1
                report.successful.append(ImportedItem(title=movie.title, id=movie.id))
            except Exception as e:  # noqa: BLE001
                logger.warning(f"Import de '{summary.title}' en echec: {e}")
                report.failed.append(FailedItem(title=summary.title, error=str(e)))

        logger.info(f"Import en masse '{search_query}' ({provider.label}): {report.summary}")
        return report

    async def sync_movie(self, movie_id: str, source: str = "tmdb") -> Movie:
        """
        Synchronise un film local avec sa fiche chez un fournisseur.

        La correspondance exige le meme titre (casse ignoree) et la meme annee.
        L'ID et la date de creation du film local sont conserves.

        Raises:
            MovieNotFoundError: Film local absent
            UnsupportedSourceError: Fournisseur sans fiche detaillee
            ExternalMatchNotFoundError: Aucun resultat correspondant chez le fournisseur
        """
        movie = self._movie_repo.get_by_id(movie_id)
        if movie is None:
            raise MovieNotFoundError(movie_id)

        provider = self._search.detail_provider(source)
        search_result = await provider.search(movie.title, year=movie.release_year)

        match = next(
            (
                result
                for result in search_result.results
                if title_key(result.title) == title_key(movie.title)
                and result.release_year == movie.release_year
            ),
            None,
        )
        if match is None:
            raise ExternalMatchNotFoundError(provider.label)

        detail = await provider.get_details(match.external_id)
        synced = replace(
            movie,
            **detail_to_fields(detail),
            id=movie.id,
            created_at=movie.created_at,
        )
        synced.external_ids = {**movie.external_ids, provider.source: str(match.external_id)}

        saved = self._movie_repo.save(synced)
        logger.info(f"Film synchronise avec {provider.label}: {saved.title} (id={saved.id})")
        return saved
