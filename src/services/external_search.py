"""
Service de recherche externe et moteur d'agregation multi-sources.

Dirige une recherche vers un fournisseur unique, ou interroge tous les
fournisseurs non exclus en parallele :
- chaque fournisseur produit un resultat etiquete (succes ou erreur)
- l'echec d'un fournisseur n'interrompt jamais les autres
- les resultats reussis sont concatenes puis dedoublonnes sur
  (titre en minuscules, annee), premiere occurrence conservee
"""

import asyncio
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from src.core.exceptions import UnsupportedSourceError
from src.core.ports.api_clients import (
    ExternalMovieDetail,
    ExternalMovieSummary,
    IMovieProvider,
    ProviderSearchResult,
)
from src.utils.helpers import title_key

# Alias acceptes dans le parametre source
SOURCE_ALIASES = {"imdb": "rapidapi"}
ALL_SOURCES = "all"


@dataclass
class SourceOutcome:
    """
    Resultat etiquete d'un fournisseur dans une recherche agregee.

    Exactement un des deux champs result / error est renseigne.
    """

    source: str
    result: Optional[ProviderSearchResult] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class AggregatedSearchResult:
    """Recherche multi-sources : resultat par source et liste combinee."""

    query: str
    outcomes: list[SourceOutcome] = field(default_factory=list)
    combined: list[ExternalMovieSummary] = field(default_factory=list)


def remove_duplicates(movies: Iterable[ExternalMovieSummary]) -> list[ExternalMovieSummary]:
    """
    Supprime les doublons (meme titre a la casse pres et meme annee).

    La premiere occurrence est conservee, l'ordre d'insertion est preserve.
    """
    unique: list[ExternalMovieSummary] = []
    seen: set[tuple[str, Optional[int]]] = set()

    for movie in movies:
        key = (title_key(movie.title), movie.release_year)
        if key not in seen:
            seen.add(key)
            unique.append(movie)

    return unique


class ExternalSearchService:
    """
    Point d'acces unique aux fournisseurs externes.

    Ne depend que de l'interface IMovieProvider ; les fournisseurs sont
    injectes sous forme de mapping source -> client, dans l'ordre
    d'agregation souhaite.
    """

    def __init__(self, providers: Mapping[str, IMovieProvider]) -> None:
        """
        Initialise le service.

        Args:
            providers: Clients indexes par identifiant de source ("tmdb", "omdb", "rapidapi")
        """
        self._providers = dict(providers)

    @property
    def sources(self) -> tuple[str, ...]:
        return tuple(self._providers)

    def provider(self, source: Optional[str]) -> IMovieProvider:
        """
        Resout une source (alias compris) vers son client.

        Raises:
            UnsupportedSourceError: Source inconnue
        """
        name = (source or "").strip().lower()
        name = SOURCE_ALIASES.get(name, name)
        client = self._providers.get(name)
        if client is None:
            raise UnsupportedSourceError(source, supported=self.sources)
        return client

    def detail_provider(self, source: Optional[str]) -> IMovieProvider:
        """
        Resout une source qui expose des fiches detaillees (import, synchronisation).

        Raises:
            UnsupportedSourceError: Source inconnue ou sans fiche detaillee
        """
        supported = tuple(name for name, client in self._providers.items() if client.supports_details)
        try:
            client = self.provider(source)
        except UnsupportedSourceError:
            raise UnsupportedSourceError(source, supported=supported) from None
        if not client.supports_details:
            raise UnsupportedSourceError(source, supported=supported)
        return client

    async def search(
        self,
        query: str,
        source: Optional[str] = None,
        page: int = 1,
        year: Optional[int] = None,
        exclude: Collection[str] = (),
    ) -> ProviderSearchResult | AggregatedSearchResult:
        """
        Recherche sur une source, ou sur toutes si source est absente ou "all".

        Args:
            query: Titre recherche
            source: Source cible, alias accepte
            page: Page (fournisseurs pagines uniquement)
            year: Annee (fournisseurs qui l'acceptent uniquement)
            exclude: Sources a ignorer en mode agrege
        """
        if not source or source.strip().lower() == ALL_SOURCES:
            return await self.search_all_sources(query, exclude=exclude)
        return await self.provider(source).search(query, page=page, year=year)

    async def get_details(self, source: Optional[str], external_id: str) -> ExternalMovieDetail:
        """Fiche detaillee d'un film chez un fournisseur."""
        return await self.detail_provider(source).get_details(external_id)

    async def _settle(self, source: str, client: IMovieProvider, query: str) -> SourceOutcome:
        """Execute une recherche et capture son echec sous forme de resultat."""
        try:
            return SourceOutcome(source=source, result=await client.search(query))
        except Exception as e:  # noqa: BLE001
            logger.warning(f"Recherche {source} en echec pour '{query}': {e}")
            return SourceOutcome(source=source, error=str(e))

    async def search_all_sources(
        self,
        query: str,
        exclude: Collection[str] = (),
    ) -> AggregatedSearchResult:
        """
        Interroge en parallele toutes les sources non exclues.

        Args:
            query: Titre recherche
            exclude: Identifiants de sources a ignorer (ex: {"rapidapi"})

        Returns:
            AggregatedSearchResult avec un resultat etiquete par source
            et la liste combinee dedoublonnee
        """
        excluded = {SOURCE_ALIASES.get(name.lower(), name.lower()) for name in exclude}
        targets = [(name, client) for name, client in self._providers.items() if name not in excluded]

        outcomes = list(
            await asyncio.gather(*(self._settle(name, client, query) for name, client in targets))
        )

        combined = [
            movie
            for outcome in outcomes
            if outcome.result is not None
            for movie in outcome.result.results
        ]

        logger.debug(
            f"Recherche agregee '{query}': "
            f"{sum(o.succeeded for o in outcomes)}/{len(outcomes)} sources, {len(combined)} resultats"
        )
        return AggregatedSearchResult(
            query=query,
            outcomes=outcomes,
            combined=remove_duplicates(combined),
        )
