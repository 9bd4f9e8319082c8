"""
Client TMDB pour la recherche et recuperation de metadonnees films.

Implemente l'interface IMovieProvider pour TMDB (The Movie Database).
Utilise le cache partage : chaque resultat est mis en cache sous une cle
construite a partir de tous les parametres effectifs.

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_key", cache=cache)
    results = await client.search("Dune", page=1)
    details = await client.get_details("438631")
    await client.close()
"""

from typing import Any, Optional

from src.adapters.api.base_client import BaseProviderClient
from src.adapters.api.cache import APICache
from src.adapters.api.normalizers import TMDB_LABEL, tmdb_detail, tmdb_summary
from src.core.ports.api_clients import ExternalMovieDetail, ProviderSearchResult


class TMDBClient(BaseProviderClient):
    """
    Client API TMDB pour les metadonnees de films.

    Implemente IMovieProvider avec:
    - Recherche de films par titre, paginee
    - Recuperation des details complets (credits et videos inclus)
    - Cache partage (1h par defaut)

    L'annee n'est pas transmise a TMDB : la recherche porte sur le titre seul.

    Example:
        cache = APICache()
        client = TMDBClient(api_key="xxx", cache=cache)

        results = await client.search("Inception")
        if results.results:
            details = await client.get_details(results.results[0].external_id)
            print(f"{details.title} ({details.release_year}) - {details.genre}")

        await client.close()
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    LANGUAGE = "en-US"

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        base_url: str = TMDB_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(api_key=api_key, cache=cache, base_url=base_url, timeout=timeout)

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    @property
    def label(self) -> str:
        return TMDB_LABEL

    def _client_options(self) -> dict[str, Any]:
        # API Key v3 : passee en parametre de requete
        return {"params": {"api_key": self._api_key}}

    async def search(
        self,
        query: str,
        page: int = 1,
        year: Optional[int] = None,
    ) -> ProviderSearchResult:
        """
        Recherche des films par titre.

        Args:
            query: Titre du film a rechercher
            page: Page de resultats TMDB
            year: Ignore (TMDB est interroge sur le titre seul)

        Returns:
            ProviderSearchResult avec les compteurs de pagination TMDB
        """

        async def fetch() -> ProviderSearchResult:
            data = await self._get_json(
                "/search/movie",
                params={"query": query, "page": page, "language": self.LANGUAGE},
            )
            return ProviderSearchResult(
                source=self.label,
                results=[tmdb_summary(item) for item in data.get("results") or []],
                total_results=data.get("total_results"),
                total_pages=data.get("total_pages"),
                page=data.get("page"),
            )

        return await self._cached(f"tmdb:search:{query}:{page}", fetch)

    async def get_details(self, external_id: str) -> ExternalMovieDetail:
        """
        Recupere les details complets d'un film.

        Args:
            external_id: ID TMDB du film

        Returns:
            ExternalMovieDetail avec realisateur, distribution et chiffres

        Raises:
            ProviderNotFoundError: ID inconnu de TMDB
        """

        async def fetch() -> ExternalMovieDetail:
            data = await self._get_json(
                f"/movie/{external_id}",
                params={"language": self.LANGUAGE, "append_to_response": "credits,videos"},
            )
            return tmdb_detail(data)

        return await self._cached(f"tmdb:details:{external_id}", fetch)
