"""
Client OMDB pour les resumes complets et les notes IMDb.

Implemente IMovieProvider pour OMDB (Open Movie Database). OMDB repond
HTTP 200 meme en cas d'echec : le champ Response == "False" signale
l'erreur, convertie ici en ProviderNotFoundError.
"""

from typing import Any, Optional

from src.adapters.api.base_client import BaseProviderClient
from src.adapters.api.cache import APICache
from src.adapters.api.normalizers import OMDB_LABEL, omdb_detail, omdb_summary
from src.core.exceptions import ProviderNotFoundError
from src.core.ports.api_clients import ExternalMovieDetail, ProviderSearchResult
from src.utils.helpers import parse_int


class OMDBClient(BaseProviderClient):
    """
    Client API OMDB.

    - Recherche par titre, annee optionnelle et type (movie par defaut)
    - Fiche detaillee par ID IMDb avec resume complet
    """

    OMDB_BASE_URL = "http://www.omdbapi.com"

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        base_url: str = OMDB_BASE_URL,
        timeout: float = 30.0,
        media_type: str = "movie",
    ) -> None:
        super().__init__(api_key=api_key, cache=cache, base_url=base_url, timeout=timeout)
        self._media_type = media_type

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "omdb"

    @property
    def label(self) -> str:
        return OMDB_LABEL

    def _client_options(self) -> dict[str, Any]:
        return {"params": {"apikey": self._api_key}}

    async def _query(self, params: dict[str, Any]) -> dict[str, Any]:
        """Appelle OMDB et traduit Response == "False" en erreur."""
        data = await self._get_json("/", params=params)
        if data.get("Response") == "False":
            raise ProviderNotFoundError(self.label, data.get("Error") or "Movie not found")
        return data

    async def search(
        self,
        query: str,
        page: int = 1,
        year: Optional[int] = None,
    ) -> ProviderSearchResult:
        """
        Recherche des films par titre.

        Args:
            query: Titre recherche
            page: Ignore (premiere page OMDB uniquement)
            year: Annee de sortie optionnelle

        Raises:
            ProviderNotFoundError: Aucun resultat ("Movie not found!")
        """
        media_type = self._media_type

        async def fetch() -> ProviderSearchResult:
            params: dict[str, Any] = {"s": query, "type": media_type}
            if year:
                params["y"] = year
            data = await self._query(params)
            return ProviderSearchResult(
                source=self.label,
                results=[omdb_summary(item) for item in data.get("Search") or []],
                total_results=parse_int(data.get("totalResults")),
            )

        return await self._cached(f"omdb:search:{query}:{year}:{media_type}", fetch)

    async def get_details(self, external_id: str) -> ExternalMovieDetail:
        """
        Recupere la fiche complete d'un film par son ID IMDb.

        Raises:
            ProviderNotFoundError: ID inconnu ("Incorrect IMDb ID.")
        """

        async def fetch() -> ExternalMovieDetail:
            data = await self._query({"i": external_id, "plot": "full"})
            return omdb_detail(data)

        return await self._cached(f"omdb:details:{external_id}", fetch)
