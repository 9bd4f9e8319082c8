"""
Client du proxy IMDb heberge sur RapidAPI.

Fournisseur de recherche generique : pas de fiche detaillee, authentification
par la paire de headers X-RapidAPI-Key / X-RapidAPI-Host.
"""

from typing import Any, Optional

from src.adapters.api.base_client import BaseProviderClient
from src.adapters.api.cache import APICache
from src.adapters.api.normalizers import RAPIDAPI_LABEL, rapidapi_summary
from src.core.exceptions import UnsupportedSourceError
from src.core.ports.api_clients import ExternalMovieDetail, ProviderSearchResult


class RapidAPIClient(BaseProviderClient):
    """Client de recherche IMDb via RapidAPI."""

    RAPIDAPI_BASE_URL = "https://imdb-api1.p.rapidapi.com"
    RAPIDAPI_HOST = "imdb-api1.p.rapidapi.com"

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        base_url: str = RAPIDAPI_BASE_URL,
        host: str = RAPIDAPI_HOST,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(api_key=api_key, cache=cache, base_url=base_url, timeout=timeout)
        self._host = host

    @property
    def source(self) -> str:
        return "rapidapi"

    @property
    def label(self) -> str:
        return RAPIDAPI_LABEL

    @property
    def is_configured(self) -> bool:
        # La paire cle + host est requise
        return super().is_configured and bool(self._host)

    @property
    def supports_details(self) -> bool:
        return False

    def _client_options(self) -> dict[str, Any]:
        return {
            "headers": {
                "X-RapidAPI-Key": self._api_key or "",
                "X-RapidAPI-Host": self._host,
            }
        }

    async def search(
        self,
        query: str,
        page: int = 1,
        year: Optional[int] = None,
    ) -> ProviderSearchResult:
        """
        Recherche des films par titre (page et annee ignorees).

        Une reponse sans tableau results est un ensemble vide, pas une erreur.
        """

        async def fetch() -> ProviderSearchResult:
            data = await self._get_json("/searchMovies", params={"query": query})
            items = data.get("results") if isinstance(data, dict) else None
            return ProviderSearchResult(
                source=self.label,
                results=[rapidapi_summary(item) for item in items or []],
            )

        return await self._cached(f"rapidapi:search:{query}", fetch)

    async def get_details(self, external_id: str) -> ExternalMovieDetail:
        raise UnsupportedSourceError(self.source)
