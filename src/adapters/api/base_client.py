"""
Socle commun des clients fournisseurs.

Factorise ce que TMDB, OMDB et RapidAPI font de la meme facon :
- client httpx cree paresseusement et reutilise
- verification de la cle API avant tout appel reseau
- pattern cache-first (lecture du cache, sinon appel puis ecriture)
- conversion des erreurs httpx en ProviderError, journalisees
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx
from loguru import logger

from src.adapters.api.cache import APICache
from src.core.exceptions import (
    ProviderConfigurationError,
    ProviderError,
    ProviderNotFoundError,
)
from src.core.ports.api_clients import IMovieProvider
from src.utils.constants import PLACEHOLDER_API_KEYS

T = TypeVar("T")


class BaseProviderClient(IMovieProvider):
    """
    Client HTTP de base pour un fournisseur de metadonnees.

    Les sous-classes definissent source, label, _client_options()
    et les appels search/get_details.
    """

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        base_url: str,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client.

        Args:
            api_key: Cle API du fournisseur (None si non configuree)
            cache: Instance APICache partagee par tous les clients
            base_url: URL de base de l'API
            timeout: Timeout HTTP en secondes
        """
        self._api_key = api_key
        self._cache = cache
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_configured(self) -> bool:
        """Vrai si une cle API reelle est disponible."""
        return bool(self._api_key) and self._api_key not in PLACEHOLDER_API_KEYS

    def _client_options(self) -> dict[str, Any]:
        """Headers et parametres d'authentification propres au fournisseur."""
        return {}

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Returns:
            httpx.AsyncClient configure pour le fournisseur
        """
        if self._client is None or self._client.is_closed:
            options = self._client_options()
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Accept": "application/json", **options.get("headers", {})},
                params=options.get("params", {}),
                timeout=self._timeout,
            )
        return self._client

    def _ensure_configured(self) -> None:
        if not self.is_configured:
            error = ProviderConfigurationError(self.label)
            logger.error(str(error))
            raise error

    async def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        Execute un GET et retourne le corps JSON.

        Raises:
            ProviderNotFoundError: Reponse 404
            ProviderError: Toute autre erreur HTTP ou de transport
        """
        client = self._get_client()
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"{self.label} API Error: HTTP {status} sur {path}")
            if status == 404:
                raise ProviderNotFoundError(self.label, "Movie not found") from e
            raise ProviderError(self.label, f"Request failed with status code {status}") from e
        except httpx.HTTPError as e:
            logger.error(f"{self.label} API Error: {e!r}")
            raise ProviderError(self.label, str(e) or e.__class__.__name__) from e
        except ValueError as e:
            logger.error(f"{self.label} API Error: reponse non JSON sur {path}")
            raise ProviderError(self.label, "Invalid JSON response") from e

    async def _cached(self, cache_key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        """
        Pattern cache-first : retourne l'entree du cache ou execute fetch.

        La cle API est verifiee avant toute lecture pour qu'un fournisseur
        non configure echoue toujours de la meme facon.
        """
        self._ensure_configured()

        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        result = await fetch()
        await self._cache.set(cache_key, result)
        return result

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
