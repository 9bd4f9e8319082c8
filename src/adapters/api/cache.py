"""
Cache des appels aux fournisseurs externes avec TTL.

Le cache utilise diskcache pour le stockage, partage par tous les clients
du processus. Une entree expiree est simplement consideree comme absente :
le prochain appel refait la requete et ecrase l'entree.

TTL par defaut (DEFAULT_TTL): 1 heure, mesuree depuis l'insertion.
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache
from loguru import logger


class APICache:
    """
    Cache asynchrone avec TTL pour les appels API.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Attributes:
        DEFAULT_TTL: Duree de vie par defaut des entrees (1h)

    Example:
        cache = APICache(cache_dir=".cache/api", ttl=3600)
        await cache.set("tmdb:search:dune:1", results)
        data = await cache.get("tmdb:search:dune:1")
    """

    DEFAULT_TTL = 60 * 60  # 1 heure en secondes (3600)

    def __init__(self, cache_dir: Optional[str | Path] = ".cache/api", ttl: int = DEFAULT_TTL) -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant,
                repertoire temporaire si None)
            ttl: Duree de vie des entrees en secondes
        """
        self._cache = Cache(str(cache_dir) if cache_dir is not None else None)
        self._ttl = ttl

    @property
    def ttl(self) -> int:
        """Duree de vie appliquee par defaut."""
        return self._ttl

    async def get(self, key: str) -> Optional[Any]:
        """
        Recupere une valeur du cache.

        Args:
            key: Cle unique identifiant la donnee

        Returns:
            La valeur stockee ou None si absente ou expiree
        """
        loop = asyncio.get_running_loop()
        value = await loop.run_in_executor(None, self._cache.get, key)
        logger.debug(f"Cache {'hit' if value is not None else 'miss'}: {key}")
        return value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """
        Stocke une valeur dans le cache avec un TTL.

        Args:
            key: Cle unique identifiant la donnee
            value: Valeur a stocker (doit etre serializable)
            ttl: Duree de vie en secondes (TTL du cache si None)
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl or self._ttl)
        )

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
