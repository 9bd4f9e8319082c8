"""
Clients API externes pour les metadonnees de films.

Ce module fournit les adaptateurs pour communiquer avec les fournisseurs:
- TMDB: The Movie Database (recherche paginee, fiches avec credits)
- OMDB: Open Movie Database (resumes complets, notes IMDb)
- RapidAPI: proxy de recherche IMDb (recherche seule)

Infrastructure partagee:
- APICache: Cache avec TTL (1h par defaut), partage par tous les clients
- BaseProviderClient: client httpx paresseux, cache-first, erreurs normalisees
- normalizers: conversion des reponses brutes vers la forme canonique

Les clients implementent IMovieProvider defini dans core/ports/api_clients.py.
"""

from src.adapters.api.cache import APICache
from src.adapters.api.omdb_client import OMDBClient
from src.adapters.api.rapidapi_client import RapidAPIClient
from src.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "OMDBClient",
    "RapidAPIClient",
    "TMDBClient",
]
