"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Le cache et les clients fournisseurs sont partages par le processus ;
repositories et orchestrateur d'import sont crees par requete.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .adapters.api.cache import APICache
from .adapters.api.omdb_client import OMDBClient
from .adapters.api.rapidapi_client import RapidAPIClient
from .adapters.api.tmdb_client import TMDBClient
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import SQLModelMovieRepository
from .services.catalog_seeder import CatalogSeeder
from .services.external_import import ExternalImportService
from .services.external_search import ExternalSearchService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        search = container.search_service()
        movie_repo = container.movie_repository()

    En test, surcharger la configuration :
        container.config.override(Settings(database_url="sqlite:///tmp.db"))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine unique, Resource pour creation des tables et liberation
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    # Session - nouvelle session a chaque appel
    session = providers.Factory(Session, engine)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    movie_repository = providers.Factory(
        SQLModelMovieRepository,
        session=session,
    )

    # Cache API - Singleton pour partage entre clients
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
        ttl=config.provided.cache_ttl_seconds,
    )

    # Clients API - Singleton avec api_key depuis config
    # Si api_key est None/vide, le client est cree mais refuse chaque appel
    # avec une ProviderConfigurationError
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
        base_url=config.provided.tmdb_base_url,
        timeout=config.provided.http_timeout_seconds,
    )

    omdb_client = providers.Singleton(
        OMDBClient,
        api_key=config.provided.omdb_api_key,
        cache=api_cache,
        base_url=config.provided.omdb_base_url,
        timeout=config.provided.http_timeout_seconds,
    )

    rapidapi_client = providers.Singleton(
        RapidAPIClient,
        api_key=config.provided.rapidapi_key,
        cache=api_cache,
        base_url=config.provided.rapidapi_base_url,
        host=config.provided.rapidapi_host,
        timeout=config.provided.http_timeout_seconds,
    )

    # Ordre d'agregation des sources
    movie_providers = providers.Dict(
        tmdb=tmdb_client,
        omdb=omdb_client,
        rapidapi=rapidapi_client,
    )

    search_service = providers.Singleton(
        ExternalSearchService,
        providers=movie_providers,
    )

    # Orchestrateur d'import - Factory car depend du repository (session fraiche)
    # Depuis le web: container.import_service(movie_repo=repo_de_la_requete)
    import_service = providers.Factory(
        ExternalImportService,
        movie_repo=movie_repository,
        search_service=search_service,
        delay_seconds=config.provided.bulk_import_delay_seconds,
    )

    catalog_seeder = providers.Factory(
        CatalogSeeder,
        movie_repo=movie_repository,
    )
