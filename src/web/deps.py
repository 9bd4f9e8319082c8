"""
Dépendances partagées de l'application web.

Le container DI est porté par app.state ; chaque requête obtient
une session SQLModel fraîche, fermée à la fin de la requête.
"""

from collections.abc import Generator

from fastapi import Depends, Request

from ..container import Container
from ..core.ports.repositories import IMovieRepository
from ..services.external_import import ExternalImportService
from ..services.external_search import ExternalSearchService


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_movie_repository(
    container: Container = Depends(get_container),
) -> Generator[IMovieRepository, None, None]:
    """Repository lié à une session ouverte pour la durée de la requête."""
    with container.session() as session:
        yield container.movie_repository(session=session)


def get_search_service(container: Container = Depends(get_container)) -> ExternalSearchService:
    return container.search_service()


def get_import_service(
    container: Container = Depends(get_container),
    movie_repo: IMovieRepository = Depends(get_movie_repository),
) -> ExternalImportService:
    return container.import_service(movie_repo=movie_repo)
