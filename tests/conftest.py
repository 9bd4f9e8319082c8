"""
Fixtures pytest partagees pour les tests MovieInfo.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec base SQLite et cache dans tmp_path
- Repository SQLModel sur une base temporaire
- Mocks des fournisseurs (IMovieProvider)
- Fabrique de films valides
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel import Session

from src.config import Settings
from src.core.entities.movie import Movie
from src.core.ports.api_clients import IMovieProvider, ProviderSearchResult
from src.infrastructure.persistence.database import create_db_engine, init_db
from src.infrastructure.persistence.repositories import SQLModelMovieRepository


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Aucune cle API : chaque test qui appelle un fournisseur configure
    son propre client.
    """
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path}/test.db",
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
        tmdb_api_key="test_tmdb_key",
        omdb_api_key="test_omdb_key",
        rapidapi_key="test_rapidapi_key",
        bulk_import_delay_seconds=0,
    )


@pytest.fixture
def session(tmp_path: Path) -> Iterator[Session]:
    """Session SQLModel sur une base SQLite temporaire, tables creees."""
    engine = create_db_engine(f"sqlite:///{tmp_path}/repo.db")
    resource = init_db(engine)
    next(resource)
    with Session(engine) as db_session:
        yield db_session
    resource.close()


@pytest.fixture
def movie_repo(session: Session) -> SQLModelMovieRepository:
    return SQLModelMovieRepository(session)


@pytest.fixture
def make_movie():
    """Fabrique de films valides, champs surchargeables."""

    def factory(**overrides) -> Movie:
        values = {
            "title": "Inception",
            "genre": ["Science Fiction", "Action"],
            "director": "Christopher Nolan",
            "release_year": 2010,
            "rating": 8.8,
            "description": "A thief who steals corporate secrets through dream-sharing technology.",
        }
        values.update(overrides)
        return Movie(**values)

    return factory


def make_provider(source: str, label: str, supports_details: bool = True) -> MagicMock:
    """
    Mock de IMovieProvider.

    search et get_details sont des AsyncMock a configurer dans chaque test.
    """
    provider = MagicMock(spec=IMovieProvider)
    provider.source = source
    provider.label = label
    provider.supports_details = supports_details
    provider.search = AsyncMock(return_value=ProviderSearchResult(source=label))
    provider.get_details = AsyncMock()
    provider.close = AsyncMock()
    return provider


@pytest.fixture
def mock_tmdb() -> MagicMock:
    return make_provider("tmdb", "TMDB")


@pytest.fixture
def mock_omdb() -> MagicMock:
    return make_provider("omdb", "OMDB")


@pytest.fixture
def mock_rapidapi() -> MagicMock:
    return make_provider("rapidapi", "RapidAPI-IMDB", supports_details=False)
