"""
Tests d'integration de l'API REST.

L'application est construite avec le vrai container (base SQLite
temporaire, repository SQLModel) ; seuls les fournisseurs externes
sont remplaces par des mocks de IMovieProvider.
"""

from typing import Iterator

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from src.config import Settings
from src.container import Container
from src.core.exceptions import ProviderConfigurationError, ProviderNotFoundError
from src.core.ports.api_clients import ExternalMovieDetail, ExternalMovieSummary, ProviderSearchResult
from src.services.external_search import ExternalSearchService
from src.web.app import create_app

API = "/api/v1"

DUNE = {
    "title": "dune",
    "genre": ["Sci-Fi"],
    "director": "D. Villeneuve",
    "releaseYear": 2021,
}


@pytest.fixture
def container(test_settings: Settings, mock_tmdb, mock_omdb, mock_rapidapi) -> Iterator[Container]:
    container = Container()
    container.config.override(test_settings)
    container.search_service.override(
        providers.Object(
            ExternalSearchService({"tmdb": mock_tmdb, "omdb": mock_omdb, "rapidapi": mock_rapidapi})
        )
    )
    yield container
    container.reset_override()


@pytest.fixture
def client(container: Container) -> Iterator[TestClient]:
    with TestClient(create_app(container)) as test_client:
        yield test_client


def create(client: TestClient, **overrides) -> dict:
    response = client.post(f"{API}/movies", json={**DUNE, **overrides})
    assert response.status_code == 201, response.json()
    return response.json()["data"]


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["version"] == "v1"
        assert "timestamp" in body

    def test_index_lists_endpoints(self, client):
        body = client.get("/").json()

        assert body["success"] is True
        assert f"GET {API}/movies" in body["endpoints"]["movies"]
        assert f"POST {API}/external/bulk-import" in body["endpoints"]["external"]

    def test_unknown_route(self, client):
        response = client.get(f"{API}/nope")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": f"Route {API}/nope not found"}


class TestMoviesCrud:

    def test_create_capitalizes_title(self, client):
        response = client.post(f"{API}/movies", json=DUNE)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Movie created successfully"
        movie = body["data"]
        assert movie["title"] == "Dune"
        assert movie["releaseYear"] == 2021
        assert movie["rating"] == 0.0
        assert movie["language"] == "English"
        assert isinstance(movie["id"], str)
        assert movie["age"] >= 0
        assert "createdAt" in movie

    def test_create_validation_error(self, client):
        response = client.post(f"{API}/movies", json={"title": "Dune", "genre": [], "releaseYear": 1700})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation error"
        assert len(body["errors"]) >= 3

    def test_create_rejects_far_future_year(self, client):
        response = client.post(f"{API}/movies", json={**DUNE, "releaseYear": 3000})

        assert response.status_code == 400
        assert any("5 years in the future" in error for error in response.json()["errors"])

    def test_get_by_id(self, client):
        created = create(client)

        response = client.get(f"{API}/movies/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == created

    @pytest.mark.parametrize("movie_id", ["999", "not-an-id"])
    def test_get_unknown(self, client, movie_id):
        response = client.get(f"{API}/movies/{movie_id}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Movie not found"}

    def test_update_partial(self, client):
        created = create(client)

        response = client.put(f"{API}/movies/{created['id']}", json={"rating": 8.1, "title": "dune: part one"})

        assert response.status_code == 200
        movie = response.json()["data"]
        assert movie["rating"] == 8.1
        assert movie["title"] == "Dune: part one"
        assert movie["director"] == "D. Villeneuve"

    def test_update_unknown(self, client):
        assert client.put(f"{API}/movies/999", json={"rating": 5}).status_code == 404

    def test_update_invalid(self, client):
        created = create(client)

        response = client.put(f"{API}/movies/{created['id']}", json={"rating": 11})

        assert response.status_code == 400

    def test_delete(self, client):
        created = create(client)

        response = client.delete(f"{API}/movies/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == {}
        assert client.delete(f"{API}/movies/{created['id']}").status_code == 404


class TestMoviesListing:

    @pytest.fixture
    def seeded(self, client):
        create(client, title="Inception", genre=["Science Fiction"], director="Christopher Nolan",
               releaseYear=2010, rating=8.8)
        create(client, title="The Dark Knight", genre=["Action", "Crime"], director="Christopher Nolan",
               releaseYear=2008, rating=9.0)
        create(client, title="Cats", genre=["Musical"], director="Tom Hooper", releaseYear=2019, rating=2.8)
        create(client, title="Amélie", genre=["Comedy"], director="Jean-Pierre Jeunet",
               releaseYear=2001, rating=8.3)

    def test_rating_range_sorted_desc(self, client, seeded):
        response = client.get(
            f"{API}/movies",
            params={"minRating": 8, "maxRating": 10, "sortBy": "rating", "sortOrder": "desc"},
        )

        assert response.status_code == 200
        body = response.json()
        ratings = [movie["rating"] for movie in body["data"]]
        assert ratings == [9.0, 8.8, 8.3]
        assert body["count"] == 3

    def test_pagination_metadata(self, client, seeded):
        body = client.get(f"{API}/movies", params={"page": 2, "limit": 3}).json()

        assert body["count"] == 1
        assert body["pagination"] == {
            "page": 2,
            "limit": 3,
            "total": 4,
            "totalPages": 2,
            "hasNextPage": False,
            "hasPrevPage": True,
        }

    def test_filters(self, client, seeded):
        body = client.get(f"{API}/movies", params={"director": "nolan", "genre": "crime"}).json()

        assert [movie["title"] for movie in body["data"]] == ["The Dark Knight"]

    @pytest.mark.parametrize(
        "params",
        [{"limit": 500}, {"page": 0}, {"minRating": 11}, {"sortBy": "director"}, {"sortOrder": "up"}],
    )
    def test_invalid_query_parameters(self, client, params):
        response = client.get(f"{API}/movies", params=params)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid query parameters"

    def test_stats(self, client, seeded):
        body = client.get(f"{API}/movies/stats").json()

        overview = body["data"]["overview"]
        assert overview["totalMovies"] == 4
        assert overview["highestRating"] == 9.0
        assert overview["oldestYear"] == 2001
        assert body["data"]["topGenres"][0] == {"genre": "Science Fiction", "count": 1}

    def test_stats_empty_catalog(self, client):
        body = client.get(f"{API}/movies/stats").json()

        assert body["data"] == {"overview": {}, "topGenres": []}


def dune_detail(**overrides) -> ExternalMovieDetail:
    values = {
        "external_id": "123",
        "title": "Dune",
        "release_year": 2021,
        "genre": ["Science Fiction"],
        "director": "Denis Villeneuve",
        "rating": 7.8,
        "source": "TMDB",
    }
    values.update(overrides)
    return ExternalMovieDetail(**values)


class TestExternalSearch:

    def test_query_is_required(self, client):
        response = client.get(f"{API}/external/search")

        assert response.status_code == 400
        assert response.json()["message"] == "Search query is required"

    def test_aggregated_search_with_failing_source(self, client, mock_tmdb, mock_omdb, mock_rapidapi):
        mock_tmdb.search.side_effect = ProviderConfigurationError("TMDB")
        mock_omdb.search.return_value = ProviderSearchResult(
            source="OMDB",
            results=[ExternalMovieSummary(external_id="tt1160419", title="Dune", release_year=2021, source="OMDB")],
            total_results=1,
        )

        response = client.get(f"{API}/external/search", params={"query": "dune", "excludeRapidAPI": "true"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["query"] == "dune"
        assert set(data["sources"]) == {"tmdb", "omdb"}
        assert data["sources"]["tmdb"] == {"error": "TMDB API Error: TMDB API key not configured"}
        assert data["sources"]["omdb"]["totalResults"] == 1
        assert [movie["externalId"] for movie in data["combined"]] == ["tt1160419"]
        assert data["combined"][0]["releaseYear"] == 2021
        mock_rapidapi.search.assert_not_called()

    def test_single_source_search(self, client, mock_tmdb):
        mock_tmdb.search.return_value = ProviderSearchResult(
            source="TMDB",
            results=[ExternalMovieSummary(external_id="438631", title="Dune", release_year=2021, source="TMDB")],
            total_results=1,
            total_pages=1,
            page=1,
        )

        response = client.get(f"{API}/external/search", params={"query": "dune", "source": "tmdb"})

        data = response.json()["data"]
        assert data["source"] == "TMDB"
        assert data["totalPages"] == 1
        assert data["results"][0]["externalId"] == "438631"

    def test_single_source_configuration_error(self, client, mock_tmdb):
        mock_tmdb.search.side_effect = ProviderConfigurationError("TMDB")

        response = client.get(f"{API}/external/search", params={"query": "dune", "source": "tmdb"})

        assert response.status_code == 503
        assert response.json()["message"] == "TMDB API Error: TMDB API key not configured"

    def test_unknown_source(self, client):
        response = client.get(f"{API}/external/search", params={"query": "dune", "source": "letterboxd"})

        assert response.status_code == 400


class TestExternalDetails:

    def test_details(self, client, mock_tmdb):
        mock_tmdb.get_details.return_value = dune_detail(cast=["Timothée Chalamet"], box_office=402027830.0)

        response = client.get(f"{API}/external/details/tmdb/438631")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Dune"
        assert data["boxOffice"] == 402027830.0

    def test_unsupported_source(self, client):
        response = client.get(f"{API}/external/details/rapidapi/tt1160419")

        assert response.status_code == 400
        assert response.json()["message"] == "Unsupported source. Use: tmdb, omdb"

    def test_provider_not_found(self, client, mock_omdb):
        mock_omdb.get_details.side_effect = ProviderNotFoundError("OMDB", "Incorrect IMDb ID.")

        response = client.get(f"{API}/external/details/omdb/tt0")

        assert response.status_code == 404
        assert response.json()["message"] == "OMDB API Error: Incorrect IMDb ID."


class TestExternalImport:

    def test_import_creates_movie(self, client, mock_tmdb):
        mock_tmdb.get_details.return_value = dune_detail()

        response = client.post(f"{API}/external/import", json={"source": "tmdb", "externalId": "123"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Movie imported successfully from TMDB"
        assert body["data"]["externalIds"] == {"tmdb": "123"}

    def test_import_conflict_returns_existing(self, client, mock_tmdb):
        existing = create(client)
        mock_tmdb.get_details.return_value = dune_detail()

        response = client.post(f"{API}/external/import", json={"source": "tmdb", "externalId": "123"})

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Movie already exists in database"
        assert body["data"]["id"] == existing["id"]

    def test_import_overwrite(self, client, mock_tmdb):
        existing = create(client)
        mock_tmdb.get_details.return_value = dune_detail()

        response = client.post(
            f"{API}/external/import",
            json={"source": "tmdb", "externalId": 123, "overwrite": True},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] == existing["id"]
        assert data["director"] == "Denis Villeneuve"
        assert data["externalIds"] == {"tmdb": "123"}

    @pytest.mark.parametrize("payload", [{}, {"source": "tmdb"}, {"externalId": "123"}])
    def test_import_missing_fields(self, client, payload):
        response = client.post(f"{API}/external/import", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Source and external ID are required"


class TestBulkImportAndSync:

    def test_bulk_import_requires_query(self, client):
        response = client.post(f"{API}/external/bulk-import", json={"source": "tmdb"})

        assert response.status_code == 400
        assert response.json()["message"] == "Search query is required for bulk import"

    def test_bulk_import_report(self, client, mock_tmdb):
        mock_tmdb.search.return_value = ProviderSearchResult(
            source="TMDB",
            results=[
                ExternalMovieSummary(external_id="1", title="Alien", release_year=1979),
                ExternalMovieSummary(external_id="2", title="Aliens", release_year=1986),
            ],
        )
        mock_tmdb.get_details.side_effect = [
            dune_detail(external_id="1", title="Alien", release_year=1979, director="Ridley Scott"),
            ProviderNotFoundError("TMDB", "Movie not found"),
        ]

        response = client.post(f"{API}/external/bulk-import", json={"searchQuery": "alien", "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Bulk import completed. 1 imported, 0 skipped, 1 failed"
        assert [item["title"] for item in body["data"]["successful"]] == ["Alien"]
        assert body["data"]["failed"] == [{"title": "Aliens", "error": "TMDB API Error: Movie not found"}]

    def test_sync(self, client, mock_tmdb):
        local = create(client)
        mock_tmdb.search.return_value = ProviderSearchResult(
            source="TMDB",
            results=[ExternalMovieSummary(external_id="438631", title="Dune", release_year=2021)],
        )
        mock_tmdb.get_details.return_value = dune_detail(external_id="438631")

        response = client.put(f"{API}/external/sync/{local['id']}", json={"source": "tmdb"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == local["id"]
        assert data["createdAt"] == local["createdAt"]
        assert data["director"] == "Denis Villeneuve"
        assert data["externalIds"] == {"tmdb": "438631"}

    def test_sync_unknown_movie(self, client):
        response = client.put(f"{API}/external/sync/999", json={"source": "tmdb"})

        assert response.status_code == 404
        assert response.json()["message"] == "Movie not found"

    def test_sync_without_match(self, client, mock_tmdb):
        local = create(client)
        mock_tmdb.search.return_value = ProviderSearchResult(source="TMDB", results=[])

        response = client.put(f"{API}/external/sync/{local['id']}")

        assert response.status_code == 404
        assert response.json()["message"] == "Movie not found in TMDB API"
