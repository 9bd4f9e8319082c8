"""
Tests for OMDBClient.

Uses respx to mock httpx calls and verifies:
- Search parameters (s, type, optional y) and normalized summaries
- Full-plot details with "N/A" markers mapped to None
- Response == "False" becomes ProviderNotFoundError with OMDB's message
"""

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from src.adapters.api.cache import APICache
from src.adapters.api.omdb_client import OMDBClient
from src.core.exceptions import ProviderConfigurationError, ProviderNotFoundError
from tests.fixtures.omdb_responses import (
    OMDB_INVALID_KEY_RESPONSE,
    OMDB_MOVIE_DETAILS_RESPONSE,
    OMDB_NOT_FOUND_RESPONSE,
    OMDB_SEARCH_RESPONSE,
    OMDB_SPARSE_DETAILS_RESPONSE,
)

OMDB_URL = "http://www.omdbapi.com/"


@pytest.fixture
def mock_cache() -> AsyncMock:
    cache = AsyncMock(spec=APICache)
    cache.get.return_value = None
    return cache


@pytest.fixture
def omdb_client(mock_cache: AsyncMock) -> OMDBClient:
    return OMDBClient(api_key="test_omdb_key", cache=mock_cache)


class TestOMDBSearch:

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_returns_summaries(self, omdb_client: OMDBClient):
        route = respx.get(OMDB_URL).mock(return_value=httpx.Response(200, json=OMDB_SEARCH_RESPONSE))

        result = await omdb_client.search("Dune")

        params = route.calls.last.request.url.params
        assert params["apikey"] == "test_omdb_key"
        assert params["s"] == "Dune"
        assert params["type"] == "movie"
        assert "y" not in params

        assert result.source == "OMDB"
        assert result.total_results == 3
        assert [m.external_id for m in result.results] == ["tt1160419", "tt0087182", "tt1935156"]
        assert result.results[0].release_year == 2021
        assert result.results[1].poster is None  # "N/A"

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_with_year(self, omdb_client: OMDBClient, mock_cache: AsyncMock):
        route = respx.get(OMDB_URL).mock(return_value=httpx.Response(200, json=OMDB_SEARCH_RESPONSE))

        await omdb_client.search("Dune", year=2021)

        assert route.calls.last.request.url.params["y"] == "2021"
        mock_cache.get.assert_called_once_with("omdb:search:Dune:2021:movie")

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_without_results_is_not_found(self, omdb_client: OMDBClient):
        respx.get(OMDB_URL).mock(return_value=httpx.Response(200, json=OMDB_NOT_FOUND_RESPONSE))

        with pytest.raises(ProviderNotFoundError) as exc_info:
            await omdb_client.search("zzzz")

        assert str(exc_info.value) == "OMDB API Error: Movie not found!"

    @pytest.mark.asyncio
    @respx.mock
    async def test_provider_reported_error_is_embedded(self, omdb_client: OMDBClient):
        respx.get(OMDB_URL).mock(return_value=httpx.Response(200, json=OMDB_INVALID_KEY_RESPONSE))

        with pytest.raises(ProviderNotFoundError) as exc_info:
            await omdb_client.search("Dune")

        assert exc_info.value.detail == "Invalid API key!"


class TestOMDBDetails:

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_details(self, omdb_client: OMDBClient):
        route = respx.get(OMDB_URL).mock(
            return_value=httpx.Response(200, json=OMDB_MOVIE_DETAILS_RESPONSE)
        )

        detail = await omdb_client.get_details("tt1160419")

        params = route.calls.last.request.url.params
        assert params["i"] == "tt1160419"
        assert params["plot"] == "full"

        assert detail.title == "Dune"
        assert detail.release_year == 2021
        assert detail.director == "Denis Villeneuve"
        assert detail.genre == ["Action", "Adventure", "Drama"]
        assert detail.cast == ["Timothée Chalamet", "Rebecca Ferguson", "Zendaya"]
        assert detail.duration == 155
        assert detail.rating == 8.0
        assert detail.box_office == 108897830
        assert detail.country == "United States, Canada"
        assert detail.source == "OMDB"

    @pytest.mark.asyncio
    @respx.mock
    async def test_not_available_fields_become_none(self, omdb_client: OMDBClient):
        respx.get(OMDB_URL).mock(return_value=httpx.Response(200, json=OMDB_SPARSE_DETAILS_RESPONSE))

        detail = await omdb_client.get_details("tt0000001")

        assert detail.director is None
        assert detail.description is None
        assert detail.duration is None
        assert detail.rating is None
        assert detail.box_office is None
        assert detail.genre == []
        assert detail.cast == []


@pytest.mark.asyncio
async def test_missing_key_raises_configuration_error(mock_cache: AsyncMock):
    client = OMDBClient(api_key=None, cache=mock_cache)

    with pytest.raises(ProviderConfigurationError) as exc_info:
        await client.get_details("tt1160419")

    assert exc_info.value.detail == "OMDB API key not configured"
