"""
Tests du repository SQLModel des films sur une base SQLite temporaire.

Verifie:
- Normalisation du titre et controle des invariants a chaque ecriture
- Filtres, recherche textuelle, tri et pagination du listing
- Controle d'existence (titre + annee ou ID externe)
- Statistiques agregees
"""

import pytest

from src.core.exceptions import MovieValidationError
from src.core.value_objects.movie_query import MovieQuery, SortField, SortOrder
from src.infrastructure.persistence.repositories import SQLModelMovieRepository


@pytest.fixture
def catalog(movie_repo: SQLModelMovieRepository, make_movie):
    """Catalogue de cinq films varies."""
    movies = [
        make_movie(title="Inception", genre=["Science Fiction", "Action"], director="Christopher Nolan",
                   release_year=2010, rating=8.8),
        make_movie(title="The Dark Knight", genre=["Action", "Crime"], director="Christopher Nolan",
                   release_year=2008, rating=9.0, description="Batman faces the Joker."),
        make_movie(title="Amélie", genre=["Comedy", "Romance"], director="Jean-Pierre Jeunet",
                   release_year=2001, rating=8.3, description="A shy waitress decides to change lives."),
        make_movie(title="Dune", genre=["Science Fiction", "Adventure"], director="Denis Villeneuve",
                   release_year=2021, rating=8.0, description="Spice and sand."),
        make_movie(title="Cats", genre=["Musical"], director="Tom Hooper",
                   release_year=2019, rating=2.8, description="Jellicle cats."),
    ]
    return [movie_repo.create(movie) for movie in movies]


class TestCreate:

    def test_create_assigns_id_and_timestamps(self, movie_repo, make_movie):
        movie = movie_repo.create(make_movie())

        assert movie.id is not None
        assert isinstance(movie.id, str)
        assert movie.created_at is not None
        assert movie.updated_at is not None

    @pytest.mark.parametrize("raw", ["dune", "  dune", "Dune"])
    def test_title_first_character_upper_cased(self, movie_repo, make_movie, raw):
        movie = movie_repo.create(make_movie(title=raw, release_year=2021))

        assert movie.title == "Dune"

    def test_create_round_trips_all_fields(self, movie_repo, make_movie):
        created = movie_repo.create(
            make_movie(
                cast=["Leonardo DiCaprio", "Elliot Page"],
                duration=148,
                budget=160000000,
                box_office=836800000,
                country="United States",
                external_ids={"tmdb": "27205"},
            )
        )

        loaded = movie_repo.get_by_id(created.id)

        assert loaded == created
        assert loaded.cast == ["Leonardo DiCaprio", "Elliot Page"]
        assert loaded.external_ids == {"tmdb": "27205"}

    def test_create_rejects_invalid_movie(self, movie_repo, make_movie):
        with pytest.raises(MovieValidationError) as exc_info:
            movie_repo.create(make_movie(genre=[], rating=11))

        assert "Movie must have at least one genre" in exc_info.value.errors
        assert "Rating must be between 0 and 10" in exc_info.value.errors


class TestGetUpdateDelete:

    def test_get_unknown_or_malformed_id(self, movie_repo):
        assert movie_repo.get_by_id("9999") is None
        assert movie_repo.get_by_id("not-an-id") is None

    def test_update_partial_fields(self, movie_repo, make_movie):
        created = movie_repo.create(make_movie())

        updated = movie_repo.update(created.id, {"rating": 9.1, "title": "inception (director's cut)"})

        assert updated.rating == 9.1
        assert updated.title == "Inception (director's cut)"
        assert updated.director == created.director
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at

    def test_update_unknown_movie_returns_none(self, movie_repo):
        assert movie_repo.update("42", {"rating": 5}) is None

    def test_update_checks_invariants(self, movie_repo, make_movie):
        created = movie_repo.create(make_movie())

        with pytest.raises(MovieValidationError):
            movie_repo.update(created.id, {"release_year": 1800})

    def test_update_rejects_unknown_fields(self, movie_repo, make_movie):
        created = movie_repo.create(make_movie())

        with pytest.raises(MovieValidationError):
            movie_repo.update(created.id, {"created_at": None})

    def test_save_replaces_state(self, movie_repo, make_movie):
        created = movie_repo.create(make_movie())
        created.description = "Updated"
        created.external_ids = {"omdb": "tt1375666"}

        saved = movie_repo.save(created)

        assert saved.id == created.id
        assert movie_repo.get_by_id(created.id).external_ids == {"omdb": "tt1375666"}

    def test_save_without_id_creates(self, movie_repo, make_movie):
        saved = movie_repo.save(make_movie())

        assert saved.id is not None

    def test_delete(self, movie_repo, make_movie):
        created = movie_repo.create(make_movie())

        assert movie_repo.delete(created.id) is True
        assert movie_repo.get_by_id(created.id) is None
        assert movie_repo.delete(created.id) is False

    def test_delete_all(self, movie_repo, catalog):
        assert movie_repo.delete_all() == 5
        assert movie_repo.list_movies(MovieQuery())[1] == 0


class TestListMovies:

    def test_default_sort_is_newest_first(self, movie_repo, catalog):
        movies, total = movie_repo.list_movies(MovieQuery())

        assert total == 5
        assert [m.title for m in movies] == [m.title for m in reversed(catalog)]

    def test_pagination(self, movie_repo, catalog):
        query = MovieQuery(page=2, limit=2, sort_by=SortField.TITLE, sort_order=SortOrder.ASC)

        movies, total = movie_repo.list_movies(query)

        assert total == 5
        assert [m.title for m in movies] == ["Dune", "Inception"]

    def test_rating_range_sorted_desc(self, movie_repo, catalog):
        query = MovieQuery(min_rating=8, max_rating=10, sort_by=SortField.RATING, sort_order=SortOrder.DESC)

        movies, total = movie_repo.list_movies(query)

        assert total == 4
        ratings = [m.rating for m in movies]
        assert all(8 <= r <= 10 for r in ratings)
        assert ratings == sorted(ratings, reverse=True)

    def test_genre_substring_case_insensitive(self, movie_repo, catalog):
        movies, _ = movie_repo.list_movies(MovieQuery(genre="science"))

        assert {m.title for m in movies} == {"Inception", "Dune"}

    def test_director_substring(self, movie_repo, catalog):
        movies, _ = movie_repo.list_movies(MovieQuery(director="nolan"))

        assert {m.title for m in movies} == {"Inception", "The Dark Knight"}

    def test_release_year_exact(self, movie_repo, catalog):
        movies, _ = movie_repo.list_movies(MovieQuery(release_year=2001))

        assert [m.title for m in movies] == ["Amélie"]

    def test_search_matches_any_term_in_title_or_description(self, movie_repo, catalog):
        movies, _ = movie_repo.list_movies(MovieQuery(search="joker spice"))

        assert {m.title for m in movies} == {"The Dark Knight", "Dune"}

    @pytest.mark.parametrize("text", ["%", "_", "100%"])
    def test_like_wildcards_are_literal(self, movie_repo, catalog, text):
        assert movie_repo.list_movies(MovieQuery(search=text))[1] == 0
        assert movie_repo.list_movies(MovieQuery(director=text))[1] == 0
        assert movie_repo.list_movies(MovieQuery(genre=text))[1] == 0

    def test_literal_percent_matches(self, movie_repo, make_movie):
        movie_repo.create(make_movie(title="100% Wolf", genre=["Animation"], release_year=2020))
        movie_repo.create(make_movie(title="1000 Wolves", genre=["Animation"], release_year=2021))

        movies, total = movie_repo.list_movies(MovieQuery(search="100%"))

        assert total == 1
        assert movies[0].title == "100% Wolf"

    def test_filters_combine(self, movie_repo, catalog):
        movies, total = movie_repo.list_movies(MovieQuery(director="nolan", min_rating=8.9))

        assert total == 1
        assert movies[0].title == "The Dark Knight"

    def test_sort_by_release_year_asc(self, movie_repo, catalog):
        query = MovieQuery(sort_by=SortField.RELEASE_YEAR, sort_order=SortOrder.ASC)

        movies, _ = movie_repo.list_movies(query)

        assert [m.release_year for m in movies] == [2001, 2008, 2010, 2019, 2021]


class TestFindExisting:

    def test_by_title_and_year(self, movie_repo, catalog):
        found = movie_repo.find_existing("Dune", 2021)

        assert found is not None
        assert found.title == "Dune"

    def test_year_must_match(self, movie_repo, catalog):
        assert movie_repo.find_existing("Dune", 1984) is None

    def test_title_comparison_ignores_case(self, movie_repo, make_movie):
        created = movie_repo.create(make_movie(title="Star wars", release_year=1977))

        found = movie_repo.find_existing("STAR WARS", 1977)

        assert found is not None
        assert found.id == created.id

    def test_by_external_id(self, movie_repo, make_movie):
        created = movie_repo.create(make_movie(external_ids={"tmdb": "27205"}))

        found = movie_repo.find_existing("Another Title", 1999, source="tmdb", external_id="27205")

        assert found.id == created.id

    def test_external_id_of_other_source_ignored(self, movie_repo, make_movie):
        movie_repo.create(make_movie(external_ids={"tmdb": "27205"}))

        assert movie_repo.find_existing("Another Title", 1999, source="omdb", external_id="27205") is None


class TestStats:

    def test_empty_catalog(self, movie_repo):
        stats = movie_repo.stats()

        assert stats == {"overview": {}, "top_genres": []}

    def test_overview_and_top_genres(self, movie_repo, catalog):
        stats = movie_repo.stats()
        overview = stats["overview"]

        assert overview["total_movies"] == 5
        assert overview["average_rating"] == pytest.approx((8.8 + 9.0 + 8.3 + 8.0 + 2.8) / 5)
        assert overview["highest_rating"] == 9.0
        assert overview["lowest_rating"] == 2.8
        assert overview["newest_year"] == 2021
        assert overview["oldest_year"] == 2001

        top = stats["top_genres"]
        assert top[0] == {"genre": "Science Fiction", "count": 2}
        assert {"genre": "Action", "count": 2} in top
        assert len(top) == 7
