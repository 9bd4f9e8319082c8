"""
Implementation SQLModel du repository Movie.

Implemente l'interface IMovieRepository pour la persistance des films
dans la base de donnees SQLite via SQLModel.
"""

import json
from collections import Counter
from dataclasses import fields, replace
from typing import Any, Optional

from loguru import logger
from sqlmodel import Session, col, func, or_, select

from src.core.entities.movie import Movie, invariant_errors, normalize_title
from src.core.exceptions import MovieValidationError
from src.core.ports.repositories import IMovieRepository
from src.core.value_objects.movie_query import MovieQuery
from src.infrastructure.persistence.models import MovieModel, utcnow
from src.infrastructure.persistence.query_builder import build_filters, build_order_by

TOP_GENRES_LIMIT = 10

# Champs de l'entite modifiables par une mise a jour partielle
_UPDATABLE_FIELDS = frozenset(
    f.name for f in fields(Movie) if f.name not in ("id", "created_at", "updated_at")
)


def _parse_id(movie_id: str) -> Optional[int]:
    """Convertit un ID public en cle primaire, None s'il est mal forme."""
    try:
        return int(movie_id)
    except (TypeError, ValueError):
        return None


class SQLModelMovieRepository(IMovieRepository):
    """
    Repository SQLModel pour les films.

    Implemente IMovieRepository avec conversion bidirectionnelle
    entre l'entite Movie (domaine) et MovieModel (persistance).
    Chaque ecriture normalise le titre et verifie les invariants.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: MovieModel) -> Movie:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele MovieModel depuis la DB

        Retourne :
            L'entite Movie correspondante
        """
        return Movie(
            id=str(model.id) if model.id is not None else None,
            title=model.title,
            genre=model.genres,
            director=model.director,
            release_year=model.release_year,
            rating=model.rating,
            description=model.description,
            duration=model.duration,
            poster=model.poster,
            cast=model.cast,
            language=model.language,
            country=model.country,
            budget=model.budget,
            box_office=model.box_office,
            external_ids=model.external_ids,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: MovieModel, entity: Movie) -> MovieModel:
        """Copie les champs de l'entite sur le modele (hors ID et dates)."""
        model.title = entity.title
        model.genres_json = json.dumps(list(entity.genre), ensure_ascii=False)
        model.director = entity.director
        model.release_year = entity.release_year
        model.rating = entity.rating if entity.rating is not None else 0.0
        model.description = entity.description
        model.duration = entity.duration
        model.poster = entity.poster
        model.cast_json = json.dumps(list(entity.cast), ensure_ascii=False)
        model.language = entity.language
        model.country = entity.country
        model.budget = entity.budget
        model.box_office = entity.box_office
        model.external_ids_json = json.dumps(dict(entity.external_ids), ensure_ascii=False)
        return model

    def _prepare(self, movie: Movie) -> Movie:
        """Normalise le titre et verifie les invariants avant ecriture."""
        movie = replace(
            movie,
            title=normalize_title(movie.title or ""),
            director=(movie.director or "").strip(),
            genre=[g.strip() for g in movie.genre or [] if g and g.strip()],
            cast=list(movie.cast or []),
            external_ids=dict(movie.external_ids or {}),
        )
        errors = invariant_errors(movie)
        if errors:
            raise MovieValidationError(errors)
        return movie

    def _get_model(self, movie_id: str) -> Optional[MovieModel]:
        pk = _parse_id(movie_id)
        if pk is None:
            return None
        return self._session.get(MovieModel, pk)

    def _commit(self, model: MovieModel) -> Movie:
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def list_movies(self, query: MovieQuery) -> tuple[list[Movie], int]:
        """Retourne la page demandee et le nombre total de films correspondants."""
        conditions = build_filters(query)

        statement = (
            select(MovieModel)
            .where(*conditions)
            .order_by(*build_order_by(query))
            .offset(query.skip)
            .limit(query.limit)
        )
        models = self._session.exec(statement).all()

        count_statement = select(func.count()).select_from(MovieModel).where(*conditions)
        total = self._session.exec(count_statement).one()

        return [self._to_entity(model) for model in models], total

    def get_by_id(self, movie_id: str) -> Optional[Movie]:
        """Recupere un film par son ID interne."""
        model = self._get_model(movie_id)
        if model:
            return self._to_entity(model)
        return None

    def create(self, movie: Movie) -> Movie:
        """Insere un nouveau film."""
        movie = self._prepare(movie)
        model = self._apply(
            MovieModel(title=movie.title, director=movie.director, release_year=movie.release_year),
            movie,
        )
        created = self._commit(model)
        logger.debug(f"Film cree: {created.title} ({created.release_year}) id={created.id}")
        return created

    def update(self, movie_id: str, changes: dict[str, Any]) -> Optional[Movie]:
        """Applique une mise a jour partielle. Retourne None si absent."""
        model = self._get_model(movie_id)
        if model is None:
            return None

        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise MovieValidationError([f"Unknown field: {name}" for name in sorted(unknown)])

        movie = self._prepare(replace(self._to_entity(model), **changes))
        self._apply(model, movie)
        model.updated_at = utcnow()
        return self._commit(model)

    def save(self, movie: Movie) -> Movie:
        """Remplace l'etat complet d'un film existant, ou l'insere s'il n'a pas d'ID."""
        model = self._get_model(movie.id) if movie.id else None
        if model is None:
            return self.create(movie)

        movie = self._prepare(movie)
        self._apply(model, movie)
        model.updated_at = utcnow()
        return self._commit(model)

    def delete(self, movie_id: str) -> bool:
        """Supprime un film par ID. Retourne True si supprime."""
        model = self._get_model(movie_id)
        if model is None:
            return False
        self._session.delete(model)
        self._session.commit()
        return True

    def delete_all(self) -> int:
        """Vide le catalogue."""
        models = self._session.exec(select(MovieModel)).all()
        for model in models:
            self._session.delete(model)
        self._session.commit()
        return len(models)

    def find_existing(
        self,
        title: str,
        release_year: Optional[int],
        source: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> Optional[Movie]:
        """Cherche un film par (titre insensible a la casse, annee) ou par externalIds[source]."""
        match = (func.lower(col(MovieModel.title)) == title.lower()) & (
            col(MovieModel.release_year) == release_year
        )
        if source and external_id is not None:
            stored_id = func.json_extract(MovieModel.external_ids_json, f'$."{source}"')
            match = or_(match, stored_id == str(external_id))

        model = self._session.exec(
            select(MovieModel).where(match).order_by(col(MovieModel.id))
        ).first()
        return self._to_entity(model) if model else None

    def stats(self) -> dict[str, Any]:
        """Statistiques agregees du catalogue."""
        row = self._session.exec(
            select(
                func.count(col(MovieModel.id)),
                func.avg(MovieModel.rating),
                func.max(MovieModel.rating),
                func.min(MovieModel.rating),
                func.max(MovieModel.release_year),
                func.min(MovieModel.release_year),
            )
        ).one()
        total, average, highest, lowest, newest, oldest = row

        overview: dict[str, Any] = {}
        if total:
            overview = {
                "total_movies": total,
                "average_rating": average,
                "highest_rating": highest,
                "lowest_rating": lowest,
                "newest_year": newest,
                "oldest_year": oldest,
            }

        # Genres aplatis puis comptes ; most_common conserve l'ordre d'apparition a egalite
        counter: Counter[str] = Counter()
        for genres_json in self._session.exec(
            select(MovieModel.genres_json).order_by(col(MovieModel.id))
        ).all():
            counter.update(json.loads(genres_json) if genres_json else [])

        top_genres = [
            {"genre": genre, "count": count}
            for genre, count in counter.most_common(TOP_GENRES_LIMIT)
        ]
        return {"overview": overview, "top_genres": top_genres}
