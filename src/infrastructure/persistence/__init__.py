"""
Module de persistance SQLite pour MovieInfo.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Creation de l'engine, session factory, initialisation des tables
- models.py : Modele SQLModel de la table movies
- query_builder.py : Traduction des filtres REST en clauses SQL
- repositories/ : Implementation SQLModel de IMovieRepository

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    engine = create_db_engine("sqlite:///movieinfo.db")
    next(init_db(engine))  # Cree les tables si necessaire
    with Session(engine) as session:
        repo = SQLModelMovieRepository(session)
        movies, total = repo.list_movies(MovieQuery())
"""

from src.infrastructure.persistence.database import (
    create_db_engine,
    get_session,
    init_db,
)
from src.infrastructure.persistence.models import MovieModel

__all__ = [
    "create_db_engine",
    "get_session",
    "init_db",
    "MovieModel",
]
