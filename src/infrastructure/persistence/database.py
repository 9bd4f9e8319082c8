"""
Configuration de la base de donnees SQLite pour MovieInfo.

Ce module fournit :
- Engine SQLite avec configuration pour multi-thread (requetes FastAPI)
- Session factory avec context manager
- Fonction d'initialisation des tables

L'URL de la base est configuree via MOVIEINFO_DATABASE_URL (defaut: sqlite:///movieinfo.db).
L'engine est cree une fois par le container DI et injecte la ou il est utilise.
"""

from collections.abc import Generator
from pathlib import Path

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine SQLModel pour l'URL donnee.

    Cree le repertoire parent si l'URL designe un fichier SQLite.
    """
    if database_url.startswith("sqlite:///") and not database_url.startswith("sqlite:///:memory:"):
        db_path = Path(database_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, echo=False, connect_args=connect_args)


def get_session(engine: Engine) -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation comme dependance FastAPI ou avec next() :
        session = next(get_session(engine))
        try:
            # operations
        finally:
            session.close()

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(engine) as session:
        yield session


def init_db(engine: Engine) -> Generator[Engine, None, None]:
    """
    Initialise la base de donnees en creant toutes les tables.

    Concu comme ressource du container : les tables sont creees au demarrage,
    l'engine est libere a l'arret.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    # L'import est fait ici pour eviter les imports circulaires
    from src.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.debug(f"Base de donnees initialisee: {engine.url}")
    yield engine
    engine.dispose()
