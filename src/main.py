"""
Point d'entrée CLI de MovieInfo.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from .config import Settings
from .container import Container
from .core.exceptions import MovieValidationError
from .logging_config import configure_logging

APP_VERSION = "0.1.0"

app = typer.Typer(
    name="movieinfo",
    help="API REST de catalogue de films",
)
container = Container()


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration MovieInfo")
    typer.echo(f"Environnement : {config.environment}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Chemin de l'API : {config.api_base_path} ({config.api_version})")
    typer.echo(f"Cache API : {config.cache_dir} (TTL {config.cache_ttl_seconds}s)")
    for name, client in container.movie_providers().items():
        state = "configurée" if client.is_configured else "non configurée"
        typer.echo(f"Clé {client.label} : {state}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"MovieInfo v{APP_VERSION}")


@app.command()
def seed(
    source: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Fichier JSON de films")],
    keep: Annotated[bool, typer.Option("--keep", help="Conserve les films existants")] = False,
) -> None:
    """Charge un jeu de films d'exemple dans le catalogue."""
    container.database.init()
    with container.session() as session:
        seeder = container.catalog_seeder(movie_repo=container.movie_repository(session=session))
        try:
            report = seeder.seed(source, keep_existing=keep)
        except (ValueError, MovieValidationError) as e:
            logger.error(f"Chargement impossible: {e}")
            raise typer.Exit(code=1) from e

    if report.cleared:
        typer.echo(f"{report.cleared} films supprimés")
    typer.echo(f"{report.inserted} films insérés depuis {source}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web MovieInfo."""
    import uvicorn

    config = get_config()
    typer.echo(f"Démarrage du serveur sur {host}:{port} ({config.environment})")
    typer.echo(f"API : http://{host}:{port}{config.api_base_path}")
    try:
        uvicorn.run("src.web.app:app", host=host, port=port, reload=reload)
    except Exception:
        logger.exception("Arrêt du serveur sur erreur fatale")
        raise typer.Exit(code=1)


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(settings)

    logger.info("Démarrage de MovieInfo", version=APP_VERSION)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
