"""
Journalisation de MovieInfo via loguru, pilotee par Settings.

Deux sorties :
- stderr : format court en production, detaille (module:fonction:ligne) ailleurs
- fichier : JSON avec rotation, pour relire les appels fournisseurs et les requetes HTTP

Le niveau du journal des requetes HTTP est decide ici pour que la
middleware de l'application et les sorties restent coherentes.
"""

import sys

from loguru import logger

from src.config import Settings

DEV_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
PRODUCTION_CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[environment]} | {message}"


def request_log_level(settings: Settings) -> str:
    """Niveau des lignes "METHODE chemin statut duree" : INFO en production, DEBUG sinon."""
    return "INFO" if settings.is_production else "DEBUG"


def file_log_level(settings: Settings) -> str:
    """Le fichier garde le detail (cache, appels API) sauf en production."""
    return request_log_level(settings)


def configure_logging(settings: Settings) -> None:
    """
    Remplace les sorties loguru par celles decrites dans settings.

    Utilise log_level pour la console, log_file, log_rotation_size et
    log_retention_count pour le fichier.
    """
    logger.remove()
    logger.configure(extra={"environment": settings.environment})

    production = settings.is_production
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=PRODUCTION_CONSOLE_FORMAT if production else DEV_CONSOLE_FORMAT,
        colorize=not production,
    )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level=file_log_level(settings),
        format="{message}",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(
        "Logging configure",
        log_file=str(settings.log_file),
        environment=settings.environment,
    )
