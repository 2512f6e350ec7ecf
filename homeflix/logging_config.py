"""
Configuration du logging de HomeFlix via loguru.

Deux sorties :
- console : niveau `log_level`, sans le detail par requete du streaming
  (plages servies, deconnexions) qui inonderait la sortie en DEBUG
- fichier : tout depuis DEBUG, serialise en JSON avec rotation, alimente par
  une file pour supporter les rechargements du catalogue faits dans un thread
"""

import sys

from loguru import logger

from .config import Settings

# Module dont les messages DEBUG decrivent chaque requete de lecture
STREAMING_LOGGER = "homeflix.services.streaming"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)


def _console_filter(record: dict) -> bool:
    """Ecarte de la console le detail par requete du streaming."""
    return record["name"] != STREAMING_LOGGER or record["level"].no >= logger.level("INFO").no


def configure_logging(settings: Settings) -> None:
    """Installe les sorties console et fichier a partir des parametres.

    Args :
        settings : Parametres de l'application (log_level, log_file,
            log_rotation_size, log_retention_count)
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=CONSOLE_FORMAT,
        filter=_console_filter,
        colorize=True,
    )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(
        f"Logging configure (console {settings.log_level}, fichier {settings.log_file})"
    )
