"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console (stdout) : texte colore en developpement, une ligne JSON par
  evenement en production
- fichier : JSON avec rotation, tous niveaux

Les logs des bibliotheques passant par le module logging standard
(uvicorn, sqlalchemy) sont rediriges vers loguru.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level> {extra}"
)

# Loggers standard redirigés vers loguru
_REDIRECTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine")


class _LoguruHandler(logging.Handler):
    """Transmet un enregistrement logging standard a loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _redirect_standard_logging(level: str) -> None:
    handler = _LoguruHandler()
    for name in _REDIRECTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.propagate = False
    # Le niveau sqlalchemy reste a WARNING : les requetes ne sont pas journalisees
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(level)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/cinestore.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
    json_console: bool = False,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum pour la console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs à conserver
        json_console : Console en JSON (production) plutot qu'en texte colore
    """
    logger.remove()

    if json_console:
        logger.add(sys.stdout, level=log_level, serialize=True)
    else:
        logger.add(sys.stdout, level=log_level, format=_CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # partage avec les threads (bcrypt, SMTP)
    )

    _redirect_standard_logging(log_level)
    logger.debug("Logging configuré", log_file=str(log_file), json_console=json_console)
