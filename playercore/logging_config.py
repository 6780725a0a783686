"""
Configuration du logging de l'application via loguru.

Fournit un logging structure avec :
- Sortie console : lisible par l'humain, coloree, pour la surveillance en temps reel
- Sortie fichier : serialisee en JSON, avec rotation, pour l'analyse historique
"""

import sys
from pathlib import Path

from loguru import logger


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/playercore.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> list[int]:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB", "1 GB")
        retention_count : Nombre de fichiers rotatifs a conserver

    Retourne :
        Les identifiants des handlers ajoutes, pour pouvoir les retirer a la fermeture

    Leve :
        OSError : si le repertoire ou le fichier de log ne peut pas etre ouvert
        ValueError : niveau de log ou taille de rotation invalide
    """
    # Supprime le handler par defaut
    logger.remove()
    handler_ids: list[int] = []

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        # Handler console - lisible par l'humain
        handler_ids.append(
            logger.add(
                sys.stderr,
                level=log_level,
                format=(
                    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                    "<level>{level: <8}</level> | "
                    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                    "<level>{message}</level>"
                ),
                colorize=True,
            )
        )

        # Handler fichier - JSON pour l'analyse
        handler_ids.append(
            logger.add(
                log_file,
                level="DEBUG",  # Capture tous les niveaux (sondage CPU et transitions en DEBUG)
                format="{message}",
                serialize=True,  # Sortie JSON
                rotation=rotation_size,
                retention=retention_count,
                compression="zip",
                enqueue=True,  # Thread-safe
            )
        )
    except (OSError, ValueError):
        # Retour au handler stderr par defaut: le diagnostic d'echec doit rester visible
        for handler_id in handler_ids:
            logger.remove(handler_id)
        logger.add(sys.stderr)
        raise

    logger.debug("Logging configure", log_file=str(log_file), rotation=rotation_size)
    return handler_ids
