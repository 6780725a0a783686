"""
Adaptateur du puits de diagnostics base sur loguru.

Les messages de diagnostic passent par loguru (console coloree + fichier
JSON avec rotation, voir logging_config). Les textes destines directement a
l'utilisateur (usage, aide, version) sont imprimes sur stdout via une
Console Rich.
"""

import errno
from collections.abc import Sequence
from typing import Optional

from loguru import logger
from rich.console import Console

from playercore.config import Settings
from playercore.core.ports.subsystems import IMessageSink, SubsystemError
from playercore.logging_config import configure_logging


class LoguruMessageSink(IMessageSink):
    """
    Puits de diagnostics: loguru pour les messages, Rich pour le texte immediat.

    Args :
        handler_ids : Handlers loguru possedes par ce puits (retires a la destruction)
        console : Console Rich pour le texte immediat (defaut: stdout)
    """

    def __init__(
        self,
        handler_ids: Sequence[int] = (),
        console: Optional[Console] = None,
    ) -> None:
        self._handler_ids = list(handler_ids)
        self._console = console or Console(highlight=False, soft_wrap=True)
        self._warning_level = 0
        self._destroyed = False

    @classmethod
    def create(cls, settings: Settings) -> "LoguruMessageSink":
        """
        Configure loguru et cree le puits.

        Leve :
            SubsystemError : si le fichier de log ne peut pas etre ouvert,
                             avec l'errno de l'erreur systeme
                             (EINVAL pour un niveau ou une rotation invalide)
        """
        try:
            handler_ids = configure_logging(
                log_level=settings.log_level,
                log_file=settings.log_file,
                rotation_size=settings.log_rotation_size,
                retention_count=settings.log_retention_count,
            )
        except OSError as e:
            raise SubsystemError(
                f"cannot open log file {settings.log_file}: {e.strerror or e}",
                code=e.errno or errno.EIO,
            ) from e
        except ValueError as e:
            raise SubsystemError(f"invalid logging configuration: {e}", code=errno.EINVAL) from e
        return cls(handler_ids)

    @property
    def warning_level(self) -> int:
        return self._warning_level

    def msg(self, text: str) -> None:
        logger.opt(depth=1).info(text)

    def msg_imm(self, text: str) -> None:
        self._console.print(text, markup=False, highlight=False)

    def err(self, text: str) -> None:
        logger.opt(depth=1).error(text)

    def err_imm(self, text: str) -> None:
        # Appele depuis un gestionnaire de signal: pas d'attente sur la file du handler fichier
        logger.opt(depth=1).critical(text)

    def warn(self, level: int, text: str) -> None:
        if level <= self._warning_level:
            logger.opt(depth=1).warning(text)

    def set_warning_level(self, level: int) -> None:
        self._warning_level = max(level, 0)

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        logger.complete()
        for handler_id in self._handler_ids:
            logger.remove(handler_id)
        self._handler_ids.clear()
