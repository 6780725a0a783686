"""Initialisation et nettoyage specifiques a l'hote."""

import faulthandler
import platform

from loguru import logger

from playercore.core.ports.subsystems import IHostPlatform


class HostPlatform(IHostPlatform):
    """
    Encadre la session: traces faulthandler en cas de crash dur.

    Si faulthandler etait deja actif (lance avec -X faulthandler, ou sous
    pytest), il est laisse tel quel a la fin.
    """

    def __init__(self) -> None:
        self._owns_faulthandler = False

    def init(self) -> None:
        logger.debug(
            f"Hote: {platform.system()} {platform.release()} ({platform.machine()}), "
            f"Python {platform.python_version()}"
        )
        if faulthandler.is_enabled():
            return
        try:
            faulthandler.enable()
        except (OSError, ValueError) as e:
            # stderr sans descripteur de fichier (sortie capturee)
            logger.debug(f"faulthandler indisponible: {e}")
            return
        self._owns_faulthandler = True

    def end(self) -> None:
        if self._owns_faulthandler:
            faulthandler.disable()
            self._owns_faulthandler = False
