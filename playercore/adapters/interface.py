"""
Interface console integree.

Annonce le contenu de la playlist puis attend qu'on lui demande de
s'arreter (Ctrl-C, SIGHUP...). Le drapeau die est consulte a chaque
intervalle de scrutation.
"""

import time

from loguru import logger

from playercore.config import Settings
from playercore.core.entities.root_context import RootContext
from playercore.core.entities.stop_flag import StopFlag
from playercore.core.ports.subsystems import IInterface


class ConsoleInterface(IInterface):
    """
    Args :
        context : Contexte racine (scelle au moment du lancement)
        poll_interval : Intervalle de scrutation du drapeau die, en secondes
    """

    def __init__(self, context: RootContext, poll_interval: float = 0.1) -> None:
        self._context = context
        self._poll_interval = poll_interval
        self.die = StopFlag()

    @classmethod
    def create(cls, context: RootContext, settings: Settings) -> "ConsoleInterface":
        """Fabrique enregistree dans la banque de modules."""
        return cls(context, poll_interval=settings.interface_poll_interval)

    def run(self) -> None:
        context = self._context
        items = context.playlist.items if context.playlist is not None else ()
        logger.info(f"Interface console: {len(items)} entree(s) dans la playlist")
        for index, item in enumerate(items, start=1):
            logger.info(f"  {index}. {item}")
        logger.debug(
            f"audio={'on' if context.audio_enabled else 'off'} "
            f"video={'on' if context.video_enabled else 'off'} "
            f"canaux={'on' if context.channels_enabled else 'off'}"
        )

        while not self.die.is_set():
            time.sleep(self._poll_interval)

        logger.info("Interface console: arret demande")

    def destroy(self) -> None:
        logger.debug("Interface console detruite")
