"""
Playlist en memoire.

Conteneur ordonne des specifications d'entree (noms de fichiers, URI)
collectees depuis les arguments non-options. Il est cree avant l'interface
et detruit apres elle.
"""

import errno
import threading
from collections.abc import Sequence

from loguru import logger

from playercore.core.ports.subsystems import IPlaylist, SubsystemError
from playercore.utils.constants import PLAYLIST_END


class Playlist(IPlaylist):
    """Liste ordonnee, protegee par un verrou car lue par l'interface."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: list[str] = []
        self._destroyed = False

    def add(self, position: int, item: str) -> None:
        """
        Insere une entree a une position, ou en fin avec PLAYLIST_END.

        Leve :
            SubsystemError : position negative autre que PLAYLIST_END, ou
                             playlist deja detruite
        """
        with self._lock:
            if self._destroyed:
                raise SubsystemError("playlist already destroyed", code=errno.EINVAL)
            if position == PLAYLIST_END or position >= len(self._items):
                self._items.append(item)
            elif position < 0:
                raise SubsystemError(f"invalid playlist position {position}", code=errno.EINVAL)
            else:
                self._items.insert(position, item)
        logger.debug(f"Playlist: ajout de {item}")

    @property
    def items(self) -> Sequence[str]:
        with self._lock:
            return tuple(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def destroy(self) -> None:
        with self._lock:
            self._items.clear()
            self._destroyed = True
