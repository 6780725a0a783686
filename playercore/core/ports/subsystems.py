"""
Interfaces ports pour les sous-systemes pilotes par l'orchestrateur.

L'orchestrateur ne connait des sous-systemes que ces contrats etroits:
creation, destruction, et pour l'interface "tourner jusqu'a ce qu'on lui
demande d'arreter". Les implementations concretes vivent dans adapters/.

Toute creation qui echoue leve SubsystemError; aucune couche basse ne
termine le processus elle-meme.
"""

from __future__ import annotations

import errno
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from playercore.core.entities.root_context import RootContext
    from playercore.core.entities.stop_flag import StopFlag


class SubsystemError(Exception):
    """
    Echec de creation ou d'utilisation d'un sous-systeme.

    Attributes:
        code: Code d'erreur (errno) propage comme statut de sortie
              quand l'echec est fatal.
    """

    def __init__(self, message: str, code: int = errno.EIO) -> None:
        super().__init__(message)
        self.code = code


class IMessageSink(ABC):
    """
    Puits de diagnostics du processus.

    Doit exister avant tout autre sous-systeme: c'est par lui que les
    erreurs sont annoncees.
    """

    @abstractmethod
    def msg(self, text: str) -> None:
        """Message d'information."""
        ...

    @abstractmethod
    def msg_imm(self, text: str) -> None:
        """Texte affiche immediatement a l'utilisateur (aide, version)."""
        ...

    @abstractmethod
    def err(self, text: str) -> None:
        """Message d'erreur."""
        ...

    @abstractmethod
    def err_imm(self, text: str) -> None:
        """Message d'erreur vide immediatement; appelable depuis un gestionnaire de signal."""
        ...

    @abstractmethod
    def warn(self, level: int, text: str) -> None:
        """Avertissement emis seulement si level <= niveau d'avertissement courant."""
        ...

    @abstractmethod
    def set_warning_level(self, level: int) -> None:
        """Fixe le niveau d'avertissement (issu de -v)."""
        ...

    @abstractmethod
    def destroy(self) -> None:
        """Vide et ferme le puits."""
        ...


class IHostPlatform(ABC):
    """Initialisation et nettoyage specifiques a l'hote."""

    @abstractmethod
    def init(self) -> None:
        ...

    @abstractmethod
    def end(self) -> None:
        ...


class IPlaylist(ABC):
    """Sequence ordonnee de specifications d'entree (fichiers, URI)."""

    @abstractmethod
    def add(self, position: int, item: str) -> None:
        """
        Insere une entree.

        Args :
            position : Index d'insertion, ou PLAYLIST_END pour ajouter en fin
            item : Nom de fichier ou URI
        """
        ...

    @property
    @abstractmethod
    def items(self) -> Sequence[str]:
        ...

    @abstractmethod
    def destroy(self) -> None:
        ...


class IModuleBank(ABC):
    """Registre des modules disponibles, indexes par (type, nom)."""

    @abstractmethod
    def init(self) -> None:
        ...

    @abstractmethod
    def find(self, kind: str, name: str) -> Callable[..., Any]:
        """Retourne la fabrique du module, leve SubsystemError si absent."""
        ...

    @abstractmethod
    def end(self) -> None:
        ...


class IOutputBank(ABC):
    """Registre des sorties (audio ou video) vivantes; vide a la creation."""

    @abstractmethod
    def init(self) -> None:
        ...

    @abstractmethod
    def end(self) -> None:
        ...


class IChannelNetwork(ABC):
    """Sous-systeme optionnel de gestion des canaux reseau."""

    @abstractmethod
    def join(self, channel: int) -> None:
        """Rejoint un canal; leve SubsystemError en cas d'echec."""
        ...

    @abstractmethod
    def destroy(self) -> None:
        ...


class IInterface(ABC):
    """
    Interface utilisateur: l'unique sous-systeme qui tourne longtemps.

    run() bloque jusqu'a ce que die soit leve, par l'interface elle-meme ou
    par le controleur d'annulation. L'annulation est cooperative: run() doit
    consulter die a intervalles raisonnables.
    """

    die: StopFlag

    @abstractmethod
    def run(self) -> None:
        ...

    @abstractmethod
    def destroy(self) -> None:
        ...


class ISubsystemFactory(ABC):
    """
    Fabrique de tous les sous-systemes, injectee dans l'orchestrateur.

    Chaque methode create_* leve SubsystemError en cas d'echec.
    """

    @abstractmethod
    def create_sink(self) -> IMessageSink:
        ...

    @abstractmethod
    def create_host(self) -> IHostPlatform:
        ...

    @abstractmethod
    def create_playlist(self, context: RootContext) -> IPlaylist:
        ...

    @abstractmethod
    def create_module_bank(self, context: RootContext) -> IModuleBank:
        ...

    @abstractmethod
    def create_aout_bank(self, context: RootContext) -> IOutputBank:
        ...

    @abstractmethod
    def create_vout_bank(self, context: RootContext) -> IOutputBank:
        ...

    @abstractmethod
    def create_channel_network(self, context: RootContext) -> IChannelNetwork:
        ...

    @abstractmethod
    def create_interface(self, context: RootContext) -> IInterface:
        ...
